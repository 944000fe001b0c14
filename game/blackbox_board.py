import numpy as np

from game.coordinates import grid_to_perimeter, is_arena, perimeter_count, perimeter_to_grid
from game.probe_outcome import EMPTY_EXIT, HIT, REFLECTED, UNFIRED, ExitRecord, Paired


class BlackBoxBoard:
    # The board is a (H+2) x (W+2) grid; the arena sits inside a one-cell
    # firing range. Indexing is always [y, x] into the numpy arrays, but the
    # public methods take (x, y) to match the move notation.
    #
    # 5x3 arena, perimeter indices shown around the edge:
    #
    #        0  1  2  3  4
    #    15  .  .  .  .  .  5
    #    14  .  .  .  .  .  6
    #    13  .  .  .  .  .  7
    #       12 11 10  9  8

    # ==================================================================================
    # ARENA STATE STRUCTURE (3D bool array, shape: 3 x (H+2) x (W+2))
    # ==================================================================================
    #   Layer 0: True balls   (the hidden layout)
    #   Layer 1: Guessed balls (the player's marks)
    #   Layer 2: Locks        (cells the player froze against toggling)
    # Only the arena part of each layer is ever set.
    # ==================================================================================
    TRUE_LAYER = 0
    GUESS_LAYER = 1
    LOCK_LAYER = 2
    NUM_LAYERS = 3

    # ==================================================================================
    # PERIMETER STATE
    # ==================================================================================
    #   probe_ids: int array, shape (H+2) x (W+2). Non-zero only on perimeter cells
    #              whose probe paired with another cell; both ends hold the same id.
    #   exits:     list of ExitRecord, one per perimeter index.
    #   next_probe_id: next id to hand out; ids start at 1 and are never reused.
    # ==================================================================================

    def __init__(self, width=None, height=None, markers=(), clone=None):
        """Initialize a Black Box board.

        Args:
            width: Arena width
            height: Arena height
            markers: 0-based (x, y) coordinates of the true balls
            clone: BlackBoxBoard instance to copy from (all other args ignored)
        """
        if clone is not None:
            self.width = clone.width
            self.height = clone.height
            self.state = np.copy(clone.state)
            self.probe_ids = np.copy(clone.probe_ids)
            self.exits = list(clone.exits)
            self.next_probe_id = clone.next_probe_id
            return

        self.width = width
        self.height = height
        shape = (self.height + 2, self.width + 2)
        self.state = np.zeros((self.NUM_LAYERS,) + shape, dtype=bool)
        self.probe_ids = np.zeros(shape, dtype=np.int32)
        self.exits = [EMPTY_EXIT] * perimeter_count(self.width, self.height)
        self.next_probe_id = 1

        for x, y in markers:
            self.state[self.TRUE_LAYER, y + 1, x + 1] = True

    def copy(self):
        return BlackBoxBoard(clone=self)

    # ------------------------------------------------------------------
    # Coordinates

    @property
    def nlasers(self):
        return len(self.exits)

    def perimeter_to_grid(self, index):
        return perimeter_to_grid(self.width, self.height, index)

    def grid_to_perimeter(self, x, y):
        return grid_to_perimeter(self.width, self.height, x, y)

    def is_arena(self, x, y):
        return is_arena(self.width, self.height, x, y)

    # ------------------------------------------------------------------
    # Arena flags

    def is_ball(self, x, y):
        """True if a real ball sits at grid (x, y). Cells off the arena never hold one."""
        if not self.is_arena(x, y):
            return False
        return bool(self.state[self.TRUE_LAYER, y, x])

    def is_guess(self, x, y):
        return bool(self.state[self.GUESS_LAYER, y, x])

    def is_locked(self, x, y):
        return bool(self.state[self.LOCK_LAYER, y, x])

    def toggle_guess(self, x, y):
        self.state[self.GUESS_LAYER, y, x] = not self.state[self.GUESS_LAYER, y, x]

    def set_lock(self, x, y, locked):
        self.state[self.LOCK_LAYER, y, x] = locked

    def toggle_lock(self, x, y):
        self.state[self.LOCK_LAYER, y, x] = not self.state[self.LOCK_LAYER, y, x]

    def arena(self, layer):
        """Return a view of one state layer restricted to the arena."""
        return self.state[layer, 1 : self.height + 1, 1 : self.width + 1]

    def true_count(self):
        return int(self.arena(self.TRUE_LAYER).sum())

    def use_guesses_as_truth(self):
        """Replace the true layout with the guessed one."""
        self.state[self.TRUE_LAYER] = self.state[self.GUESS_LAYER]

    # ------------------------------------------------------------------
    # Perimeter

    def is_fired(self, index):
        return self.exits[index].fired

    def clear_probes(self):
        """Forget every probe result, keeping the arena as it is."""
        self.probe_ids[:] = 0
        self.exits = [EMPTY_EXIT] * self.nlasers

    def record_terminal(self, index, outcome):
        """Record a HIT or REFLECTED result for the probe fired from ``index``."""
        assert outcome is HIT or outcome is REFLECTED
        x, y, _ = self.perimeter_to_grid(index)
        self.probe_ids[y, x] = 0
        self.exits[index] = ExitRecord(outcome)

    def record_pairing(self, entry, exit_index):
        """Link two perimeter indices with a freshly allocated probe id.

        Returns:
            int: The probe id written to both ends
        """
        probe_id = self.next_probe_id
        self.next_probe_id += 1

        ex, ey, _ = self.perimeter_to_grid(entry)
        xx, xy, _ = self.perimeter_to_grid(exit_index)
        self.probe_ids[ey, ex] = probe_id
        self.probe_ids[xy, xx] = probe_id
        self.exits[entry] = ExitRecord(Paired(exit_index))
        self.exits[exit_index] = ExitRecord(Paired(entry))
        return probe_id

    def perimeter_mark(self, index):
        """What a renderer shows on a perimeter cell.

        Returns:
            None if nothing was fired through it, HIT or REFLECTED for a
            terminal probe, else the int probe id shared with its pair.
        """
        record = self.exits[index]
        if record.outcome is UNFIRED:
            return None
        if record.is_terminal:
            return record.outcome
        x, y, _ = self.perimeter_to_grid(index)
        return int(self.probe_ids[y, x])

    def __eq__(self, other):
        if not isinstance(other, BlackBoxBoard):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.state, other.state)
            and np.array_equal(self.probe_ids, other.probe_ids)
            and self.exits == other.exits
            and self.next_probe_id == other.next_probe_id
        )

    __hash__ = None
