import logging

import numpy as np

from .blackbox_board import BlackBoxBoard
from .blackbox_params import BlackBoxParams
from .constants import ArenaFlag, PuzzlePhase
from .descriptor import validate_descriptor
from .errors import IllegalMove
from .formatters import MoveFormatter
from .layout_verifier import check_guesses
from .ray_tracer import fire_probe

logger = logging.getLogger(__name__)


# Rules of the original puzzle: https://en.wikipedia.org/wiki/Black_Box_(game)
# Every accepted move returns a new BlackBoxGame; the receiver is never changed.


class BlackBoxGame:
    def __init__(self, params=None, desc=None, clone=None):
        """Create a puzzle from a descriptor, or copy an existing one.

        Args:
            params: BlackBoxParams (default: 8x8, 5 balls)
            desc: Hex descriptor of the hidden layout
            clone: BlackBoxGame to copy (all other args ignored)

        Raises:
            InvalidParameters: params cannot describe a puzzle
            MalformedDescriptor: desc does not match params
        """
        if clone is not None:
            self.params = clone.params
            self.desc = clone.desc
            self.nballs = clone.nballs
            self.board = BlackBoxBoard(clone=clone.board)
            self.phase = clone.phase
            self.nguesses = clone.nguesses
            self.verification = clone.verification
            self.solved_by_request = clone.solved_by_request
            return

        self.params = params if params is not None else BlackBoxParams()
        self.params.validate()
        decoded = validate_descriptor(self.params, desc)

        self.desc = desc.strip()
        self.nballs = decoded.marker_count
        self.board = BlackBoxBoard(decoded.width, decoded.height, decoded.markers)
        self.phase = PuzzlePhase.PLACING
        self.nguesses = 0
        # Set by a successful submit
        self.verification = None
        # Set by the "S" move
        self.solved_by_request = False

    def __deepcopy__(self, memo):
        return BlackBoxGame(clone=self)

    @property
    def width(self):
        return self.board.width

    @property
    def height(self):
        return self.board.height

    @property
    def right(self):
        return self.verification.right if self.verification else 0

    @property
    def wrong(self):
        return self.verification.wrong if self.verification else 0

    @property
    def missed(self):
        return self.verification.missed if self.verification else 0

    def is_revealed(self):
        return self.phase is PuzzlePhase.REVEALED

    def can_submit(self):
        """True when a submit ("R") would currently be accepted."""
        return (
            self.phase is PuzzlePhase.PLACING
            and self.params.minballs <= self.nguesses <= self.params.maxballs
        )

    @staticmethod
    def solve_move():
        return "S"

    # ------------------------------------------------------------------
    # Moves

    def execute_move(self, move):
        """Apply a move string and return the resulting snapshot.

        Raises:
            ProtocolMismatch: the move could not be parsed
            IllegalMove: the move is not allowed in this state
        """
        return self.apply_action(MoveFormatter.move_to_action_dict(move))

    def apply_action(self, action_dict):
        """Apply a parsed move (see MoveFormatter) and return the resulting snapshot.

        Raises:
            ProtocolMismatch: unknown action, or missing or non-integer fields
            IllegalMove: the move is not allowed in this state
        """
        # Normalise through the move notation: rejects unknown actions and non-integer coordinates
        action_dict = MoveFormatter.move_to_action_dict(MoveFormatter.action_to_move(action_dict))
        action = action_dict["action"]

        if action == "SOLVE":
            ret = BlackBoxGame(clone=self)
            ret.phase = PuzzlePhase.REVEALED
            ret.solved_by_request = True
            return ret

        if self.phase is PuzzlePhase.REVEALED:
            raise IllegalMove("The puzzle has already been revealed")

        handlers = {
            "TOGGLE": BlackBoxGame._toggle_guess,
            "LOCK": BlackBoxGame._toggle_lock,
            "LOCK_COLUMN": BlackBoxGame._toggle_column_lock,
            "LOCK_ROW": BlackBoxGame._toggle_row_lock,
            "FIRE": BlackBoxGame._fire,
            "SUBMIT": BlackBoxGame._submit,
        }
        # Work on a copy so a rejected move leaves nothing behind
        ret = BlackBoxGame(clone=self)
        handlers[action](ret, action_dict)
        return ret

    def _require_arena(self, x, y):
        if not self.board.is_arena(x, y):
            raise IllegalMove(f"({x}, {y}) is not an arena cell")

    def _toggle_guess(self, action_dict):
        x, y = action_dict["x"], action_dict["y"]
        self._require_arena(x, y)
        if self.board.is_locked(x, y):
            raise IllegalMove(f"Cell ({x}, {y}) is locked")
        self.nguesses += -1 if self.board.is_guess(x, y) else 1
        self.board.toggle_guess(x, y)

    def _toggle_lock(self, action_dict):
        x, y = action_dict["x"], action_dict["y"]
        self._require_arena(x, y)
        self.board.toggle_lock(x, y)

    def _toggle_cells_lock(self, cells):
        # Majority rule: if more than half are locked unlock them all, else lock them all
        cells = list(cells)
        locked = sum(self.board.is_locked(x, y) for x, y in cells)
        lock = locked <= len(cells) // 2
        for x, y in cells:
            self.board.set_lock(x, y, lock)

    def _toggle_column_lock(self, action_dict):
        x = action_dict["x"]
        if not 1 <= x <= self.width:
            raise IllegalMove(f"No column {x}")
        self._toggle_cells_lock((x, y) for y in range(1, self.height + 1))

    def _toggle_row_lock(self, action_dict):
        y = action_dict["y"]
        if not 1 <= y <= self.height:
            raise IllegalMove(f"No row {y}")
        self._toggle_cells_lock((x, y) for x in range(1, self.width + 1))

    def _fire(self, action_dict):
        fire_probe(self.board, action_dict["index"])

    def _submit(self, action_dict):
        if not self.params.minballs <= self.nguesses <= self.params.maxballs:
            raise IllegalMove(
                f"{self.nguesses} balls marked; need {self._ball_range_text()}"
            )
        self.verification = check_guesses(self.board)
        self.phase = PuzzlePhase.REVEALED
        logger.info(
            "Submitted %d guesses: %s",
            self.nguesses,
            "correct" if self.verification.equivalent else "incorrect",
        )

    # ------------------------------------------------------------------
    # Read-only views for renderers

    def arena_flags(self, x, y):
        """Return the set of ArenaFlag values on arena cell (x, y)."""
        self._require_arena(x, y)
        flags = set()
        if self.board.is_ball(x, y):
            flags.add(ArenaFlag.TRUE)
        if self.board.is_guess(x, y):
            flags.add(ArenaFlag.GUESS)
        if self.board.is_locked(x, y):
            flags.add(ArenaFlag.LOCK)
        return frozenset(flags)

    def exit_record(self, index):
        return self.board.exits[index]

    def perimeter_mark(self, index):
        return self.board.perimeter_mark(index)

    def _ball_range_text(self):
        if self.params.minballs == self.params.maxballs:
            return str(self.params.minballs)
        return f"{self.params.minballs}-{self.params.maxballs}"

    def status_text(self):
        if self.phase is PuzzlePhase.PLACING:
            return f"Balls marked: {self.nguesses} / {self._ball_range_text()}"
        if self.verification is None:
            return "Solved"
        if self.verification.equivalent:
            return "Correct!"
        return f"Right: {self.right}, wrong: {self.wrong}, missed: {self.missed}"

    def print_state(self, reporter=None):
        """Emit the arena and probe results via provided reporter.

        Arena cells show 1 for a guess, 2 for a ball (only once revealed) and
        3 for both.
        """
        if reporter is None:
            reporter = print

        guesses = self.board.arena(self.board.GUESS_LAYER).astype(np.int8)
        arena = guesses
        if self.is_revealed():
            arena = guesses + 2 * self.board.arena(self.board.TRUE_LAYER).astype(np.int8)

        reporter("---------------")
        reporter("Arena:")
        reporter(arena)
        reporter("---------------")
        reporter("Probes:")
        for index in range(self.board.nlasers):
            record = self.board.exits[index]
            if not record.fired:
                continue
            suffix = " (wrong)" if record.wrong else " (omitted)" if record.omitted else ""
            reporter(f"  {index}: {self.perimeter_mark(index)}{suffix}")
        reporter("---------------")
        reporter(self.status_text())
