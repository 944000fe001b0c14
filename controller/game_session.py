"""Puzzle session management for Black Box.

Manages a single puzzle's lifecycle including descriptor generation, the
current state snapshot, and seed management.
"""

import hashlib
import time
from typing import Callable

import numpy as np

from game.blackbox_game import BlackBoxGame
from game.blackbox_params import BlackBoxParams
from game.descriptor import generate_descriptor
from game.errors import BlackBoxError
from game.formatters import MoveFormatter


class PuzzleSession:
    """Manages a single puzzle's lifecycle (descriptor, current snapshot, moves)."""

    def __init__(
        self,
        params: BlackBoxParams | None = None,
        desc: str | None = None,
        seed: int | None = None,
        status_reporter: Callable[[str], None] | None = None,
        move_listener: Callable[[int, dict], None] | None = None,
    ):
        """Initialize a puzzle session.

        Args:
            params: Puzzle parameters (default: 8x8, 5 balls)
            desc: Descriptor of the puzzle to play (generated from seed if None)
            seed: Random seed for puzzle generation (auto-generated if None)
            status_reporter: Optional callback for status messages
            move_listener: Optional callback(move_number, action_dict) for accepted moves

        Raises:
            InvalidParameters: params cannot describe a puzzle
            MalformedDescriptor: desc does not match params
        """
        self.params = params if params is not None else BlackBoxParams()
        self.params.validate()
        self._status_reporter = status_reporter
        self._move_listener = move_listener

        if desc is None and seed is None:
            seed = int(time.time())
        self.current_seed = seed

        self.game = None
        self.moves: list[str] = []
        self.puzzles_played = 0

        self._start(desc)

    def _start(self, desc):
        if desc is None:
            self._report(f"-- Setting Seed: {self.current_seed}")
            desc = generate_descriptor(self.params, np.random.default_rng(self.current_seed))
        self.game = BlackBoxGame(self.params, desc)
        self.moves = []
        self._report(f"** New puzzle: {self.params.describe()} **")

    def _generate_next_seed(self):
        """Generate the next seed deterministically from the current seed using hash.

        Returns:
            int: New seed value
        """
        hash_obj = hashlib.sha256(str(self.current_seed).encode())
        new_seed = int.from_bytes(hash_obj.digest()[:8], byteorder="big")
        return new_seed % (2**32)

    def new_puzzle(self):
        """Discard the current puzzle and generate the next one."""
        self.puzzles_played += 1
        if self.current_seed is None:
            self.current_seed = int(time.time())
        else:
            self.current_seed = self._generate_next_seed()
        self._start(None)

    def apply_move(self, move: str) -> bool:
        """Apply a move to the current puzzle.

        Returns:
            bool: True if the move was accepted. A rejected move leaves the
            current snapshot untouched.
        """
        try:
            action_dict = MoveFormatter.move_to_action_dict(move)
            self.game = self.game.apply_action(action_dict)
        except BlackBoxError as e:
            self._report(f"Move {move.strip()!r} rejected: {e}")
            return False

        normalised = MoveFormatter.action_to_move(action_dict)
        self.moves.append(normalised)
        if self._move_listener is not None:
            self._move_listener(len(self.moves), action_dict)
        if self.game.is_revealed() and action_dict["action"] != "SOLVE":
            self._report(self.game.status_text())
        return True

    def replay(self, moves) -> int:
        """Apply moves in order, stopping at the first rejected one.

        Returns:
            int: Number of moves applied
        """
        applied = 0
        for move in moves:
            if not self.apply_move(move):
                break
            applied += 1
        return applied

    def get_seed(self):
        """Get the current seed.

        Returns:
            int or None: Current seed value (None for a given descriptor without a seed)
        """
        return self.current_seed

    def is_finished(self):
        return self.game.is_revealed()

    def set_move_listener(self, listener: Callable[[int, dict], None] | None) -> None:
        """Set or update the callback notified of each accepted move."""
        self._move_listener = listener

    def _report(self, message: str | None) -> None:
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
        else:
            print(message)
