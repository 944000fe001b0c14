"""Output writers for Black Box move logs.

Two formats are written:

Move log (MoveLogWriter), replayable with MoveLogLoader:
    # Params: w8h8m5M5
    # Desc: 1f0c...
    # Seed: 12345
    F0
    T3,4
    R

Transcript (TranscriptWriter), for reading:
    # Seed: 12345
    # Puzzle: 8x8, 5 balls
    #
    Move 1: {'action': 'FIRE', 'index': 0}
    Move 2: {'action': 'TOGGLE', 'x': 3, 'y': 4}
    #
    # Final state:
    # ...
"""

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from game.formatters import MoveFormatter, TranscriptFormatter


class GameWriter(ABC):
    """One output stream in one format."""

    def __init__(self, output: TextIO):
        self.output = output

    def _emit(self, *lines: str) -> None:
        for line in lines:
            self.output.write(f"{line}\n")
        self.flush()

    @abstractmethod
    def write_header(self, params, desc: str, seed: int | None = None) -> None:
        """Write the puzzle metadata (BlackBoxParams, descriptor and seed, if any)."""

    @abstractmethod
    def write_move(self, move_number: int, action_dict: dict) -> None:
        """Write one accepted move; ``move_number`` is 1-based."""

    def write_comment(self, message: str) -> None:
        pass

    def write_footer(self, game=None) -> None:
        pass

    def flush(self) -> None:
        self.output.flush()

    def close(self) -> None:
        """Close the stream, unless it is stdout/stderr."""
        if self.output in (sys.stdout, sys.stderr):
            return
        self.output.close()


class MoveLogWriter(GameWriter):
    """Writes one move string per line, under comment headers."""

    def write_header(self, params, desc: str, seed: int | None = None) -> None:
        header = [f"# Params: {params.encode()}", f"# Desc: {desc}"]
        if seed is not None:
            header.append(f"# Seed: {seed}")
        self._emit(*header)

    def write_move(self, move_number: int, action_dict: dict) -> None:
        self._emit(MoveFormatter.action_to_move(action_dict))


class TranscriptWriter(GameWriter):
    """Writes numbered action dicts, comments, and the final board."""

    def write_header(self, params, desc: str, seed: int | None = None) -> None:
        header = [] if seed is None else [f"# Seed: {seed}"]
        self._emit(*header, f"# Puzzle: {params.describe()}", "#")

    def write_move(self, move_number: int, action_dict: dict) -> None:
        self._emit(f"Move {move_number}: {TranscriptFormatter.action_to_transcript(action_dict)}")

    def write_comment(self, message: str) -> None:
        self._emit(f"# {message}")

    def write_footer(self, game=None) -> None:
        if game is None:
            return
        lines = ["#", "# Final state:"]
        # print_state hands over strings and numpy arrays; comment out every row
        game.print_state(reporter=lambda item: lines.extend(f"# {row}" for row in str(item).splitlines()))
        self._emit(*lines)
