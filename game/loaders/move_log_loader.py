"""Loader for Black Box move logs written by MoveLogWriter."""

from typing import Callable

from game.blackbox_params import BlackBoxParams
from game.errors import ProtocolMismatch
from game.formatters import MoveFormatter


class MoveLogLoader:
    """Loads and parses move log files."""

    def __init__(
        self,
        filename,
        status_reporter: Callable[[str], None] | None = None,
    ):
        """Initialize move log loader.

        Args:
            filename: Path to move log file
            status_reporter: Optional callback for status messages
        """
        self.filename = filename
        self._status_reporter = status_reporter

        # Detected values (set after load())
        self.params = BlackBoxParams()
        self.desc: str | None = None
        self.seed: int | None = None

    def load(self) -> list[str]:
        """Load and parse the move log.

        Returns:
            List of move strings in the order they were played
        """
        self._report(f"Loading moves from: {self.filename}")

        with open(self.filename, "r") as f:
            lines = f.readlines()

        moves = []
        for line_num, line in enumerate(lines, start=1):
            line = line.strip()
            if not line:
                continue

            if line.startswith("#"):
                self._parse_comment(line[1:].strip())
                continue

            try:
                # Round-trip through the formatter to normalise the move
                action_dict = MoveFormatter.move_to_action_dict(line)
                moves.append(MoveFormatter.action_to_move(action_dict))
            except ProtocolMismatch as e:
                self._report(f"Warning: Skipping invalid move on line {line_num}: {line} ({e})")

        self._report(f"Loaded {len(moves)} moves for {self.params.describe()}")
        return moves

    def _parse_comment(self, comment: str) -> None:
        key, sep, value = comment.partition(":")
        if not sep:
            return
        key, value = key.strip().lower(), value.strip()
        if key == "params":
            self.params = BlackBoxParams.decode(value)
        elif key == "desc":
            self.desc = value
        elif key == "seed":
            try:
                self.seed = int(value)
            except ValueError:
                self._report(f"Warning: Ignoring invalid seed {value!r}")

    def _report(self, message: str | None) -> None:
        """Report status message via callback or print."""
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
        else:
            print(message)
