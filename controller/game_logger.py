"""Move logging for Black Box.

GameLogger fans each accepted move out to any number of writers: per-puzzle
files (a replayable move log and a transcript) and an optional on-screen
transcript that lives for the whole session.
"""

import os
import sys
from typing import Callable, NamedTuple

from game.writers import GameWriter, MoveLogWriter, TranscriptWriter


class _LogKind(NamedTuple):
    label: str
    suffix: str
    writer_class: type


MOVE_LOG = _LogKind("move", "", MoveLogWriter)
TRANSCRIPT = _LogKind("transcript", "_transcript", TranscriptWriter)


class GameLogger:
    """Routes puzzle moves to a set of GameWriters."""

    def __init__(
        self,
        session,
        move_log_dir: str | None = None,
        transcript_dir: str | None = None,
        log_to_screen: bool = False,
        status_reporter: Callable[[str], None] | None = None,
    ):
        """
        Args:
            session: PuzzleSession supplying params, descriptor and seed
            move_log_dir: Where to write blackbox_<tag>.txt (None to disable)
            transcript_dir: Where to write blackbox_<tag>_transcript.txt (None to disable)
            log_to_screen: Also write a transcript to stdout
            status_reporter: Optional callback for status messages
        """
        self.session = session
        self._status_reporter = status_reporter
        self._file_targets = [
            (directory, kind)
            for directory, kind in ((move_log_dir, MOVE_LOG), (transcript_dir, TRANSCRIPT))
            if directory
        ]
        self._created_paths: list[str] = []
        self._puzzle_open = False

        self._session_writers: list[GameWriter] = []
        if log_to_screen:
            self._session_writers.append(TranscriptWriter(sys.stdout))
        self.writers: list[GameWriter] = list(self._session_writers)

    def _file_tag(self):
        seed = self.session.get_seed()
        return str(seed) if seed is not None else self.session.game.desc[:16]

    def _open_file_writer(self, directory, kind):
        path = os.path.join(directory, f"blackbox_{self._file_tag()}{kind.suffix}.txt")
        try:
            os.makedirs(directory, exist_ok=True)
            stream = open(path, "w")
        except OSError as e:
            reason = "Cannot create" if isinstance(e, PermissionError) else "Failed to create"
            print(f"Error: {reason} {kind.label} log {path}: {e}", file=sys.stderr)
            print(f"{kind.label.capitalize()} logging to file disabled for this puzzle", file=sys.stderr)
            return None

        self._created_paths.append(path)
        self._report(f"Logging {kind.label}s to {path}")
        return kind.writer_class(stream)

    def _drop_file_writers(self):
        for writer in self.writers:
            if writer not in self._session_writers:
                writer.close()
        self.writers = [w for w in self.writers if w in self._session_writers]

    def get_log_filenames(self):
        """Paths of every log file opened so far, oldest first."""
        return list(self._created_paths)

    def add_writer(self, writer: GameWriter) -> None:
        self.writers.append(writer)

    def remove_writer(self, writer: GameWriter) -> None:
        if writer in self.writers:
            self.writers.remove(writer)

    def start_log(self) -> None:
        """Open file writers for the session's current puzzle and write headers everywhere."""
        if self._puzzle_open:
            self._drop_file_writers()

        for directory, kind in self._file_targets:
            writer = self._open_file_writer(directory, kind)
            if writer is not None:
                self.writers.append(writer)

        params, desc, seed = self.session.params, self.session.game.desc, self.session.get_seed()
        for writer in self.writers:
            writer.write_header(params, desc, seed)
        self._puzzle_open = True

    def end_log(self, game=None) -> None:
        """Write footers (final state of ``game`` if given) and close the puzzle's files."""
        for writer in self.writers:
            writer.write_footer(game)
        self._drop_file_writers()
        self._puzzle_open = False

    def log_move(self, move_number: int, action_dict: dict) -> None:
        for writer in self.writers:
            writer.write_move(move_number, action_dict)

    def log_comment(self, message: str) -> None:
        for writer in self.writers:
            writer.write_comment(message)

    def _report(self, message: str) -> None:
        if self._status_reporter is not None:
            self._status_reporter(message)
        else:
            print(message)
