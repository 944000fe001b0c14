"""Move format converters for Black Box."""

from .move_formatter import MoveFormatter
from .transcript_formatter import TranscriptFormatter

__all__ = ["MoveFormatter", "TranscriptFormatter"]
