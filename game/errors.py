"""Error types raised by the Black Box engine.

All domain errors derive from ValueError so callers that only care about
"bad input" can catch that, while the controller layer can distinguish a
corrupted descriptor from a rejected move.
"""


class BlackBoxError(ValueError):
    """Base class for all user-facing Black Box errors."""


class InvalidParameters(BlackBoxError):
    """Puzzle parameters (size, ball range) are unusable."""


class MalformedDescriptor(BlackBoxError):
    """Puzzle descriptor has the wrong length, wrong dimensions or bad markers."""


class IllegalMove(BlackBoxError):
    """Move is well-formed but violates a precondition in the current state."""


class ProtocolMismatch(BlackBoxError):
    """Move string could not be parsed."""
