"""Probe outcome value objects.

Every perimeter index has one ExitRecord. Its outcome is one of:

    UNFIRED      - no probe has gone in or come out here yet
    HIT          - the probe struck a ball and never came out
    REFLECTED    - the probe came back out of its own entry point
    Paired(peer) - the probe came out at perimeter index ``peer``

The WRONG and OMITTED decorations are only ever set by the layout verifier.
"""

from dataclasses import dataclass, replace


class _Terminal:
    """Singleton outcome with no payload."""

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return self.name

    def __reduce__(self):
        return self.name


UNFIRED = _Terminal("UNFIRED")
HIT = _Terminal("HIT")
REFLECTED = _Terminal("REFLECTED")


@dataclass(frozen=True)
class Paired:
    """Outcome of a probe that left the arena at another perimeter index."""

    peer: int


@dataclass(frozen=True)
class ExitRecord:
    """Outcome stored for one perimeter index, plus verifier decorations.

    Attributes:
        outcome: UNFIRED, HIT, REFLECTED or Paired(peer)
        wrong: The player fired this probe, but the guessed layout disagrees with it
        omitted: The player never fired this probe; it was added to prove the guess wrong
    """

    outcome: object = UNFIRED
    wrong: bool = False
    omitted: bool = False

    @property
    def fired(self) -> bool:
        return self.outcome is not UNFIRED

    @property
    def is_terminal(self) -> bool:
        """True for HIT and REFLECTED (the probe has no exit of its own)."""
        return self.outcome is HIT or self.outcome is REFLECTED

    @property
    def peer(self) -> int | None:
        if isinstance(self.outcome, Paired):
            return self.outcome.peer
        return None

    def with_flags(self, *, wrong: bool | None = None, omitted: bool | None = None) -> "ExitRecord":
        changes = {}
        if wrong is not None:
            changes["wrong"] = wrong
        if omitted is not None:
            changes["omitted"] = omitted
        return replace(self, **changes)


EMPTY_EXIT = ExitRecord()
