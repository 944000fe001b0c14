"""Puzzle parameters for Black Box."""

from __future__ import annotations

import re
from dataclasses import dataclass

from game.constants import DEFAULT_BALLS, DEFAULT_HEIGHT, DEFAULT_WIDTH, MAX_GRID_SIZE
from game.errors import InvalidParameters

_PARAM_TOKEN = re.compile(r"([whmM])(\d*)")


@dataclass(frozen=True)
class BlackBoxParams:
    """Size of the arena and the permitted number of balls.

    Attributes:
        width: Arena width in cells
        height: Arena height in cells
        minballs: Fewest balls a puzzle may hide (and fewest guesses accepted on submit)
        maxballs: Most balls a puzzle may hide (and most guesses accepted on submit)
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    minballs: int = DEFAULT_BALLS
    maxballs: int = DEFAULT_BALLS

    @classmethod
    def decode(cls, text: str) -> BlackBoxParams:
        """Parse the compact form produced by ``encode`` (e.g. ``w8h8m3M6``).

        Parsing starts from the defaults; unknown characters are ignored and
        a letter without digits sets its field to 0.
        """
        fields = {"w": DEFAULT_WIDTH, "h": DEFAULT_HEIGHT, "m": DEFAULT_BALLS, "M": DEFAULT_BALLS}
        for match in _PARAM_TOKEN.finditer(text):
            key, digits = match.groups()
            fields[key] = int(digits) if digits else 0
        return cls(width=fields["w"], height=fields["h"], minballs=fields["m"], maxballs=fields["M"])

    @classmethod
    def from_ball_range(cls, width: int, height: int, balls: str) -> BlackBoxParams:
        """Build params from a ball count given as ``"n"`` or ``"a-b"``."""
        text = str(balls).strip()
        match = re.fullmatch(r"(\d+)\s*-\s*(\d+)", text)
        if match:
            return cls(width, height, int(match.group(1)), int(match.group(2)))
        try:
            count = int(text)
        except ValueError:
            raise InvalidParameters(f"Invalid ball count: {balls!r}") from None
        return cls(width, height, count, count)

    def encode(self) -> str:
        return f"w{self.width}h{self.height}m{self.minballs}M{self.maxballs}"

    def validate(self) -> None:
        """Raise InvalidParameters if these parameters cannot produce a puzzle."""
        if self.width < 2 or self.height < 2:
            raise InvalidParameters("Grid must be at least 2 wide and 2 high")
        if self.width > MAX_GRID_SIZE or self.height > MAX_GRID_SIZE:
            raise InvalidParameters(f"Grid must be < {MAX_GRID_SIZE} in each direction")
        if self.minballs > self.maxballs:
            raise InvalidParameters("Min. balls must be <= max. balls")
        if self.minballs >= self.width * self.height:
            raise InvalidParameters("Too many balls for grid")

    def describe(self) -> str:
        if self.minballs == self.maxballs:
            return f"{self.width}x{self.height}, {self.minballs} balls"
        return f"{self.width}x{self.height}, {self.minballs}-{self.maxballs} balls"

    @property
    def perimeter_count(self) -> int:
        return 2 * (self.width + self.height)
