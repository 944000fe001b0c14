"""Puzzle descriptor codec.

A descriptor is the byte string

    width | height | ball1x | ball1y | ball2x | ball2y | ...

(one byte each, arena coordinates 0-based), scrambled with obfuscate_bitmap
and hex-encoded. It is the only thing needed to rebuild a puzzle's solution.
"""

from __future__ import annotations

import hashlib
from typing import NamedTuple

import numpy as np

from game.blackbox_params import BlackBoxParams
from game.errors import MalformedDescriptor


class PuzzleDescriptor(NamedTuple):
    """Decoded descriptor: arena size and 0-based ball coordinates."""

    width: int
    height: int
    markers: tuple[tuple[int, int], ...]

    @property
    def marker_count(self) -> int:
        return len(self.markers)


def obfuscate_bitmap(data: bytes, decode: bool = False) -> bytes:
    """Reversibly scramble a byte string.

    The bytes are split into two halves and each half is XORed in turn with
    a SHA-1 keystream seeded from the other half. Decoding runs the two
    steps in the opposite order, so obfuscate_bitmap(obfuscate_bitmap(b), True) == b.
    """
    buf = bytearray(data)
    first = len(buf) // 2

    # (seed slice, target slice)
    steps = [
        (slice(first, len(buf)), slice(0, first)),
        (slice(0, first), slice(first, len(buf))),
    ]
    if decode:
        steps.reverse()

    for seed_slice, target_slice in steps:
        base = hashlib.sha1(bytes(buf[seed_slice]))
        target = range(len(buf))[target_slice]
        digest = b""
        counter = 0
        for j, pos in enumerate(target):
            if j % 20 == 0:
                block = base.copy()
                block.update(str(counter).encode("ascii"))
                digest = block.digest()
                counter += 1
            buf[pos] ^= digest[j % 20]

    return bytes(buf)


def bin2hex(data: bytes) -> str:
    return data.hex()


def hex2bin(text: str) -> bytes:
    try:
        return bytes.fromhex(text)
    except ValueError:
        raise MalformedDescriptor("Game description contains non-hex characters") from None


def encode_descriptor(width: int, height: int, markers) -> str:
    """Pack, scramble and hex-encode a ball layout.

    Args:
        width: Arena width
        height: Arena height
        markers: Iterable of 0-based (x, y) ball coordinates
    """
    raw = [width, height]
    for x, y in markers:
        raw.extend((x, y))
    return bin2hex(obfuscate_bitmap(bytes(raw)))


def decode_descriptor(desc: str) -> PuzzleDescriptor:
    """Reverse encode_descriptor without checking it against any parameters."""
    desc = desc.strip()
    if len(desc) < 4 or len(desc) % 4:
        raise MalformedDescriptor("Game description is wrong length")

    raw = obfuscate_bitmap(hex2bin(desc), decode=True)
    markers = tuple((raw[i], raw[i + 1]) for i in range(2, len(raw), 2))
    return PuzzleDescriptor(raw[0], raw[1], markers)


def validate_descriptor(params: BlackBoxParams, desc: str) -> PuzzleDescriptor:
    """Decode ``desc`` and check it describes a puzzle for ``params``.

    Returns:
        The decoded PuzzleDescriptor

    Raises:
        MalformedDescriptor: wrong length, mismatched size or a bad ball position
    """
    desc = (desc or "").strip()
    # hex doubles the byte count; bytes are 2 + 2 * nballs
    nballs = (len(desc) // 2 - 2) // 2
    if len(desc) < 4 or len(desc) % 4 or not params.minballs <= nballs <= params.maxballs:
        raise MalformedDescriptor("Game description is wrong length")

    decoded = decode_descriptor(desc)
    if decoded.width != params.width or decoded.height != params.height:
        raise MalformedDescriptor("Game description is corrupted")
    for x, y in decoded.markers:
        if not (0 <= x < decoded.width and 0 <= y < decoded.height):
            raise MalformedDescriptor("Game description is corrupted")
    if len(set(decoded.markers)) != len(decoded.markers):
        raise MalformedDescriptor("Game description is corrupted")

    return decoded


def generate_descriptor(params: BlackBoxParams, rng: np.random.Generator | None = None) -> str:
    """Place a random number of balls (within the allowed range) at random.

    No attempt is made to make the layout interesting or uniquely solvable.
    """
    params.validate()
    if rng is None:
        rng = np.random.default_rng()

    # maxballs may exceed the number of cells; every cell full is the most we can place
    ncells = params.width * params.height
    nballs = int(rng.integers(params.minballs, min(params.maxballs, ncells), endpoint=True))
    cells = rng.choice(ncells, size=nballs, replace=False)
    markers = [(int(c) % params.width, int(c) // params.width) for c in cells]
    return encode_descriptor(params.width, params.height, markers)
