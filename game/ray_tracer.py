"""Probe tracing for Black Box.

trace_probe() is pure: it follows a probe through the arena and reports
where it ends up without touching the board. fire_probe() traces and then
records the result on the board (and is the only function here with side
effects).

Rules, relative to the probe's direction of travel:
    - a ball directly ahead stops the probe (HIT)
    - a ball ahead-left turns the probe 90 degrees clockwise
    - a ball ahead-right turns the probe 90 degrees counter-clockwise
    - otherwise the probe moves one cell forward

On the very first step, still standing on the firing range, a ball ahead is
an instant HIT and a ball ahead-left or ahead-right is an instant
REFLECTED. When both apply the HIT wins.
"""

import logging
from typing import NamedTuple

from game.constants import LOOK_FORWARD, LOOK_LEFT, LOOK_RIGHT, OFFSETS, Direction
from game.errors import IllegalMove
from game.probe_outcome import HIT, REFLECTED

logger = logging.getLogger(__name__)


class TraceResult(NamedTuple):
    """Where a probe ended up.

    Attributes:
        outcome: HIT, REFLECTED, or None when the probe left at ``exit_index``
        exit_index: Perimeter index the probe left from (None for HIT/REFLECTED)
        path: Grid cells visited, starting with the entry cell
    """

    outcome: object
    exit_index: int | None
    path: tuple


def _step(x, y, direction):
    dx, dy = OFFSETS[direction % 4]
    return x + dx, y + dy


def ball_in_view(board, x, y, direction, look):
    """Check for a ball ahead of (x, y), or ahead-left / ahead-right of it.

    Args:
        look: LOOK_LEFT, LOOK_FORWARD or LOOK_RIGHT
    """
    x, y = _step(x, y, direction)
    if look != LOOK_FORWARD:
        x, y = _step(x, y, direction + look)
    return board.is_ball(x, y)


def trace_probe(board, index):
    """Follow the probe fired from perimeter ``index`` without recording it.

    Raises:
        IllegalMove: ``index`` is not a perimeter index of this board
    """
    cell = board.perimeter_to_grid(index)
    if cell is None:
        raise IllegalMove(f"No firing position {index} on a {board.width}x{board.height} board")

    x, y, direction = cell
    start = (x, y)
    path = [start]

    if ball_in_view(board, x, y, direction, LOOK_FORWARD):
        logger.debug("Instant hit at %s", start)
        return TraceResult(HIT, None, tuple(path))

    if ball_in_view(board, x, y, direction, LOOK_LEFT) or ball_in_view(board, x, y, direction, LOOK_RIGHT):
        logger.debug("Instant reflection at %s", start)
        return TraceResult(REFLECTED, None, tuple(path))

    x, y = _step(x, y, direction)
    path.append((x, y))

    while True:
        exit_index = board.grid_to_perimeter(x, y)
        if exit_index is not None:
            if (x, y) == start:
                logger.debug("Probe %d came back out where it went in", index)
                return TraceResult(REFLECTED, None, tuple(path))
            logger.debug("Probe %d left at %d", index, exit_index)
            return TraceResult(None, exit_index, tuple(path))

        assert not board.is_ball(x, y), f"probe {index} entered ball cell ({x}, {y})"

        if ball_in_view(board, x, y, direction, LOOK_FORWARD):
            logger.debug("Ball ahead of (%d, %d); probe %d hit", x, y, index)
            return TraceResult(HIT, None, tuple(path))

        if ball_in_view(board, x, y, direction, LOOK_LEFT):
            direction = Direction(direction).turned(1)
            continue
        if ball_in_view(board, x, y, direction, LOOK_RIGHT):
            direction = Direction(direction).turned(3)
            continue

        x, y = _step(x, y, direction)
        path.append((x, y))


def fire_probe(board, index):
    """Fire the probe at perimeter ``index`` and record its outcome on ``board``.

    Writes the entry (and exit, for a pairing) exit records and perimeter
    cells. Ball flags are never touched.

    Returns:
        TraceResult

    Raises:
        IllegalMove: the index is off the perimeter or already has a result
    """
    if not 0 <= index < board.nlasers:
        raise IllegalMove(f"No firing position {index} on a {board.width}x{board.height} board")
    if board.is_fired(index):
        raise IllegalMove(f"Probe {index} has already been fired")

    result = trace_probe(board, index)
    if result.exit_index is None:
        board.record_terminal(index, result.outcome)
    else:
        board.record_pairing(index, result.exit_index)
    return result
