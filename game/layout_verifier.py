"""Layout verification for Black Box.

A guess is accepted when it is *observationally equivalent* to the hidden
layout: every one of the 2(W+H) probes, fired or not, would come out the
same way. With five or more balls two different layouts can give identical
results for every probe, and either one counts as correct.
"""

import logging

from game.ray_tracer import fire_probe

logger = logging.getLogger(__name__)


class VerificationResult:
    """Outcome of checking a guessed layout.

    Attributes:
        equivalent: True if the guess behaves identically to the real layout
        right: Cells both guessed and holding a ball
        wrong: Cells guessed but empty
        missed: Cells holding a ball but not guessed
        mismatches: Perimeter indices where the two layouts disagree
    """

    def __init__(self, equivalent, right=0, wrong=0, missed=0, mismatches=()):
        self.equivalent = equivalent
        self.right = right
        self.wrong = wrong
        self.missed = missed
        self.mismatches = tuple(mismatches)

    def __repr__(self):
        return (
            f"VerificationResult(equivalent={self.equivalent}, right={self.right}, "
            f"wrong={self.wrong}, missed={self.missed})"
        )


def _complete_probes(board):
    """Fire every probe that has no result yet."""
    for index in range(board.nlasers):
        if not board.is_fired(index):
            fire_probe(board, index)


def build_shadow_boards(board):
    """Return (solution, guesses): cleared copies using the true and guessed balls."""
    solution = board.copy()
    solution.clear_probes()

    guesses = solution.copy()
    guesses.state[guesses.TRUE_LAYER] = guesses.state[guesses.GUESS_LAYER]
    return solution, guesses


def _inject_missing_probe(board, index, record):
    """Copy the real outcome of an unfired probe onto the player's board, marked OMITTED."""
    # the far end of an injected pairing is already written
    if not board.is_fired(index):
        if record.is_terminal:
            board.record_terminal(index, record.outcome)
        else:
            board.record_pairing(index, record.peer)
    board.exits[index] = board.exits[index].with_flags(omitted=True)


def tally(board):
    """Count (right, wrong, missed) over the arena."""
    truth = board.arena(board.TRUE_LAYER)
    guess = board.arena(board.GUESS_LAYER)
    right = int((truth & guess).sum())
    wrong = int((guess & ~truth).sum())
    missed = int((truth & ~guess).sum())
    return right, wrong, missed


def check_guesses(board):
    """Verify the guessed balls on ``board`` against the real ones.

    ``board`` is updated in place:
        - equivalent guess: the guessed balls become the true layout
        - otherwise: each disagreeing probe is flagged WRONG if the player
          fired it, or filled in and flagged OMITTED if they did not

    Returns:
        VerificationResult
    """
    solution, guesses = build_shadow_boards(board)
    _complete_probes(solution)
    _complete_probes(guesses)

    mismatches = [
        i for i in range(board.nlasers)
        if solution.exits[i].outcome != guesses.exits[i].outcome
    ]

    player_fired = [board.is_fired(i) for i in range(board.nlasers)]
    for index in mismatches:
        if player_fired[index]:
            logger.debug("Probe %d disagrees with the guess", index)
            board.exits[index] = board.exits[index].with_flags(wrong=True)
        else:
            logger.debug("Probe %d was never fired but disproves the guess", index)
            _inject_missing_probe(board, index, solution.exits[index])

    equivalent = not mismatches
    if equivalent:
        board.use_guesses_as_truth()

    right, wrong, missed = tally(board)
    result = VerificationResult(equivalent, right, wrong, missed, mismatches)
    logger.info("Layout check: %s", result)
    return result
