"""
Unit tests for the move engine.

Each accepted move must return a new game and leave the old one untouched;
each rejected move must raise and leave the receiver untouched.
"""

import copy

import pytest

from game.blackbox_game import BlackBoxGame
from game.blackbox_params import BlackBoxParams
from game.constants import ArenaFlag, PuzzlePhase
from game.errors import IllegalMove, InvalidParameters, MalformedDescriptor, ProtocolMismatch
from game.probe_outcome import HIT, REFLECTED


def play(game, *moves):
    for move in moves:
        game = game.execute_move(move)
    return game


class TestConstruction:
    """Test building a puzzle from params and descriptor."""

    def test_initial_state(self, example_game):
        assert example_game.phase is PuzzlePhase.PLACING
        assert example_game.nballs == 2
        assert example_game.nguesses == 0
        assert (example_game.width, example_game.height) == (5, 5)
        assert not example_game.is_revealed()
        assert example_game.board.nlasers == 20
        assert example_game.arena_flags(3, 3) == {ArenaFlag.TRUE}

    def test_rejects_descriptor_for_other_size(self):
        from game.descriptor import encode_descriptor
        desc = encode_descriptor(6, 6, [(0, 0), (1, 1)])
        with pytest.raises(MalformedDescriptor):
            BlackBoxGame(BlackBoxParams(5, 5, 2, 2), desc)

    def test_rejects_garbage_descriptor(self):
        with pytest.raises(MalformedDescriptor):
            BlackBoxGame(BlackBoxParams(5, 5, 2, 2), "abc")

    def test_rejects_bad_params(self):
        with pytest.raises(InvalidParameters):
            BlackBoxGame(BlackBoxParams(1, 5, 2, 2), "00000000")

    def test_clone_is_independent(self, example_game):
        clone = copy.deepcopy(example_game)
        clone.board.toggle_guess(1, 1)
        assert not example_game.board.is_guess(1, 1)


class TestGuesses:
    """Test toggling ball guesses."""

    def test_toggle_on_and_off(self, example_game):
        on = example_game.execute_move("T1,1")
        assert on.nguesses == 1
        assert on.arena_flags(1, 1) == {ArenaFlag.GUESS}
        off = on.execute_move("T1,1")
        assert off.nguesses == 0
        assert off.arena_flags(1, 1) == frozenset()

    def test_receiver_unchanged(self, example_game):
        after = example_game.execute_move("T1,1")
        assert after is not example_game
        assert example_game.nguesses == 0
        assert not example_game.board.is_guess(1, 1)

    @pytest.mark.parametrize("move", ["T0,1", "T1,0", "T6,1", "T1,6"])
    def test_outside_arena(self, example_game, move):
        with pytest.raises(IllegalMove):
            example_game.execute_move(move)

    def test_locked_cell_cannot_be_toggled(self, example_game):
        game = example_game.execute_move("LB2,2")
        with pytest.raises(IllegalMove, match="locked"):
            game.execute_move("T2,2")
        assert game.nguesses == 0

    def test_guess_count_not_capped(self, example_game):
        game = play(example_game, "T1,1", "T2,1", "T3,1", "T4,1")
        assert game.nguesses == 4
        assert not game.can_submit()


class TestLocks:
    """Test cell, column and row locks."""

    def test_cell_lock_toggles(self, example_game):
        game = example_game.execute_move("LB2,3")
        assert ArenaFlag.LOCK in game.arena_flags(2, 3)
        game = game.execute_move("LB2,3")
        assert ArenaFlag.LOCK not in game.arena_flags(2, 3)

    def test_lock_keeps_guess(self, example_game):
        game = play(example_game, "T2,3", "LB2,3")
        assert game.arena_flags(2, 3) == {ArenaFlag.GUESS, ArenaFlag.LOCK}

    def test_column_lock_locks_all(self, example_game):
        game = example_game.execute_move("LC2")
        assert all(game.board.is_locked(2, y) for y in range(1, 6))
        assert not game.board.is_locked(1, 1)

    def test_column_majority_unlocks(self, example_game):
        game = play(example_game, "LB2,1", "LB2,2", "LB2,3", "LC2")
        assert not any(game.board.is_locked(2, y) for y in range(1, 6))

    def test_column_minority_locks(self, example_game):
        game = play(example_game, "LB2,1", "LB2,2", "LC2")
        assert all(game.board.is_locked(2, y) for y in range(1, 6))

    def test_row_lock(self, example_game):
        game = play(example_game, "LR4", "LR4")
        assert not any(game.board.is_locked(x, 4) for x in range(1, 6))
        game = game.execute_move("LR4")
        assert all(game.board.is_locked(x, 4) for x in range(1, 6))

    @pytest.mark.parametrize("move", ["LC0", "LC6", "LR0", "LR6", "LB0,0"])
    def test_out_of_range(self, example_game, move):
        with pytest.raises(IllegalMove):
            example_game.execute_move(move)


class TestFiring:
    """Test firing probes through the engine."""

    def test_fire_records_results(self, example_game):
        game = play(example_game, "F11", "F12", "F0")
        assert game.exit_record(11).outcome is HIT
        assert game.exit_record(12).outcome is REFLECTED
        assert game.perimeter_mark(0) == 1
        assert game.perimeter_mark(14) == 1
        assert not example_game.board.is_fired(0)

    def test_fire_twice_rejected(self, example_game):
        game = example_game.execute_move("F0")
        with pytest.raises(IllegalMove):
            game.execute_move("F14")
        with pytest.raises(IllegalMove):
            game.execute_move("F0")

    def test_fire_out_of_range(self, example_game):
        with pytest.raises(IllegalMove):
            example_game.execute_move("F20")


class TestSubmit:
    """Test submitting guesses and revealing."""

    def test_wrong_count_rejected(self, example_game):
        game = example_game.execute_move("T1,1")
        assert not game.can_submit()
        with pytest.raises(IllegalMove, match="need 2"):
            game.execute_move("R")
        assert game.phase is PuzzlePhase.PLACING

    def test_correct_submit(self, example_game):
        game = play(example_game, "T3,3", "T4,5")
        assert game.can_submit()
        game = game.execute_move("R")
        assert game.is_revealed()
        assert game.verification.equivalent
        assert (game.right, game.wrong, game.missed) == (2, 0, 0)
        assert game.status_text() == "Correct!"

    def test_incorrect_submit(self, example_game):
        game = play(example_game, "T1,1", "T5,5", "F11", "R")
        assert game.is_revealed()
        assert not game.verification.equivalent
        assert (game.right, game.wrong, game.missed) == (0, 2, 2)
        assert game.exit_record(11).wrong
        assert game.status_text() == "Right: 0, wrong: 2, missed: 2"

    def test_nothing_allowed_after_reveal(self, example_game):
        game = play(example_game, "T3,3", "T4,5", "R")
        for move in ("T1,1", "LB1,1", "LC1", "LR1", "F0", "R"):
            with pytest.raises(IllegalMove):
                game.execute_move(move)

    def test_ball_range(self, make_game):
        game = make_game(5, 5, [(0, 0), (4, 4)], minballs=1, maxballs=3)
        assert not game.can_submit()
        game = game.execute_move("T1,1")
        assert game.can_submit()
        assert game.status_text() == "Balls marked: 1 / 1-3"


class TestSolve:
    """Test the reveal-solution move."""

    def test_solve_reveals_without_checking(self, example_game):
        move = BlackBoxGame.solve_move()
        assert move == "S"
        game = example_game.execute_move("T1,1").execute_move(move)
        assert game.is_revealed()
        assert game.solved_by_request
        assert game.verification is None
        assert not game.exit_record(0).fired
        assert game.status_text() == "Solved"

    def test_solve_after_reveal_allowed(self, example_game):
        game = play(example_game, "T3,3", "T4,5", "R", "S")
        assert game.is_revealed()
        assert game.verification.equivalent


class TestProtocol:
    """Test malformed moves."""

    @pytest.mark.parametrize("move", ["", "X", "T1", "F", "Fa", "T1,1,1", "r"])
    def test_unparseable(self, example_game, move):
        with pytest.raises(ProtocolMismatch):
            example_game.execute_move(move)

    def test_unknown_action(self, example_game):
        with pytest.raises(ProtocolMismatch):
            example_game.apply_action({"action": "PASS"})

    def test_incomplete_action(self, example_game):
        with pytest.raises(ProtocolMismatch):
            example_game.apply_action({"action": "TOGGLE", "x": 1})

    def test_string_coordinates_normalised(self, example_game):
        game = example_game.apply_action({"action": "FIRE", "index": "3"})
        assert game.board.is_fired(3)

    @pytest.mark.parametrize("action", [
        {"action": "FIRE", "index": "abc"},
        {"action": "FIRE", "index": None},
        {"action": "TOGGLE", "x": [1], "y": 1},
    ])
    def test_non_integer_fields(self, example_game, action):
        with pytest.raises(ProtocolMismatch):
            example_game.apply_action(action)
        assert not any(rec.fired for rec in example_game.board.exits)

    def test_unknown_action_after_reveal(self, example_game):
        game = example_game.execute_move("S")
        with pytest.raises(ProtocolMismatch):
            game.apply_action({"action": "PASS"})


class TestPrintState:
    """Test the text dump."""

    def test_lines(self, example_game):
        lines = []
        play(example_game, "T1,1", "F0").print_state(lines.append)
        text = [str(line) for line in lines]
        assert "Arena:" in text
        assert "  0: 1" in text
        assert "  14: 1" in text
        assert text[-1] == "Balls marked: 1 / 2"

    def test_reveal_shows_balls(self, example_game):
        lines = []
        play(example_game, "T3,3", "T4,5", "R").print_state(lines.append)
        arena = lines[2]
        assert arena[2, 2] == 3
        assert arena[4, 3] == 3
        assert arena.sum() == 6
