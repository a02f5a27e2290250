"""
Tests for Monte Carlo move selection.
"""

import random

import pytest

from bot import MonteCarloPlanner, run_trials
from game import HexBoard, Move, EMPTY, RED, BLUE


def one_gap_board() -> HexBoard:
    """3x3 board whose only empty cell (1,2) completes BLUE's middle row."""
    b = HexBoard(3)
    for r, c in [(1, 0), (1, 1)]:
        b.place(r, c, BLUE)
    for r, c in [(0, 0), (0, 1), (0, 2), (2, 0), (2, 1), (2, 2)]:
        b.place(r, c, RED)
    return b


class TestPlanMove:

    def test_single_winning_cell_always_chosen(self):
        planner = MonteCarloPlanner(trials=50, seed=3)
        board = one_gap_board()
        tallies = planner.evaluate(board, BLUE)
        assert tallies == {Move(1, 2): 50}
        assert planner.plan_move(board, BLUE) == Move(1, 2)

    def test_returns_empty_cell(self, board5):
        board5.place(2, 2, RED)
        board5.place(0, 0, BLUE)
        planner = MonteCarloPlanner(trials=200, seed=11)
        mv = planner.plan_move(board5, BLUE)
        assert board5.get(mv.r, mv.c) == EMPTY

    def test_board_is_not_mutated(self, board5):
        board5.place(1, 3, RED)
        before = board5.copy()
        MonteCarloPlanner(trials=100, seed=5).plan_move(board5)
        assert board5.cells == before.cells

    def test_full_board_raises(self):
        b = HexBoard(1)
        b.place(0, 0, RED)
        with pytest.raises(ValueError):
            MonteCarloPlanner(trials=10).plan_move(b)

    def test_lost_position_falls_back_to_first_empty(self):
        # RED already owns a top-to-bottom column, so no fill lets BLUE win
        b = HexBoard(3)
        for r in range(3):
            b.place(r, 0, RED)
        planner = MonteCarloPlanner(trials=100, seed=2)
        assert all(v == 0 for v in planner.evaluate(b).values())
        assert planner.plan_move(b) == Move(0, 1)
        assert planner.last_wins == 0

    def test_one_by_one_board(self):
        planner = MonteCarloPlanner(trials=30, seed=0)
        assert planner.plan_move(HexBoard(1)) == Move(0, 0)
        assert planner.last_wins == 30

    def test_plan_for_red(self):
        # (1,1) is the only cell that finishes RED's column through the middle
        b = HexBoard(3)
        for r, c in [(0, 1), (2, 1)]:
            b.place(r, c, RED)
        for r, c in [(0, 0), (0, 2), (1, 0), (1, 2), (2, 0), (2, 2)]:
            b.place(r, c, BLUE)
        planner = MonteCarloPlanner(trials=40, seed=9)
        assert planner.evaluate(b, RED) == {Move(1, 1): 40}
        assert planner.plan_move(b, RED) == Move(1, 1)


class TestEvaluate:

    def test_keys_are_empty_cells_in_row_major_order(self, board5):
        board5.place(0, 0, BLUE)
        board5.place(4, 4, RED)
        tallies = MonteCarloPlanner(trials=20, seed=1).evaluate(board5)
        assert list(tallies) == board5.empty_cells()
        assert Move(0, 0) not in tallies

    def test_prior_stones_never_score(self):
        # BLUE stones already on the board are part of every winning chain but
        # only the empty cells get credit
        b = HexBoard(3)
        for c in range(2):
            b.place(1, c, BLUE)
        tallies = MonteCarloPlanner(trials=100, seed=4).evaluate(b)
        assert set(tallies) == set(b.empty_cells())

    def test_same_seed_same_tallies(self, board5):
        a = MonteCarloPlanner(trials=150, seed=42).evaluate(board5)
        b = MonteCarloPlanner(trials=150, seed=42).evaluate(board5)
        assert a == b

    def test_tally_bounded_by_trials(self, board5):
        tallies = MonteCarloPlanner(trials=60, seed=8).evaluate(board5)
        assert all(0 <= v <= 60 for v in tallies.values())
        # every trial ends with exactly one winner, so some cell must have scored
        assert sum(tallies.values()) > 0

    def test_run_trials_one_tally_per_cell(self):
        empties = HexBoard(2).empty_cells()
        tallies = run_trials(HexBoard(2), empties, BLUE, 200, random.Random(7))
        assert len(tallies) == 4
        assert max(tallies) <= 200

    def test_workers_split_trials(self):
        planner = MonteCarloPlanner(trials=21, seed=6, workers=2)
        assert planner._chunks() == [11, 10]
        assert planner.evaluate(one_gap_board()) == {Move(1, 2): 21}


class TestConstruction:

    @pytest.mark.parametrize("kwargs", [{"trials": 0}, {"trials": -1}, {"workers": 0}])
    def test_bad_arguments(self, kwargs):
        with pytest.raises(ValueError):
            MonteCarloPlanner(**kwargs)

    def test_more_workers_than_trials(self):
        assert MonteCarloPlanner(trials=3, workers=8)._chunks() == [1, 1, 1]

    def test_own_generator(self):
        a = MonteCarloPlanner(seed=1)
        b = MonteCarloPlanner(seed=1)
        assert a.rng is not b.rng
        assert a.rng.random() == b.rng.random()
