"""
Pytest fixtures for the Hex tests.
"""

import random

import pytest

from game import HexBoard, BLUE, RED


class FirstEmptyPlanner:
    """Planner stand-in: always takes the first empty cell, remembers what it was given."""

    def __init__(self):
        self.boards = []

    def plan_move(self, board, player=BLUE):
        self.boards.append(board)
        return board.empty_cells()[0]


def random_fill(size: int, rng: random.Random) -> HexBoard:
    """Fill every cell by alternating colors over a shuffled cell order, BLUE first."""
    board = HexBoard(size)
    cells = board.empty_cells()
    rng.shuffle(cells)
    turn = BLUE
    for m in cells:
        assert board.place(m.r, m.c, turn)
        turn = RED if turn == BLUE else BLUE
    return board


@pytest.fixture
def board5() -> HexBoard:
    return HexBoard(5)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def stub_planner() -> FirstEmptyPlanner:
    return FirstEmptyPlanner()
