# bot.py
#
# Monte Carlo move selection:
#   1. Enumerate every empty cell of the board.
#   2. Play `trials` random games to the end: shuffle the empty cells and fill
#      them alternately, starting with the player we plan for.
#   3. Every empty cell that ends up in that player's winning chain scores a point.
#   4. Play the cell with the most points.
from __future__ import annotations

import logging
import multiprocessing as mp
import random
from typing import Any, Dict, List, Optional

from game import HexBoard, Move, BLUE, other

logger = logging.getLogger(__name__)


def run_trials(snapshot: HexBoard, empties: List[Move], player: int, trials: int,
               rng: random.Random) -> List[int]:
    """Play `trials` random fills of `snapshot`; returns a tally per entry of `empties`."""
    tallies = [0] * len(empties)
    index = {(m.r, m.c): i for i, m in enumerate(empties)}
    scratch = snapshot.copy()
    opponent = other(player)

    for _ in range(trials):
        scratch.restore(snapshot)
        order = empties[:]
        rng.shuffle(order)
        turn = player
        while order:
            m = order.pop()
            scratch.place(m.r, m.c, turn)
            turn = opponent if turn == player else player

        # stones that were on the board before planning never score
        for cell in scratch.winning_cells(player):
            i = index.get(cell)
            if i is not None:
                tallies[i] += 1
    return tallies


def _trials_task(payload: Dict[str, Any]) -> List[int]:
    """Worker entry point: rebuilds the board and runs one chunk of trials."""
    board = HexBoard(payload["size"])
    board.cells = payload["cells"]
    empties = [Move(r, c) for r, c in payload["empties"]]
    rng = random.Random(payload["seed"])
    return run_trials(board, empties, payload["player"], payload["trials"], rng)


class MonteCarloPlanner:
    def __init__(self, trials: int = 10000, seed: Optional[int] = None, workers: int = 1):
        if trials < 1:
            raise ValueError("Number of trials must be positive.")
        if workers < 1:
            raise ValueError("Number of workers must be positive.")
        self.trials = trials
        self.workers = workers
        self.rng = random.Random(seed)
        self.last_wins = 0

    def _chunks(self) -> List[int]:
        n = min(self.workers, self.trials)
        base, extra = divmod(self.trials, n)
        return [base + (1 if i < extra else 0) for i in range(n)]

    def evaluate(self, board: HexBoard, player: int = BLUE) -> Dict[Move, int]:
        """Win tally per empty cell of `board`, in row-major order."""
        empties = board.empty_cells()
        if not empties:
            return {}

        snapshot = board.copy()
        chunks = self._chunks()
        if len(chunks) == 1:
            tallies = run_trials(snapshot, empties, player, self.trials, self.rng)
        else:
            tasks = [{
                "size": snapshot.size,
                "cells": snapshot.cells,
                "empties": [(m.r, m.c) for m in empties],
                "player": player,
                "trials": k,
                "seed": self.rng.getrandbits(32),
            } for k in chunks]
            ctx = mp.get_context("spawn")
            with ctx.Pool(processes=len(tasks)) as pool:
                parts = pool.map(_trials_task, tasks)
            tallies = [sum(col) for col in zip(*parts)]

        self.last_wins = sum(tallies)
        logger.debug("%d trials over %d empty cells, %d winning cells counted",
                     self.trials, len(empties), self.last_wins)
        return dict(zip(empties, tallies))

    def plan_move(self, board: HexBoard, player: int = BLUE) -> Move:
        """Pick the empty cell that most often ends up in a winning chain for `player`.

        `board` is only read; callers should still pass a copy of the live board.
        """
        empties = board.empty_cells()
        if not empties:
            raise ValueError("No legal moves left (board is full).")

        tallies = self.evaluate(board, player)
        best_move = empties[0]
        most_wins = 0
        for m in empties:
            if tallies[m] > most_wins:
                most_wins = tallies[m]
                best_move = m

        logger.debug("planned (%d,%d) with %d wins", best_move.r, best_move.c, most_wins)
        return best_move
