# console.py
#
# Text front-end: the computer plays BLUE (left <-> right), the human plays
# RED (top <-> bottom). Moves are typed as "row,col" with 0-based numbers.
from __future__ import annotations

import logging
import re
from typing import Callable, Optional

from bot import MonteCarloPlanner
from config import GameConfig
from game import HexGame, Move, EMPTY, RED, BLUE

logger = logging.getLogger(__name__)

PROMPT = 'Input coordinates (write "x,y" and then press enter): '
_MOVE_RE = re.compile(r"^\s*(-?\d+)\s*[,\s]\s*(-?\d+)\s*$")


def parse_move(text: str) -> Optional[Move]:
    m = _MOVE_RE.match(text)
    if m is None:
        return None
    return Move(int(m.group(1)), int(m.group(2)))


def move_line(label: str, mv: Move) -> str:
    return f"{label}: ({mv.r},{mv.c})"


class ConsoleGame:
    def __init__(
        self,
        config: GameConfig,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
        planner: Optional[MonteCarloPlanner] = None,
    ):
        self.config = config
        self.input_fn = input_fn
        self.output = output
        self.game = HexGame(config.size, first=BLUE if config.computer_first else RED)
        self.planner = planner or MonteCarloPlanner(
            trials=config.trials, seed=config.seed, workers=config.workers
        )

    def _computer_turn(self) -> Move:
        mv = self.planner.plan_move(self.game.board.copy(), BLUE)
        self.game.play(mv)
        self.output(move_line("Computer", mv))
        self.output(self.game.board.render())
        return mv

    def _human_turn(self) -> Optional[Move]:
        while True:
            try:
                text = self.input_fn(PROMPT)
            except EOFError:
                return None
            mv = parse_move(text)
            if mv is not None and self.game.play(mv):
                break
            logger.debug("rejected human input %r", text)
            self.output("Invalid values! Try again!")

        self.output(move_line("Human", mv))
        return mv

    def run(self) -> int:
        """Play until somebody wins; returns the winning color (EMPTY if input ran out)."""
        g = self.game
        if not self.config.computer_first:
            self.output(g.board.render())

        while g.winner == EMPTY:
            if g.current == BLUE:
                self._computer_turn()
            elif self._human_turn() is None:
                logger.info("input closed, leaving after %d steps", g.steps)
                return EMPTY

        if g.winner == RED:
            self.output(g.board.render())
        self.output(("Computer" if g.winner == BLUE else "Human") + " wins!")
        self.output(f"Total steps = {g.steps}")
        return g.winner
