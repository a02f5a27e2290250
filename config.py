# config.py
from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import List, Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class GameConfig:
    size: int = 5
    trials: int = 10000
    seed: Optional[int] = None
    workers: int = 1
    first: str = "computer"  # computer/human
    gui: bool = False
    log_level: str = "WARNING"

    @property
    def computer_first(self) -> bool:
        return self.first == "computer"

    @classmethod
    def from_args(cls, argv: Optional[List[str]] = None) -> "GameConfig":
        ap = build_parser()
        args = ap.parse_args(argv)

        if args.size < 1:
            ap.error("--size must be at least 1")
        if args.trials < 1:
            ap.error("--trials must be at least 1")
        if args.workers < 1:
            ap.error("--workers must be at least 1")

        return cls(
            size=args.size,
            trials=args.trials,
            seed=args.seed,
            workers=args.workers,
            first=args.first,
            gui=args.gui,
            log_level=args.log_level,
        )


def build_parser() -> argparse.ArgumentParser:
    d = GameConfig()
    ap = argparse.ArgumentParser(description="Play Hex against a Monte Carlo computer player")
    ap.add_argument("--size", type=int, default=d.size, help="board size n (n×n)")
    ap.add_argument("--trials", type=int, default=d.trials, help="random playouts per computer move")
    ap.add_argument("--seed", type=int, default=d.seed,
                    help="RNG seed (default: random; reproducible for a fixed --workers)")
    ap.add_argument("--workers", type=int, default=d.workers,
                    help="number of worker processes for playouts (1 = no multiprocessing)")
    ap.add_argument("--first", choices=("computer", "human"), default=d.first, help="who moves first")
    ap.add_argument("--gui", action="store_true", help="open the pygame window instead of the text game")
    ap.add_argument("--log-level", choices=LOG_LEVELS, default=d.log_level, help="logging verbosity")
    return ap
