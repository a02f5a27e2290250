# game.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from collections import deque
from typing import List, Optional, Set, Tuple

EMPTY, RED, BLUE = 0, 1, 2
# top-left, top-right, left, right, bottom-left, bottom-right
NEIGHBORS = [(-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0)]
SYMBOLS = {EMPTY: ".", BLUE: "X", RED: "O"}

logger = logging.getLogger(__name__)


def other(player: int) -> int:
    return RED if player == BLUE else BLUE


@dataclass(frozen=True)
class Move:
    r: int
    c: int


class HexBoard:
    """N x N Hex board stored as a square array.

    BLUE connects the left and right columns, RED connects the top and
    bottom rows. ``place`` is the only way a stone gets onto the board.
    """

    def __init__(self, size: int = 5):
        if size < 1:
            raise ValueError("Board size must be a positive integer.")
        self.size = size
        self.cells: List[List[int]] = [[EMPTY]*size for _ in range(size)]

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.size and 0 <= c < self.size

    def get(self, r: int, c: int) -> int:
        return self.cells[r][c]

    def place(self, r: int, c: int, color: int) -> bool:
        if color not in (RED, BLUE):
            raise ValueError(f"Cannot place color {color!r}")
        if not self.in_bounds(r, c) or self.cells[r][c] != EMPTY:
            return False
        self.cells[r][c] = color
        return True

    def clear(self, r: int, c: int) -> bool:
        if not self.in_bounds(r, c):
            return False
        self.cells[r][c] = EMPTY
        return True

    def adjacent_cells(self, r: int, c: int) -> List[Tuple[int, int]]:
        out = []
        for dr, dc in NEIGHBORS:
            rr, cc = r + dr, c + dc
            if self.in_bounds(rr, cc):
                out.append((rr, cc))
        return out

    def empty_cells(self) -> List[Move]:
        n = self.size
        return [Move(r, c) for r in range(n) for c in range(n) if self.cells[r][c] == EMPTY]

    def is_full(self) -> bool:
        return all(v != EMPTY for row in self.cells for v in row)

    def copy(self) -> "HexBoard":
        b = HexBoard(self.size)
        b.cells = [row[:] for row in self.cells]
        return b

    def restore(self, snapshot: "HexBoard") -> None:
        """Overwrite this board with the contents of ``snapshot``."""
        if snapshot.size != self.size:
            raise ValueError(f"Cannot restore a {snapshot.size}x{snapshot.size} board "
                             f"into a {self.size}x{self.size} one")
        for row, src in zip(self.cells, snapshot.cells):
            row[:] = src

    # ---------- connectivity ----------
    def _touch_edges(self, r: int, c: int, color: int, flags: List[bool]) -> None:
        n = self.size
        pos = c if color == BLUE else r
        if pos == 0:
            flags[0] = True
        if pos == n - 1:
            flags[1] = True

    def _flood(self, r: int, c: int, visited: List[List[bool]]) -> Tuple[List[Tuple[int, int]], List[bool]]:
        """BFS over the group containing (r, c); returns its cells and edge flags."""
        color = self.cells[r][c]
        flags = [False, False]
        group = []
        q = deque([(r, c)])
        visited[r][c] = True
        while q:
            cr, cc = q.popleft()
            group.append((cr, cc))
            self._touch_edges(cr, cc, color, flags)
            for nr, nc in self.adjacent_cells(cr, cc):
                if not visited[nr][nc] and self.cells[nr][nc] == color:
                    visited[nr][nc] = True
                    q.append((nr, nc))
        return group, flags

    def win(self, r: int, c: int) -> bool:
        """True if the stone at (r, c) joins both of its owner's edges."""
        if not self.in_bounds(r, c) or self.cells[r][c] == EMPTY:
            return False
        n = self.size
        visited = [[False]*n for _ in range(n)]
        _, flags = self._flood(r, c, visited)
        return flags[0] and flags[1]

    def winning_cells(self, color: int) -> Set[Tuple[int, int]]:
        """All cells of ``color`` for which ``win`` holds."""
        n = self.size
        visited = [[False]*n for _ in range(n)]
        out: Set[Tuple[int, int]] = set()
        # every winning group touches the first edge, so seed from there only
        for i in range(n):
            r, c = (i, 0) if color == BLUE else (0, i)
            if self.cells[r][c] == color and not visited[r][c]:
                group, flags = self._flood(r, c, visited)
                if flags[0] and flags[1]:
                    out.update(group)
        return out

    def winner(self) -> int:
        for color in (BLUE, RED):
            if self.winning_cells(color):
                return color
        return EMPTY

    # ---------- text ----------
    def render(self) -> str:
        n = self.size
        edges = "\\" + " / \\" * (n - 1)
        lines = [" - ".join(SYMBOLS[v] for v in self.cells[0])]
        space = ""
        for r in range(1, n):
            space += " "
            lines.append(space + edges)
            space += " "
            lines.append(space + " - ".join(SYMBOLS[v] for v in self.cells[r]))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()


class HexGame:
    def __init__(self, size: int = 5, first: int = BLUE):
        self.size = size
        self.first = first
        self.reset()

    def reset(self):
        self.board = HexBoard(self.size)
        self.current = self.first
        self.winner: int = EMPTY
        self.last_move: Optional[Move] = None
        self.steps: int = 0
        self.history: List[Tuple[Move, int]] = []

    def legal_moves(self) -> List[Move]:
        if self.winner != EMPTY:
            return []
        return self.board.empty_cells()

    def play(self, mv: Move) -> bool:
        if self.winner != EMPTY:
            return False

        p = self.current
        if not self.board.place(mv.r, mv.c, p):
            return False
        self.last_move = mv
        self.steps += 1
        self.history.append((mv, p))
        logger.info("move %d: %s at (%d,%d)", self.steps, SYMBOLS[p], mv.r, mv.c)

        if self.board.win(mv.r, mv.c):
            self.winner = p
            logger.info("%s wins after %d steps", SYMBOLS[p], self.steps)
        else:
            self.current = other(p)
        return True

    def clone(self) -> "HexGame":
        g = HexGame(self.size, self.first)
        g.board = self.board.copy()
        g.current = self.current
        g.winner = self.winner
        g.last_move = self.last_move
        g.steps = self.steps
        g.history = list(self.history)
        return g
