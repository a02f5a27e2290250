# ui.py
from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pygame
import pygame_gui

from bot import MonteCarloPlanner
from config import GameConfig
from game import HexGame, Move, EMPTY, RED, BLUE

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]
Cell = Tuple[int, int, list, pygame.Rect]
SQRT3 = math.sqrt(3.0)


# ---------------- geometry helpers ----------------
def hex_corners(center, radius: float):
    """Pointy-top hexagon around `center`."""
    cx, cy = center
    angles = [math.radians(60 * k - 30) for k in range(6)]
    return [(cx + radius * math.cos(a), cy + radius * math.sin(a)) for a in angles]


def axial_to_pixel(r: int, c: int, origin, radius: float):
    # each row shifts half a cell right, matching the (-1,+1)/(+1,-1) neighbours
    step = SQRT3 * radius
    return (origin[0] + step * (c + 0.5 * r), origin[1] + 1.5 * radius * r)


def point_in_poly(p, poly):
    """True if `p` lies inside (or on) the convex polygon `poly`."""
    x, y = p
    side = 0
    for (x1, y1), (x2, y2) in zip(poly, poly[1:] + poly[:1]):
        cross = (x2 - x1) * (y - y1) - (y2 - y1) * (x - x1)
        if cross == 0:
            continue
        s = 1 if cross > 0 else -1
        if side == 0:
            side = s
        elif s != side:
            return False
    return True


def build_cells(n: int, origin, radius: float) -> List[Cell]:
    cells = []
    for r in range(n):
        for c in range(n):
            poly = hex_corners(axial_to_pixel(r, c, origin, radius), radius)
            xs = [p[0] for p in poly]
            ys = [p[1] for p in poly]
            bbox = pygame.Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))
            cells.append((r, c, poly, bbox))
    return cells


def pick_cell(cells: List[Cell], pos) -> Optional[Move]:
    for r, c, poly, bbox in cells:
        if bbox.collidepoint(pos) and point_in_poly(pos, poly):
            return Move(r, c)
    return None


def fit_radius(n: int, width: int, height: int, top: int) -> float:
    """Largest cell radius (capped) that keeps an n×n rhombus inside the window."""
    by_w = (width - 60) / (SQRT3 * (1.5 * n))
    by_h = (height - top - 40) / (1.5 * n + 0.5)
    return max(8.0, min(32.0, by_w, by_h))


@dataclass
class Theme:
    bg: Color = (30, 30, 35)
    panel: Color = (24, 24, 28)
    outline: Color = (60, 60, 70)
    grid: Color = (70, 70, 80)
    highlight: Color = (245, 245, 245)
    text: Color = (235, 235, 235)
    muted: Color = (180, 180, 190)
    # fill per cell state, and the outline marking the edges each side must join
    stones: Dict[int, Color] = field(default_factory=lambda: {
        EMPTY: (210, 210, 210), RED: (220, 70, 70), BLUE: (70, 120, 220)})
    edges: Dict[int, Color] = field(default_factory=lambda: {
        RED: (160, 40, 40), BLUE: (40, 80, 160)})


MENU_BUTTONS = [("Play", "#btn_play"), ("How to play", "#btn_how"), ("Quit", "#btn_exit")]
HOW_TO = [
    "Hex:",
    "You (red) connect TOP and BOTTOM.",
    "The computer (blue) connects LEFT and RIGHT.",
    "Players take turns claiming one empty cell.",
    "There are no draws in Hex.",
]


class AppUI:
    HUD_H = 140

    def __init__(self, screen: pygame.Surface, config: GameConfig):
        self.screen = screen
        self.config = config
        self.clock = pygame.time.Clock()

        self.manager = pygame_gui.UIManager(screen.get_size())
        self.ui_elems = []

        self.font = pygame.font.SysFont("consolas", 18)
        self.big_font = pygame.font.SysFont("consolas", 30)
        self.theme = Theme()

        self.state = "menu"  # menu/how/game
        self.running = False
        self.human = RED
        self.bot_player = BLUE
        self.game = HexGame(config.size, first=self.bot_player if config.computer_first else self.human)
        self.game_id = 0

        w, h = screen.get_size()
        self.radius = fit_radius(config.size, w, h, self.HUD_H)
        self.origin = (40 + self.radius, self.HUD_H + 30)
        self.cells = build_cells(config.size, self.origin, self.radius)

        # bot: the worker thread leaves ((game_id, steps), move) in bot_result
        self.planner = MonteCarloPlanner(trials=config.trials, seed=config.seed, workers=config.workers)
        self.bot_thread: Optional[threading.Thread] = None
        self.bot_result: Optional[Tuple[Tuple[int, int], Move]] = None

        self.handlers = {
            "#btn_play": self._on_play,
            "#btn_how": self._on_how,
            "#btn_exit": self._on_exit,
            "#btn_back": self._on_menu,
            "#btn_menu": self._on_menu,
            "#btn_new": self._start_game,
        }
        self._build_menu()

    # ---------- UI build ----------
    def _show(self, buttons):
        for el in self.ui_elems:
            el.kill()
        self.ui_elems = [
            pygame_gui.elements.UIButton(
                relative_rect=pygame.Rect(rect), text=text, manager=self.manager, object_id=oid)
            for rect, text, oid in buttons
        ]

    def _build_menu(self):
        x = self.screen.get_width() // 2 - 140
        self._show([(((x, 190 + 70 * i), (280, 55)), text, oid)
                    for i, (text, oid) in enumerate(MENU_BUTTONS)])

    def _build_how(self):
        self._show([(((20, 20), (120, 40)), "Back", "#btn_back")])

    def _build_game(self):
        x = self.screen.get_width() - 180
        self._show([
            (((x, 20), (160, 40)), "Menu", "#btn_menu"),
            (((x, 70), (160, 40)), "New game", "#btn_new"),
        ])

    # ---------- button handlers ----------
    def _on_play(self):
        self.state = "game"
        self._build_game()
        self._start_game()

    def _on_how(self):
        self.state = "how"
        self._build_how()

    def _on_menu(self):
        self.state = "menu"
        self._build_menu()

    def _on_exit(self):
        self.running = False

    # ---------- game / bot ----------
    @property
    def bot_thinking(self) -> bool:
        return self.bot_thread is not None and self.bot_thread.is_alive()

    def _position(self) -> Tuple[int, int]:
        return (self.game_id, self.game.steps)

    def _start_game(self):
        self.game_id += 1
        self.game.reset()
        logger.info("new %dx%d game", self.game.size, self.game.size)
        self._start_bot_if_needed()

    def _start_bot_if_needed(self):
        if self.game.winner != EMPTY or self.game.current != self.bot_player:
            return
        if self.bot_thinking:
            return

        position = self._position()
        snapshot = self.game.board.copy()

        def worker():
            self.bot_result = (position, self.planner.plan_move(snapshot, self.bot_player))

        self.bot_thread = threading.Thread(target=worker, daemon=True)
        self.bot_thread.start()

    def _poll_bot(self):
        """Apply a finished bot move if it still fits the board, then restart the bot when due."""
        if self.bot_thinking:
            return
        if self.bot_result is not None:
            position, mv = self.bot_result
            self.bot_result = None
            if position == self._position():
                self.game.play(mv)
            else:
                logger.debug("dropped stale bot move (%d,%d)", mv.r, mv.c)
        if self.state == "game":
            self._start_bot_if_needed()

    def _on_click(self, pos):
        if self.state != "game" or self.bot_thinking:
            return
        if self.game.winner != EMPTY or self.game.current != self.human:
            return
        mv = pick_cell(self.cells, pos)
        if mv and self.game.play(mv):
            self._start_bot_if_needed()

    # ---------- main loop ----------
    def run(self):
        self.running = True
        while self.running:
            dt = self.clock.tick(60) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break

                self.manager.process_events(event)

                if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self._on_click(event.pos)

                if event.type == pygame_gui.UI_BUTTON_PRESSED:
                    oid = event.ui_object_id.split(".")[-1]
                    handler = self.handlers.get(oid)
                    if handler:
                        handler()

            self.manager.update(dt)
            self._poll_bot()
            self._render()

        pygame.quit()

    # ---------- rendering ----------
    def _render(self):
        self.screen.fill(self.theme.bg)

        if self.state == "menu":
            title = self.big_font.render("HEX", True, self.theme.text)
            self.screen.blit(title, (self.screen.get_width() // 2 - title.get_width() // 2, 120))

        elif self.state == "how":
            for i, line in enumerate(HOW_TO):
                self.screen.blit(self.font.render(line, True, self.theme.text), (20, 80 + 26 * i))

        elif self.state == "game":
            panel = pygame.Rect(0, 0, self.screen.get_width(), self.HUD_H)
            pygame.draw.rect(self.screen, self.theme.panel, panel)
            pygame.draw.rect(self.screen, self.theme.outline, panel, 1)
            self._draw_board()
            self._draw_game_hud()

        self.manager.draw_ui(self.screen)
        pygame.display.flip()

    def _draw_board(self):
        board = self.game.board
        n = board.size
        last = self.game.last_move
        for r, c, poly, _ in self.cells:
            pygame.draw.polygon(self.screen, self.theme.stones[board.get(r, c)], poly)
            pygame.draw.polygon(self.screen, self.theme.grid, poly, width=1)
            if r in (0, n - 1):
                pygame.draw.polygon(self.screen, self.theme.edges[RED], poly, width=3)
            if c in (0, n - 1):
                pygame.draw.polygon(self.screen, self.theme.edges[BLUE], poly, width=3)

        if last is not None:
            _, _, poly, _ = self.cells[last.r * n + last.c]
            pygame.draw.polygon(self.screen, self.theme.highlight, poly, width=3)

    def _draw_game_hud(self):
        g = self.game
        name = {self.human: "You", self.bot_player: "Computer"}

        if g.winner != EMPTY:
            msg = f"{name[g.winner]} won in {g.steps} steps"
        else:
            msg = f"Turn: {name[g.current]}"
        lines = [
            (self.big_font, msg, self.theme.text, 18),
            (self.font, "You: connect TOP ↔ BOTTOM", self.theme.stones[RED], 70),
            (self.font, "Computer: connect LEFT ↔ RIGHT", self.theme.stones[BLUE], 94),
            (self.font, "Computer is thinking..." if self.bot_thinking else f"Steps: {g.steps}",
             self.theme.muted, 122),
        ]
        for font, text, color, y in lines:
            self.screen.blit(font.render(text, True, color), (20, y))
