# main.py
import logging
from typing import List, Optional

from config import GameConfig
from console import ConsoleGame

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)


def create_icon():
    """Icon with a white H on a dark background."""
    import pygame

    size = 64
    icon = pygame.Surface((size, size), pygame.SRCALPHA)
    icon.fill((30, 30, 35, 255))

    font = pygame.font.Font(None, size - 12)
    text_surface = font.render("H", True, (255, 255, 255))
    text_rect = text_surface.get_rect()
    text_rect.center = (size // 2, size // 2)
    icon.blit(text_surface, text_rect)

    return icon


def run_gui(config: GameConfig) -> None:
    import pygame
    from ui import AppUI

    pygame.init()
    screen = pygame.display.set_mode((800, 600))
    pygame.display.set_caption("Hex")
    pygame.display.set_icon(create_icon())

    AppUI(screen, config).run()


def main(argv: Optional[List[str]] = None) -> None:
    config = GameConfig.from_args(argv)
    configure_logging(config.log_level)
    logging.getLogger(__name__).debug("config: %s", config)

    if config.gui:
        run_gui(config)
    else:
        ConsoleGame(config).run()


if __name__ == "__main__":
    main()
