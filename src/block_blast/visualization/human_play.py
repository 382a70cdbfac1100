from __future__ import annotations

import argparse
import logging
from typing import Optional

import pygame

from block_blast.game import BlockBlastGame, GameConfig
from .renderer import Renderer


logger = logging.getLogger(__name__)


def _announce_game_over(game: BlockBlastGame) -> None:
    print(f"Game Over! Final Score: {game.score}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Block Blast on an 8x8 board")
    p.add_argument("--seed", type=int, default=None, help="Seed for piece generation")
    p.add_argument("--cell-size", type=int, default=40)
    p.add_argument("--log-level", default="INFO")
    return p


def run(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    game = BlockBlastGame(GameConfig(random_seed=args.seed))
    game.add_game_over_listener(_announce_game_over)
    renderer = Renderer(cell_size=args.cell_size)

    pygame.init()
    try:
        screen = pygame.display.set_mode(renderer.window_size(game.grid.size))
        pygame.display.set_caption("Block Blast")
        clock = pygame.time.Clock()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        game = game.reset()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    cell = renderer.cell_at(event.pos, game.grid.size)
                    if cell is not None and game.has_moves:
                        result = game.play(*cell)
                        if not result.success:
                            logger.debug("placement at %s rejected", cell)

            renderer.draw(screen, game)
            hover = renderer.cell_at(pygame.mouse.get_pos(), game.grid.size)
            if hover is not None and game.has_moves:
                renderer.draw_ghost(screen, game, *hover)
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
