from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from block_blast.game import BlockBlastGame, Piece
from .palette import EMPTY_CELL, rgb_for_value


BACKGROUND = (10, 10, 14)
TEXT = (230, 230, 230)
PREVIEW_SLOTS = 4


class Renderer:
    def __init__(self, cell_size: int = 40, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, grid_size: int) -> Tuple[int, int]:
        board_px = grid_size * self.cell_size
        side_panel = (PREVIEW_SLOTS + 1) * self.cell_size
        return self.margin * 3 + board_px + side_panel, self.margin * 2 + board_px

    def cell_at(self, pos: Tuple[int, int], grid_size: int) -> Optional[Tuple[int, int]]:
        """Map a pixel position to a (row, col) board cell, or None off-board."""
        col = (pos[0] - self.margin) // self.cell_size
        row = (pos[1] - self.margin) // self.cell_size
        if pos[0] < self.margin or pos[1] < self.margin:
            return None
        if 0 <= row < grid_size and 0 <= col < grid_size:
            return int(row), int(col)
        return None

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        return self._font

    def _draw_board(self, screen: pygame.Surface, board: np.ndarray) -> None:
        h, w = board.shape
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    self.margin + x * self.cell_size,
                    self.margin + y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(screen, rgb_for_value(int(board[y, x])), rect)

    def _draw_piece(self, screen: pygame.Surface, piece: Piece, x0: int, y0: int, cell: int) -> None:
        # Fixed 4x4 slot so every preview takes the same space
        color = rgb_for_value(int(piece.color))
        for py in range(PREVIEW_SLOTS):
            for px in range(PREVIEW_SLOTS):
                rect = pygame.Rect(x0 + px * cell, y0 + py * cell, cell - 1, cell - 1)
                filled = py < piece.shape.shape[0] and px < piece.shape.shape[1] and piece.shape[py, px]
                pygame.draw.rect(screen, color if filled else EMPTY_CELL, rect)

    def draw_ghost(self, screen: pygame.Surface, game: BlockBlastGame, row: int, col: int) -> None:
        piece = game.current_piece
        color = (120, 220, 140) if game.can_place(piece, row, col) else (220, 120, 120)
        for pr, pc in piece.offsets():
            rect = pygame.Rect(
                self.margin + (col + pc) * self.cell_size,
                self.margin + (row + pr) * self.cell_size,
                self.cell_size - 1,
                self.cell_size - 1,
            )
            pygame.draw.rect(screen, color, rect, 2)

    def draw(self, screen: pygame.Surface, game: BlockBlastGame) -> None:
        font = self._font_obj()
        screen.fill(BACKGROUND)
        self._draw_board(screen, game.board)

        x0 = self.margin * 2 + game.grid.size * self.cell_size
        small = self.cell_size // 2
        y = self.margin
        for label, piece in (("Current", game.current_piece), ("Next", game.next_piece)):
            screen.blit(font.render(label, True, TEXT), (x0, y))
            y += 20
            self._draw_piece(screen, piece, x0, y, small)
            y += PREVIEW_SLOTS * small + 10

        info_lines = [
            f"Score: {game.score}",
            f"Level: {game.level}",
            "Place: Left click",
            "Reset: N",
        ]
        for i, txt in enumerate(info_lines):
            screen.blit(font.render(txt, True, TEXT), (x0, y + i * 20))

        if not game.has_moves:
            reason = "Game Over!" if game.game_over else "No room left!"
            over = font.render(f"{reason} Final Score: {game.score} - Press N", True, (255, 100, 100))
            screen.blit(over, (self.margin, 2))
