from __future__ import annotations

from typing import Tuple

import pygame

from falling_block_rl.game import GameEngine, TetrominoType, rgb255, shape_of


BACKGROUND = (10, 10, 14)
BOARD_BG = (26, 26, 26)
PREVIEW_BG = (51, 51, 51)
PREVIEW_BORDER = (128, 128, 128)
TEXT = (230, 230, 230)

PREVIEW_CELLS = 5


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return BOARD_BG
    return rgb255(TetrominoType(abs(v) - 1))


class Renderer:
    """Draws the board, the falling piece, the next-piece preview and the score panel."""

    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.preview_cell = cell_size // 2
        self._font = None
        self._big_font = None

    def window_size(self, engine: GameEngine) -> Tuple[int, int]:
        grid = engine.state.grid
        side = PREVIEW_CELLS * self.preview_cell + self.margin * 2
        return (grid.width * self.cell_size + self.margin * 2 + side,
                grid.height * self.cell_size + self.margin * 2)

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
            self._big_font = pygame.font.SysFont(None, 48, bold=True)
        return self._font, self._big_font

    def _board_surface(self, engine: GameEngine) -> pygame.Surface:
        state = engine.get_state()
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(BOARD_BG)
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                if v == 0:
                    continue
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(v), rect)
        return surf

    def _preview_surface(self, kind: TetrominoType) -> pygame.Surface:
        size = PREVIEW_CELLS * self.preview_cell
        surf = pygame.Surface((size, size))
        surf.fill(PREVIEW_BG)
        pygame.draw.rect(surf, PREVIEW_BORDER, pygame.Rect(5, 5, size - 10, size - 10), 1)
        color = rgb255(kind)
        for dx, dy in shape_of(kind):
            rect = pygame.Rect(
                (dx + 1) * self.preview_cell,
                (dy + 1) * self.preview_cell,
                self.preview_cell - 1,
                self.preview_cell - 1,
            )
            pygame.draw.rect(surf, color, rect)
        return surf

    def draw(self, screen: pygame.Surface, engine: GameEngine) -> None:
        font, big_font = self._fonts()
        screen.fill(BACKGROUND)
        board = self._board_surface(engine)
        screen.blit(board, (self.margin, self.margin))

        side_x = self.margin * 2 + board.get_width()
        screen.blit(self._preview_surface(engine.get_next_type()), (side_x, self.margin))

        info_lines = [
            f"Score: {engine.get_score()}  Level: {engine.get_level()}",
            "Move: Left/Right/Down",
            "Rotate: Up",
            "Pause: P",
            "New game: N",
        ]
        y_text = self.margin * 2 + PREVIEW_CELLS * self.preview_cell
        for i, txt in enumerate(info_lines):
            screen.blit(font.render(txt, True, TEXT), (side_x, y_text + i * 20))

        if engine.is_game_over():
            banner = big_font.render("GAME OVER", True, (255, 255, 255))
            rect = banner.get_rect(center=(self.margin + board.get_width() // 2,
                                           self.margin + board.get_height() // 2))
            backdrop = rect.inflate(20, 30)
            pygame.draw.rect(screen, (0, 0, 0), backdrop)
            pygame.draw.rect(screen, PREVIEW_BORDER, backdrop, 1)
            screen.blit(banner, rect)
        elif engine.is_paused():
            banner = big_font.render("PAUSED", True, TEXT)
            screen.blit(banner, banner.get_rect(center=(self.margin + board.get_width() // 2,
                                                        self.margin + board.get_height() // 2)))
        pygame.display.flip()
