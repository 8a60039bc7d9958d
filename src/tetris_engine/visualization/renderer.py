from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from tetris_engine.game import GameSnapshot, GameStatus, TetrominoType


STATUS_LABELS = {
    GameStatus.WELCOME: "Press Enter to start",
    GameStatus.RUNNING: "",
    GameStatus.PAUSED: "Paused - Enter to continue",
    GameStatus.LINE_CLEARING: "",
    GameStatus.SCREEN_CLEARING: "",
    GameStatus.GAME_OVER: "Game Over - Enter to play again",
}


PIECE_COLORS = {
    TetrominoType.I: (0, 240, 240),
    TetrominoType.O: (240, 240, 0),
    TetrominoType.T: (160, 0, 240),
    TetrominoType.S: (0, 240, 0),
    TetrominoType.Z: (240, 0, 0),
    TetrominoType.J: (0, 0, 240),
    TetrominoType.L: (240, 160, 0),
}


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return (20, 20, 26)
    if v > 0:
        return (150, 150, 165)  # locked
    # Negative values are the falling piece, encoded as -kind
    return PIECE_COLORS.get(-v, (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 200) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            width * self.cell_size + self.margin * 3 + self.panel_width,
            height * self.cell_size + self.margin * 2,
        )

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        width = w * self.cell_size
        height = h * self.cell_size
        surf = pygame.Surface((width, height))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                color = _color_for_value(v)
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color, rect)
        return surf

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot, score: int, font: pygame.font.Font) -> None:
        grid_surf = self._grid_surface(snapshot.to_array())
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))

        panel_x = self.margin * 2 + grid_surf.get_width()
        lines = [
            f"Score: {score}",
            f"Sound: {'on' if snapshot.sound_enabled else 'off'}",
            STATUS_LABELS[snapshot.status],
        ]
        y = self.margin
        for line in lines:
            if line:
                screen.blit(font.render(line, True, (230, 230, 240)), (panel_x, y))
            y += 30
        pygame.display.flip()
