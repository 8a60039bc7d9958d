"""Unit tests for the pygame front-end in src/tetris_engine/visualization/"""

from unittest.mock import Mock

import numpy as np
import pygame
import pytest

from tetris_engine.game import Action, Board, GameSnapshot, GameStatus, Piece, TetrominoType, TransformKind
from tetris_engine.game.state import BACKGROUND, START
from tetris_engine.visualization import human_play
from tetris_engine.visualization.human_play import action_for_event, build_parser
from tetris_engine.visualization.renderer import PIECE_COLORS, Renderer
from tetris_engine.visualization.sound import synthesize


@pytest.mark.parametrize(
    "key, expected",
    [
        (pygame.K_LEFT, Action.transform(TransformKind.LEFT)),
        (pygame.K_UP, Action.transform(TransformKind.ROTATE)),
        (pygame.K_SPACE, Action.transform(TransformKind.FALL)),
        (pygame.K_RETURN, START),
        (pygame.K_q, None),
    ],
)
def test_keys_map_to_actions(key: int, expected) -> None:
    assert action_for_event(pygame.event.Event(pygame.KEYDOWN, key=key)) == expected


def test_focus_loss_maps_to_background() -> None:
    assert action_for_event(pygame.event.Event(pygame.WINDOWFOCUSLOST)) == BACKGROUND


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert (args.width, args.height, args.interval, args.mute) == (10, 20, 500, False)


def test_grid_surface_colors_cells() -> None:
    renderer = Renderer(cell_size=10)
    snapshot = GameSnapshot(
        status=GameStatus.RUNNING,
        board=Board.empty(4, 4).fill_row(3),
        piece=Piece(TetrominoType.T, x=0, y=0),
    )

    surface = renderer._grid_surface(snapshot.to_array())

    assert surface.get_size() == (40, 40)
    assert tuple(surface.get_at((5, 5)))[:3] == PIECE_COLORS[TetrominoType.T]
    assert tuple(surface.get_at((5, 35)))[:3] == (150, 150, 165)
    assert tuple(surface.get_at((35, 5)))[:3] == (20, 20, 26)


def test_window_size_includes_panel() -> None:
    renderer = Renderer(cell_size=10, margin=5, panel_width=50)
    assert renderer.window_size(10, 20) == (10 * 10 + 15 + 50, 20 * 10 + 10)


def test_synthesize_fades_out() -> None:
    samples = synthesize(440.0, 100, sample_rate=1000)
    assert samples.dtype == np.int16
    assert len(samples) == 100
    assert samples[-1] == 0
    assert np.abs(samples).max() <= int(0.3 * 32767)


def test_run_redraws_every_frame_without_state_changes(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    frames = [[], [], [], [pygame.event.Event(pygame.QUIT)]]
    monkeypatch.setattr(pygame.event, "get", lambda: frames.pop(0))
    draw = Mock()
    monkeypatch.setattr(human_play.Renderer, "draw", draw)

    human_play.run(["--mute", "--log-level", "WARNING"])

    assert draw.call_count == 4
    drawn = [c.args[1] for c in draw.call_args_list]
    assert all(isinstance(snapshot, GameSnapshot) for snapshot in drawn)
