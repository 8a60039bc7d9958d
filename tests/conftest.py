"""
Pytest will auto-discover / import this file called 'conftest.py'.
Fixtures shared by the game and engine tests.
"""

from typing import Callable
from unittest.mock import Mock

import numpy as np
import pytest

from tetris_engine.engine import EngineConfig, GameMachine, InMemoryScoreStore, ManualScheduler
from tetris_engine.game import Board, PieceGenerator, TetrominoType


@pytest.fixture
def board_from_rows() -> Callable[..., Board]:
    """Call the inner function with rows drawn as strings ('#' filled, '.' empty), top row first."""

    def _create_board(*rows: str) -> Board:
        return Board(np.array([[1 if c == "#" else 0 for c in row] for row in rows], dtype=np.int8))

    return _create_board


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def sound() -> Mock:
    return Mock()


@pytest.fixture
def score_store() -> InMemoryScoreStore:
    return InMemoryScoreStore()


@pytest.fixture
def make_machine(scheduler: ManualScheduler, sound: Mock, score_store: InMemoryScoreStore) -> Callable[..., GameMachine]:
    """Call the inner function with the piece kinds to spawn (cycled) and any EngineConfig overrides."""

    def _create_machine(*kinds: TetrominoType, **config) -> GameMachine:
        sequence = kinds or (TetrominoType.I,)
        return GameMachine(
            EngineConfig(**config),
            scheduler,
            sound=sound,
            score_store=score_store,
            settings=Mock(),
            pieces=PieceGenerator(sequence=sequence),
        )

    return _create_machine
