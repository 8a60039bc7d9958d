"""Interfaces of the services the engine talks to but does not own."""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Protocol


logger = logging.getLogger(__name__)


class SoundType(Enum):
    WELCOME = auto()
    TRANSFORMATION = auto()
    ROTATE = auto()
    FALL = auto()
    CLEAN = auto()


class SoundSink(Protocol):
    def play(self, sound: SoundType) -> None:
        """Fire-and-forget playback. Errors are logged and ignored by the caller."""
        ...


class ScoreStore(Protocol):
    score: int

    def add(self, points: int) -> int:
        ...

    def reset(self) -> None:
        ...


class SettingsNavigator(Protocol):
    def open_settings(self) -> None:
        ...


class NullSoundSink:
    def play(self, sound: SoundType) -> None:
        logger.debug("Sound: %s", sound.name)


class InMemoryScoreStore:
    def __init__(self, score: int = 0) -> None:
        self.score = score

    def add(self, points: int) -> int:
        self.score += points
        return self.score

    def reset(self) -> None:
        self.score = 0


class NullSettingsNavigator:
    def open_settings(self) -> None:
        logger.info("Settings requested; no settings screen attached")
