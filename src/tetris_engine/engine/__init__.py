"""State machine, timers and collaborator interfaces around the game rules."""

from .collaborators import (
    InMemoryScoreStore,
    NullSettingsNavigator,
    NullSoundSink,
    ScoreStore,
    SettingsNavigator,
    SoundSink,
    SoundType,
)
from .config import EngineConfig
from .machine import GameMachine
from .scheduler import AsyncioScheduler, ManualScheduler, Scheduler, TimerHandle
from .timers import DescentTimer, ScreenClearAnimation

__all__ = [
    "GameMachine",
    "EngineConfig",
    "Scheduler",
    "TimerHandle",
    "ManualScheduler",
    "AsyncioScheduler",
    "DescentTimer",
    "ScreenClearAnimation",
    "SoundType",
    "SoundSink",
    "ScoreStore",
    "SettingsNavigator",
    "NullSoundSink",
    "InMemoryScoreStore",
    "NullSettingsNavigator",
]
