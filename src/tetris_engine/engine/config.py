from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class EngineConfig:
    """Session constants and timing for a GameMachine.

    `descent_interval_ms` is only the starting value; the machine's
    `set_descent_interval` changes it at runtime.
    """

    width: int = 10
    height: int = 20
    spawn_y: int = 0
    descent_interval_ms: int = 500
    clear_frame_ms: int = 30
    clear_tail_ms: int = 100
    sound_enabled: bool = True
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width < 4 or self.height < 4:
            raise ValueError(f"Board must be at least 4x4 to fit every tetromino, got {self.width}x{self.height}")
        if not 0 <= self.spawn_y < self.height:
            raise ValueError(f"spawn_y {self.spawn_y} outside board of height {self.height}")
        if self.descent_interval_ms <= 0:
            raise ValueError(f"descent_interval_ms must be positive, got {self.descent_interval_ms}")
        if self.clear_frame_ms < 0 or self.clear_tail_ms < 0:
            raise ValueError("Screen clear delays must be non-negative")
