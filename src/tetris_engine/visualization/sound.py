from __future__ import annotations

import logging
from typing import Dict, Tuple

import numpy as np
import pygame

from tetris_engine.engine import SoundType


logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050

# (frequency Hz, duration ms) per effect
TONES: Dict[SoundType, Tuple[float, int]] = {
    SoundType.WELCOME: (523.25, 220),
    SoundType.TRANSFORMATION: (880.0, 40),
    SoundType.ROTATE: (660.0, 50),
    SoundType.FALL: (220.0, 90),
    SoundType.CLEAN: (1046.5, 160),
}


def synthesize(frequency: float, duration_ms: int, volume: float = 0.3, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Mono 16-bit sine burst with a linear fade-out."""
    n = int(sample_rate * duration_ms / 1000)
    t = np.arange(n) / sample_rate
    envelope = np.linspace(1.0, 0.0, n)
    wave = np.sin(2 * np.pi * frequency * t) * envelope * volume
    return (wave * 32767).astype(np.int16)


class PygameSoundSink:
    """Plays synthesized beeps through pygame.mixer.

    If the mixer cannot start (no audio device), the sink stays silent.
    """

    def __init__(self) -> None:
        self._sounds: Dict[SoundType, pygame.mixer.Sound] = {}
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
        except pygame.error as exc:
            logger.warning("Audio unavailable, sounds disabled: %s", exc)
            return
        _, _, channels = pygame.mixer.get_init()
        for sound, (frequency, duration_ms) in TONES.items():
            samples = synthesize(frequency, duration_ms)
            if channels > 1:
                samples = np.repeat(samples[:, None], channels, axis=1)
            self._sounds[sound] = pygame.sndarray.make_sound(np.ascontiguousarray(samples))

    def play(self, sound: SoundType) -> None:
        effect = self._sounds.get(sound)
        if effect is not None:
            effect.play()
