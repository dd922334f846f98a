"""Sound-effect bank backed by pygame.mixer.

Cues are loaded from WAV files once at start-up. A cue whose file is missing
or undecodable is replaced by a synthesized sine tone so the game always has
something to play.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

import numpy as np
import pygame

from .config import CUES, SAMPLE_RATE, TONE_AMPLITUDE

logger = logging.getLogger(__name__)


def synth_tone(
    frequency: float,
    duration: float,
    sample_rate: int = SAMPLE_RATE,
    amplitude: float = TONE_AMPLITUDE,
) -> np.ndarray:
    """Mono signed 16-bit sine wave."""
    n = int(sample_rate * duration)
    t = np.arange(n, dtype=np.float64) / sample_rate
    wave = np.sin(2 * np.pi * frequency * t) * amplitude * 32767
    return wave.astype(np.int16)


def to_mixer_format(samples: np.ndarray, size: int) -> np.ndarray:
    """Convert signed 16-bit samples to the sample format a mixer reports.

    `size` follows pygame.mixer.get_init(): negative for signed, 32 for float.
    """
    if size == -16:
        return samples
    if size == 16:
        return (samples.astype(np.int32) + 32768).astype(np.uint16)
    if size == -8:
        return (samples >> 8).astype(np.int8)
    if size == 8:
        return ((samples >> 8) + 128).astype(np.uint8)
    if size == 32:
        return (samples / 32767.0).astype(np.float32)
    logger.warning(f"Unsupported mixer sample size {size}; tone left as signed 16-bit")
    return samples


class SoundBank:
    """Explicit audio-subsystem handle.

    Use as a context manager (or call open()/close()) so every sound is
    stopped and the mixer released exactly once at shutdown.
    """

    def __init__(
        self,
        sound_dir: str | Path,
        cues: Mapping[str, Tuple[str, float, float]] = CUES,
        sample_rate: int = SAMPLE_RATE,
    ) -> None:
        self.sound_dir = Path(sound_dir)
        self.cues = dict(cues)
        self.sample_rate = sample_rate
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.fallbacks: set[str] = set()
        self._owns_mixer = False

    def __enter__(self) -> "SoundBank":
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def available(self) -> bool:
        return bool(self.sounds)

    def open(self) -> "SoundBank":
        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.pre_init(self.sample_rate, -16, 1)
                pygame.mixer.init()
            except pygame.error as e:
                logger.error(f"Audio unavailable, running silent: {e}")
                return self
            self._owns_mixer = True

        for cue, (filename, frequency, duration) in self.cues.items():
            self.sounds[cue] = self._load(cue, filename, frequency, duration)
        logger.info(f"Audio ready: {len(self.sounds)} cues ({len(self.fallbacks)} synthesized)")
        return self

    def _load(self, cue: str, filename: str, frequency: float, duration: float) -> pygame.mixer.Sound:
        path = self.sound_dir / filename
        try:
            return pygame.mixer.Sound(str(path))
        except (FileNotFoundError, pygame.error) as e:
            logger.warning(f"Could not load {cue} sound from {path}: {e}; using {frequency:.0f} Hz tone")
            self.fallbacks.add(cue)
            return self._tone(frequency, duration)

    def _tone(self, frequency: float, duration: float) -> pygame.mixer.Sound:
        mixer_rate, size, channels = pygame.mixer.get_init()
        samples = to_mixer_format(synth_tone(frequency, duration, mixer_rate), size)
        if channels > 1:
            samples = np.repeat(samples[:, np.newaxis], channels, axis=1)
        return pygame.mixer.Sound(buffer=np.ascontiguousarray(samples).tobytes())

    def play(self, cue: str) -> Optional[pygame.mixer.Channel]:
        """Restart a cue from the beginning; never waits for it to finish."""
        if cue not in self.cues:
            logger.warning(f"Unknown sound cue: {cue}")
            return None
        sound = self.sounds.get(cue)
        if sound is None:
            return None
        sound.stop()
        return sound.play()

    def close(self) -> None:
        for sound in self.sounds.values():
            sound.stop()
        self.sounds.clear()
        self.fallbacks.clear()
        if self._owns_mixer:
            pygame.mixer.quit()
            self._owns_mixer = False
