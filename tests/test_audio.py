import logging
import os
import wave

os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pytest

from sky_runner.audio import SoundBank, synth_tone, to_mixer_format
from sky_runner.config import CUES, SAMPLE_RATE


def write_wav(path, seconds: float = 0.05) -> None:
    samples = synth_tone(440.0, seconds)
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(SAMPLE_RATE)
        wav.writeframes(samples.tobytes())


def test_synth_tone_shape_and_amplitude() -> None:
    """Fallback tone is 16-bit at 30% amplitude."""
    tone = synth_tone(800.0, 0.2)
    assert tone.dtype == np.int16
    assert len(tone) == int(SAMPLE_RATE * 0.2)
    assert tone[0] == 0
    assert np.abs(tone).max() <= int(0.3 * 32767) + 1
    assert np.abs(tone).max() > int(0.29 * 32767)


def test_missing_files_fall_back_to_tones(tmp_path, caplog) -> None:
    """Missing files are replaced by tones and logged."""
    caplog.set_level(logging.WARNING, logger="sky_runner.audio")
    with SoundBank(tmp_path) as bank:
        if not bank.available:
            pytest.skip("no audio device")
        assert set(bank.sounds) == set(CUES)
        assert bank.fallbacks == set(CUES)
        assert "Could not load jump sound" in caplog.text
        bank.play("jump")
        bank.play("jump")  # restarting a playing cue is fine
    assert bank.sounds == {}


def test_wav_file_is_loaded(tmp_path) -> None:
    """A valid WAV file is used instead of a tone."""
    write_wav(tmp_path / CUES["hit"][0])
    with SoundBank(tmp_path) as bank:
        if not bank.available:
            pytest.skip("no audio device")
        assert "hit" not in bank.fallbacks
        assert "destroy" in bank.fallbacks
        assert bank.sounds["hit"].get_length() > 0


def test_corrupt_file_falls_back(tmp_path) -> None:
    """An undecodable file falls back to a tone."""
    (tmp_path / CUES["destroy"][0]).write_bytes(b"not a wav file")
    with SoundBank(tmp_path) as bank:
        if not bank.available:
            pytest.skip("no audio device")
        assert "destroy" in bank.fallbacks


def test_unknown_cue_warns(tmp_path, caplog) -> None:
    """Playing an unknown cue logs a warning."""
    caplog.set_level(logging.WARNING, logger="sky_runner.audio")
    with SoundBank(tmp_path, cues={}) as bank:
        assert bank.play("kaboom") is None
    assert "Unknown sound cue: kaboom" in caplog.text


def test_play_before_open_is_silent(tmp_path) -> None:
    """Playing before the bank is opened does nothing."""
    bank = SoundBank(tmp_path)
    assert bank.play("jump") is None
    bank.close()


@pytest.mark.parametrize(
    "size, dtype, silence",
    [(-16, np.int16, 0), (16, np.uint16, 32768), (-8, np.int8, 0), (8, np.uint8, 128), (32, np.float32, 0.0)],
)
def test_tone_matches_mixer_sample_size(size: int, dtype, silence) -> None:
    """Fallback tones are converted to the mixer's sample format."""
    tone = synth_tone(300.0, 0.1)
    converted = to_mixer_format(tone, size)
    assert converted.dtype == dtype
    assert len(converted) == len(tone)
    assert converted[0] == silence
    # peak keeps the 30% amplitude relative to full scale
    peak = np.abs(converted.astype(np.float64) - silence).max()
    full_scale = {np.int16: 32767, np.uint16: 32767, np.int8: 127, np.uint8: 127, np.float32: 1.0}[dtype]
    assert peak == pytest.approx(0.3 * full_scale, rel=0.05)


def test_unsupported_mixer_size_warns(caplog) -> None:
    """An unknown sample size keeps signed 16-bit samples and logs it."""
    caplog.set_level(logging.WARNING, logger="sky_runner.audio")
    tone = synth_tone(300.0, 0.01)
    assert to_mixer_format(tone, 24) is tone
    assert "Unsupported mixer sample size 24" in caplog.text
