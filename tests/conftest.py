"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from speakscore.audio.loader import AudioBuffer
from tests.signals import SAMPLE_RATE, sine, wav_bytes


@pytest.fixture
def tone_buffer() -> AudioBuffer:
    """Two seconds of a steady 200 Hz tone."""
    return AudioBuffer.from_array(sine(200.0, 2.0), SAMPLE_RATE)


@pytest.fixture
def silent_buffer() -> AudioBuffer:
    """Ten seconds of digital silence."""
    return AudioBuffer.from_array(np.zeros(SAMPLE_RATE * 10), SAMPLE_RATE)


@pytest.fixture
def speech_like_buffer() -> AudioBuffer:
    """Tone, one second of silence, tone."""
    samples = np.concatenate(
        [
            sine(200.0, 1.0),
            np.zeros(SAMPLE_RATE),
            sine(200.0, 1.0),
        ]
    )
    return AudioBuffer.from_array(samples, SAMPLE_RATE)


@pytest.fixture
def tone_wav(tmp_path: Path) -> Path:
    path = tmp_path / "talk.wav"
    path.write_bytes(wav_bytes(sine(200.0, 2.0)))
    return path


@pytest.fixture
def sample_transcription() -> dict:
    """Return a Whisper-style transcription response."""
    return {
        "text": " Good morning everyone. Thank you all for coming today.",
        "language": "en",
        "duration": 6.0,
        "segments": [
            {"start": 0.0, "end": 2.0, "text": " Good morning everyone."},
            {"start": 2.0, "end": 6.0, "text": " Thank you all for coming today."},
        ],
    }
