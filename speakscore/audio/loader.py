"""
speakscore.audio.loader - Decode encoded audio into a mono sample buffer.

Decoding goes through librosa (soundfile backend), keeping the file's native
sample rate and downmixing to mono.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from speakscore.exceptions import DecodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AudioBuffer:
    """Decoded mono PCM audio, samples normalised to [-1, 1]."""

    samples: np.ndarray
    sample_rate: int

    @classmethod
    def from_array(cls, samples: Any, sample_rate: int) -> AudioBuffer:
        data = np.asarray(samples, dtype=np.float32)
        if data.ndim != 1:
            raise ValueError(f"Expected mono samples, got array of shape {data.shape}")
        if sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, got {sample_rate}")
        return cls(samples=data, sample_rate=int(sample_rate))

    @property
    def duration_seconds(self) -> float:
        return len(self.samples) / self.sample_rate

    def __len__(self) -> int:
        return len(self.samples)


def decode_audio(data: bytes, sample_rate: int | None = None) -> AudioBuffer:
    """Decode encoded audio bytes (WAV, FLAC, OGG, ...) into an AudioBuffer.

    Args:
        data: Encoded audio file contents
        sample_rate: Resample to this rate; keep the native rate if None

    Returns:
        Mono AudioBuffer

    Raises:
        DecodeError: If the bytes are empty, unsupported or corrupt
    """
    if not data:
        raise DecodeError("Audio data is empty")
    return _load(io.BytesIO(data), sample_rate, label=f"<{len(data)} bytes>")


def load_audio(path: Path, sample_rate: int | None = None) -> AudioBuffer:
    """Decode an audio file from disk into an AudioBuffer.

    Raises:
        DecodeError: If the file is missing, unsupported or corrupt
    """
    if not path.is_file():
        raise DecodeError(f"Audio file not found: {path}")
    return _load(str(path), sample_rate, label=path.name)


def _load(source: Any, sample_rate: int | None, label: str) -> AudioBuffer:
    import librosa

    try:
        samples, sr = librosa.load(source, sr=sample_rate, mono=True)
    except Exception as e:
        raise DecodeError(f"Failed to decode audio {label}: {e}") from e

    buffer = AudioBuffer.from_array(samples, sr)
    logger.debug(
        "Decoded %s: %d samples at %d Hz (%.2fs)",
        label,
        len(buffer),
        buffer.sample_rate,
        buffer.duration_seconds,
    )
    return buffer
