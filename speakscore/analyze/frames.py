"""
speakscore.analyze.frames - Overlapping analysis frames.

Walks an AudioBuffer in fixed-size windows advancing by
``frame_size - overlap`` samples. The final partial window is zero-padded to
full length, so every sample of the buffer lands in at least one frame and
every frame has exactly ``frame_size`` samples.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import NamedTuple

import numpy as np

from speakscore.audio.loader import AudioBuffer


class Frame(NamedTuple):
    index: int
    start_time_seconds: float
    samples: np.ndarray


def frame_count(num_samples: int, frame_size: int, overlap: int) -> int:
    """Number of frames needed to cover ``num_samples`` samples."""
    if num_samples <= 0:
        return 0
    hop = frame_size - overlap
    return 1 + math.ceil(max(0, num_samples - frame_size) / hop)


def iter_frames(audio: AudioBuffer, frame_size: int = 1024, overlap: int = 512) -> Iterator[Frame]:
    """Yield frames over the buffer in time order.

    Args:
        audio: Buffer to walk
        frame_size: Window length in samples
        overlap: Samples shared by consecutive windows

    Yields:
        Frame tuples with the window start time in seconds
    """
    import librosa

    if frame_size <= 0:
        raise ValueError(f"frame_size must be positive, got {frame_size}")
    if not 0 <= overlap < frame_size:
        raise ValueError(f"overlap must be in [0, {frame_size}), got {overlap}")

    n_frames = frame_count(len(audio.samples), frame_size, overlap)
    if n_frames == 0:
        return

    hop = frame_size - overlap
    padded_length = (n_frames - 1) * hop + frame_size
    padded = np.pad(audio.samples, (0, padded_length - len(audio.samples)))

    windows = librosa.util.frame(padded, frame_length=frame_size, hop_length=hop)
    for index in range(n_frames):
        yield Frame(
            index=index,
            start_time_seconds=index * hop / audio.sample_rate,
            samples=windows[:, index],
        )
