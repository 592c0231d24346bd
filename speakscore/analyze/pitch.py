"""
speakscore.analyze.pitch - Per-frame fundamental frequency tracking.

Uses the YIN estimator (de Cheveigné & Kawahara, 2002) on each frame:
difference function, cumulative mean normalised difference, absolute
threshold, parabolic interpolation. Frames without a confident period, or
whose estimate falls outside the voice band, count as unvoiced.

Lags are searched up to half the frame, so the lowest detectable pitch is
about ``sample_rate / (frame_size // 2 - 1)``: 86 Hz for 1024-sample frames
at 44.1 kHz, 31 Hz at 16 kHz. Below that bound frames read as unvoiced.
"""

from __future__ import annotations

import logging

import numpy as np

from speakscore.analyze.frames import Frame
from speakscore.analyze.stats import RunningStats
from speakscore.models import PitchSample

logger = logging.getLogger(__name__)

VOICE_MIN_HZ = 50.0
VOICE_MAX_HZ = 800.0
YIN_THRESHOLD = 0.20


def _difference(x: np.ndarray, half: int) -> np.ndarray:
    """YIN difference d(tau) = sum_{j<half} (x[j] - x[j+tau])^2 for tau < half."""
    n = len(x)
    fft_size = 1 << (n + half - 1).bit_length()
    spectrum = np.fft.rfft(x, fft_size) * np.fft.rfft(x[:half][::-1], fft_size)
    corr = np.fft.irfft(spectrum, fft_size)[half - 1 : 2 * half - 1]

    power = np.concatenate(([0.0], np.cumsum(x * x)))
    energy_head = power[half]
    tau = np.arange(half)
    energy_shifted = power[tau + half] - power[tau]

    return np.maximum(energy_head + energy_shifted - 2.0 * corr, 0.0)


def _cumulative_mean_normalized(diff: np.ndarray) -> np.ndarray:
    cmnd = np.ones_like(diff)
    running = np.cumsum(diff[1:])
    tau = np.arange(1, len(diff))
    with np.errstate(divide="ignore", invalid="ignore"):
        cmnd[1:] = np.where(running > 0, diff[1:] * tau / running, 1.0)
    return cmnd


def _parabolic(values: np.ndarray, tau: int) -> float:
    if tau <= 0 or tau >= len(values) - 1:
        return float(tau)
    s0, s1, s2 = values[tau - 1], values[tau], values[tau + 1]
    denom = 2.0 * (2.0 * s1 - s2 - s0)
    if denom == 0:
        return float(tau)
    return tau + (s2 - s0) / denom


def estimate_pitch(
    samples: np.ndarray,
    sample_rate: int,
    threshold: float = YIN_THRESHOLD,
) -> float | None:
    """Estimate the fundamental frequency of one frame.

    Args:
        samples: Frame samples
        sample_rate: Sample rate in Hz
        threshold: YIN absolute threshold on the normalised difference

    Returns:
        Frequency in Hz, or None when the frame has no clear period
    """
    x = np.asarray(samples, dtype=np.float64)
    half = len(x) // 2
    if half < 3 or not np.any(x):
        return None

    cmnd = _cumulative_mean_normalized(_difference(x, half))

    below = np.flatnonzero(cmnd[2:] < threshold)
    if len(below) == 0:
        return None

    tau = int(below[0]) + 2
    while tau + 1 < half and cmnd[tau + 1] < cmnd[tau]:
        tau += 1

    # Still descending at the last lag: the true period lies beyond the window.
    if tau >= half - 1:
        return None

    period = _parabolic(cmnd, tau)
    if period <= 0 or not np.isfinite(period):
        return None
    return sample_rate / period


class PitchTracker:
    """Collects voiced pitch estimates over an ordered stream of frames."""

    def __init__(
        self,
        sample_rate: int,
        min_hz: float = VOICE_MIN_HZ,
        max_hz: float = VOICE_MAX_HZ,
        threshold: float = YIN_THRESHOLD,
    ) -> None:
        self.sample_rate = sample_rate
        self.min_hz = min_hz
        self.max_hz = max_hz
        self.threshold = threshold
        self.stats = RunningStats()
        self.series: list[PitchSample] = []

    def process(self, frame: Frame) -> float | None:
        """Estimate pitch for one frame, recording it when it is voiced."""
        frequency = estimate_pitch(frame.samples, self.sample_rate, self.threshold)
        if frequency is None or not np.isfinite(frequency):
            return None
        if not self.min_hz <= frequency <= self.max_hz:
            return None

        frequency = float(frequency)
        self.series.append(PitchSample(time=frame.start_time_seconds, frequency_hz=frequency))
        self.stats.update(frequency)
        return frequency

    @property
    def voiced_frames(self) -> int:
        return self.stats.count
