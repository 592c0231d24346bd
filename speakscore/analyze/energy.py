"""
speakscore.analyze.energy - Per-frame RMS energy and pause detection.

Pause detection is a two-state machine (voiced / silent) over the ordered
energy stream. A pause opens on the first frame below the silence threshold
and closes on the next frame at or above it; only pauses lasting at least
the minimum duration are kept.
"""

from __future__ import annotations

import logging
from enum import Enum

import numpy as np

from speakscore.analyze.frames import Frame
from speakscore.analyze.stats import RunningStats
from speakscore.models import EnergySample, PauseSegment

logger = logging.getLogger(__name__)

SILENCE_THRESHOLD = 0.01
MIN_PAUSE_DURATION = 0.3


class VoiceState(Enum):
    VOICED = "voiced"
    SILENT = "silent"


def frame_rms(samples: np.ndarray) -> float:
    """Root-mean-square amplitude of a frame (0 for an empty frame)."""
    x = np.asarray(samples, dtype=np.float64)
    if len(x) == 0:
        return 0.0
    return float(np.sqrt(np.mean(x * x)))


class EnergyPauseDetector:
    """Tracks frame energy and pause segments over an ordered frame stream.

    Call ``process`` once per frame in time order, then ``finish`` once the
    stream is exhausted.
    """

    def __init__(
        self,
        silence_threshold: float = SILENCE_THRESHOLD,
        min_pause_duration: float = MIN_PAUSE_DURATION,
    ) -> None:
        self.silence_threshold = silence_threshold
        self.min_pause_duration = min_pause_duration

        self.stats = RunningStats()
        self.series: list[EnergySample] = []
        self.pauses: list[PauseSegment] = []
        self.total_pause_duration = 0.0
        self.longest_pause: PauseSegment | None = None

        self.state = VoiceState.VOICED
        self._pause_start = 0.0
        self._last_time: float | None = None
        self._finished = False

    def process(self, frame: Frame) -> float:
        if self._finished:
            raise RuntimeError("Detector already finished")

        time = frame.start_time_seconds
        rms = frame_rms(frame.samples)

        self.series.append(EnergySample(time=time, rms=rms))
        self.stats.update(rms)
        self._last_time = time

        if rms < self.silence_threshold:
            if self.state is VoiceState.VOICED:
                self.state = VoiceState.SILENT
                self._pause_start = time
        elif self.state is VoiceState.SILENT:
            self.state = VoiceState.VOICED
            self._close_pause(time)

        return rms

    def finish(self) -> None:
        """Close a pause still open at the end of the stream.

        The final frame's start time is the boundary, so trailing silence
        shorter than the minimum measured that way is not a pause.
        """
        if self._finished:
            return
        self._finished = True
        if self.state is VoiceState.SILENT and self._last_time is not None:
            self._close_pause(self._last_time)

    def _close_pause(self, end_time: float) -> None:
        duration = end_time - self._pause_start
        if duration < self.min_pause_duration:
            return

        pause = PauseSegment(start_time=self._pause_start, end_time=end_time, duration=duration)
        self.pauses.append(pause)
        self.total_pause_duration += duration
        if self.longest_pause is None or duration > self.longest_pause.duration:
            self.longest_pause = pause
        logger.debug("Pause %.3fs -> %.3fs (%.3fs)", pause.start_time, end_time, duration)

    @property
    def total_pauses(self) -> int:
        return len(self.pauses)
