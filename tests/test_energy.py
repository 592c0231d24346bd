"""Tests for speakscore.analyze.energy module."""

from __future__ import annotations

import numpy as np
import pytest

from speakscore.analyze.energy import EnergyPauseDetector, VoiceState, frame_rms
from speakscore.analyze.frames import Frame

LOUD = 0.5
QUIET = 0.0


def run(levels: list[float], step: float = 0.1, **kwargs) -> EnergyPauseDetector:
    """Feed one constant-level frame per entry, ``step`` seconds apart."""
    detector = EnergyPauseDetector(**kwargs)
    for i, level in enumerate(levels):
        detector.process(Frame(index=i, start_time_seconds=i * step, samples=np.full(64, level)))
    detector.finish()
    return detector


class TestFrameRms:
    def test_constant_signal(self) -> None:
        assert frame_rms(np.full(128, 0.5)) == pytest.approx(0.5)

    def test_sign_independent(self) -> None:
        assert frame_rms(np.array([0.3, -0.3, 0.3, -0.3])) == pytest.approx(0.3)

    def test_silence(self) -> None:
        assert frame_rms(np.zeros(1024)) == 0.0

    def test_empty_frame(self) -> None:
        assert frame_rms(np.array([])) == 0.0

    def test_sine_rms(self) -> None:
        t = np.arange(1600) / 16000
        samples = 0.1 * np.sin(2 * np.pi * 100 * t)
        assert frame_rms(samples) == pytest.approx(0.1 / np.sqrt(2), rel=1e-3)


class TestEnergyPauseDetector:
    def test_energy_series_and_stats(self) -> None:
        detector = run([LOUD, 0.2, LOUD])
        assert [s.rms for s in detector.series] == pytest.approx([0.5, 0.2, 0.5])
        assert detector.stats.count == 3
        assert detector.stats.mean == pytest.approx(0.4)
        assert all(s.rms >= 0 for s in detector.series)

    def test_pause_detected(self) -> None:
        detector = run([LOUD, QUIET, QUIET, QUIET, QUIET, QUIET, LOUD])

        assert detector.total_pauses == 1
        pause = detector.pauses[0]
        assert pause.start_time == pytest.approx(0.1)
        assert pause.end_time == pytest.approx(0.6)
        assert pause.duration == pytest.approx(0.5)
        assert detector.total_pause_duration == pytest.approx(0.5)
        assert detector.longest_pause == pause

    def test_short_pause_ignored(self) -> None:
        detector = run([LOUD, QUIET, QUIET, LOUD])
        assert detector.total_pauses == 0
        assert detector.longest_pause is None
        assert detector.total_pause_duration == 0.0

    def test_pause_open_at_end_is_closed(self) -> None:
        detector = run([LOUD, QUIET, QUIET, QUIET, QUIET, QUIET])

        assert detector.total_pauses == 1
        assert detector.pauses[0].end_time == pytest.approx(0.5)
        assert detector.pauses[0].duration == pytest.approx(0.4)

    def test_silence_from_start(self) -> None:
        detector = run([QUIET] * 11)
        assert detector.total_pauses == 1
        assert detector.pauses[0].start_time == 0.0
        assert detector.pauses[0].duration == pytest.approx(1.0)

    def test_trailing_silence_measured_to_last_frame(self) -> None:
        detector = run([LOUD, QUIET, QUIET, QUIET])

        assert detector.state is VoiceState.SILENT
        assert detector.total_pauses == 0
        assert detector.total_pause_duration == 0.0

    def test_longest_pause_first_wins_ties(self) -> None:
        detector = run([LOUD, QUIET, QUIET, LOUD, QUIET, QUIET, LOUD], step=1.0)

        assert detector.total_pauses == 2
        assert detector.pauses[0].duration == detector.pauses[1].duration == 2.0
        assert detector.longest_pause.start_time == 1.0

    def test_longest_pause_tracks_maximum(self) -> None:
        detector = run([LOUD, QUIET, LOUD, QUIET, QUIET, QUIET, LOUD], step=1.0)
        assert detector.longest_pause.start_time == 3.0
        assert detector.longest_pause.duration == 3.0

    def test_threshold_is_strict(self) -> None:
        detector = run([0.5] * 10, silence_threshold=0.5)
        assert detector.state is VoiceState.VOICED
        assert detector.total_pauses == 0

    def test_custom_minimum_duration(self) -> None:
        detector = run([LOUD, QUIET, QUIET, LOUD], min_pause_duration=0.1)
        assert detector.total_pauses == 1

    def test_pause_durations_meet_minimum(self) -> None:
        rng = np.random.default_rng(5)
        levels = list(rng.choice([LOUD, QUIET], size=200, p=[0.6, 0.4]))
        detector = run(levels, step=0.032)
        for pause in detector.pauses:
            assert pause.duration >= 0.3
            assert pause.end_time - pause.start_time == pytest.approx(pause.duration)

    def test_process_after_finish_raises(self) -> None:
        detector = run([LOUD])
        with pytest.raises(RuntimeError):
            detector.process(Frame(index=1, start_time_seconds=0.1, samples=np.zeros(4)))
