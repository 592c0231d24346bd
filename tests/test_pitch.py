"""Tests for speakscore.analyze.pitch module."""

from __future__ import annotations

import numpy as np
import pytest

from speakscore.analyze.frames import Frame
from speakscore.analyze.pitch import PitchTracker, estimate_pitch
from tests.signals import SAMPLE_RATE, sine


def tone_frame(frequency: float, index: int = 0, amplitude: float = 0.1) -> Frame:
    samples = sine(frequency, 1024 / SAMPLE_RATE, amplitude=amplitude)[:1024]
    return Frame(index=index, start_time_seconds=index * 0.032, samples=samples)


class TestEstimatePitch:
    @pytest.mark.parametrize("frequency", [100.0, 200.0, 250.0, 400.0])
    def test_sine_frequency(self, frequency: float) -> None:
        frame = tone_frame(frequency)
        estimate = estimate_pitch(frame.samples, SAMPLE_RATE)
        assert estimate is not None
        assert estimate == pytest.approx(frequency, rel=0.02)

    def test_amplitude_independent(self) -> None:
        quiet = estimate_pitch(tone_frame(200.0, amplitude=0.01).samples, SAMPLE_RATE)
        loud = estimate_pitch(tone_frame(200.0, amplitude=0.8).samples, SAMPLE_RATE)
        assert quiet == pytest.approx(loud, rel=1e-6)

    def test_silence_is_unvoiced(self) -> None:
        assert estimate_pitch(np.zeros(1024), SAMPLE_RATE) is None

    def test_noise_is_unvoiced(self) -> None:
        rng = np.random.default_rng(3)
        noise = rng.normal(scale=0.1, size=1024)
        assert estimate_pitch(noise, SAMPLE_RATE) is None

    def test_too_short_frame(self) -> None:
        assert estimate_pitch(np.ones(4), SAMPLE_RATE) is None


class TestEstimatePitchAt44k:
    SR = 44100

    def frame(self, frequency: float) -> np.ndarray:
        return sine(frequency, 1024 / self.SR + 0.001, sr=self.SR)[:1024]

    @pytest.mark.parametrize("frequency", [90.0, 120.0, 220.0])
    def test_detectable_frequency(self, frequency: float) -> None:
        estimate = estimate_pitch(self.frame(frequency), self.SR)
        assert estimate is not None
        assert estimate == pytest.approx(frequency, rel=0.02)

    @pytest.mark.parametrize("frequency", [55.0, 70.0, 85.0])
    def test_period_beyond_search_window_is_unvoiced(self, frequency: float) -> None:
        assert estimate_pitch(self.frame(frequency), self.SR) is None

    def test_no_estimate_pinned_to_window_edge(self) -> None:
        edge = self.SR / 511
        for frequency in np.arange(80.0, 95.0, 0.5):
            estimate = estimate_pitch(self.frame(frequency), self.SR)
            if estimate is not None:
                assert estimate == pytest.approx(frequency, rel=0.02)
                assert estimate > edge


class TestPitchTracker:
    def test_records_voiced_frames(self) -> None:
        tracker = PitchTracker(SAMPLE_RATE)
        for i in range(3):
            tracker.process(tone_frame(200.0, index=i))

        assert tracker.voiced_frames == 3
        assert [s.time for s in tracker.series] == [0.0, 0.032, 0.064]
        assert tracker.stats.mean == pytest.approx(200.0, rel=0.02)

    def test_silent_frame_not_recorded(self) -> None:
        tracker = PitchTracker(SAMPLE_RATE)
        result = tracker.process(Frame(index=0, start_time_seconds=0.0, samples=np.zeros(1024)))

        assert result is None
        assert tracker.series == []
        assert tracker.stats.count == 0

    def test_out_of_band_pitch_discarded(self) -> None:
        tracker = PitchTracker(SAMPLE_RATE)
        assert tracker.process(tone_frame(1000.0)) is None
        assert tracker.voiced_frames == 0

    def test_custom_band(self) -> None:
        tracker = PitchTracker(SAMPLE_RATE, min_hz=300.0, max_hz=800.0)
        tracker.process(tone_frame(200.0))
        tracker.process(tone_frame(400.0, index=1))

        assert tracker.voiced_frames == 1
        assert tracker.series[0].time == 0.032

    def test_retained_samples_in_voice_band(self) -> None:
        tracker = PitchTracker(SAMPLE_RATE)
        rng = np.random.default_rng(11)
        for i, frequency in enumerate([60.0, 120.0, 240.0, 480.0, 900.0, 1500.0]):
            frame = tone_frame(frequency, index=i)
            noisy = frame.samples + rng.normal(scale=0.01, size=1024)
            tracker.process(Frame(frame.index, frame.start_time_seconds, noisy))

        for sample in tracker.series:
            assert 50.0 <= sample.frequency_hz <= 800.0
            assert np.isfinite(sample.frequency_hz)
