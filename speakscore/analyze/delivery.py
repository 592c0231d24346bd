"""
speakscore.analyze.delivery - Single-pass delivery analysis.

Walks the audio frames once, in order, feeding each frame to the pitch
tracker and the energy/pause detector, analyzes the transcript speech rate,
then scores everything into one AnalysisResult.
"""

from __future__ import annotations

import logging
import time

from speakscore.analyze.energy import EnergyPauseDetector
from speakscore.analyze.frames import iter_frames
from speakscore.analyze.pitch import PitchTracker
from speakscore.analyze.scoring import (
    overall_score,
    pause_rate,
    score_energy,
    score_intonation,
    score_pauses,
)
from speakscore.analyze.speech_rate import analyze_speech_rate, summarize_transcription
from speakscore.audio.loader import AudioBuffer
from speakscore.config import AnalysisConfig
from speakscore.exceptions import EmptyInputError
from speakscore.models import (
    AnalysisResult,
    AudioMetadata,
    EnergyMetrics,
    IntonationMetrics,
    PauseMetrics,
    TranscriptInput,
)

logger = logging.getLogger(__name__)


def extract_frame_features(
    audio: AudioBuffer,
    config: AnalysisConfig,
) -> tuple[PitchTracker, EnergyPauseDetector, int]:
    """Run the pitch tracker and energy/pause detector over every frame.

    Returns:
        Tuple of (pitch tracker, energy detector, frame count)
    """
    pitch = PitchTracker(
        audio.sample_rate,
        min_hz=config.pitch_min_hz,
        max_hz=config.pitch_max_hz,
        threshold=config.yin_threshold,
    )
    energy = EnergyPauseDetector(
        silence_threshold=config.silence_threshold,
        min_pause_duration=config.min_pause_duration,
    )

    frames = 0
    for frame in iter_frames(audio, config.frame_size, config.overlap):
        pitch.process(frame)
        energy.process(frame)
        frames += 1
    energy.finish()

    return pitch, energy, frames


def build_intonation(pitch: PitchTracker) -> IntonationMetrics:
    stats = pitch.stats
    category, score, feedback = score_intonation(stats.std_dev, stats.count)
    summary = stats.summary()
    return IntonationMetrics(
        voiced_frames=stats.count,
        average_pitch=summary["mean"],
        min_pitch=summary["min"],
        max_pitch=summary["max"],
        pitch_range=stats.value_range,
        std_dev=stats.std_dev,
        pitch_variation=stats.coefficient_of_variation,
        category=category,
        score=score,
        feedback=feedback,
    )


def build_energy(energy: EnergyPauseDetector) -> EnergyMetrics:
    stats = energy.stats
    summary = stats.summary()
    category, score, feedback = score_energy(summary["mean"])
    return EnergyMetrics(
        average_energy=summary["mean"],
        min_energy=summary["min"],
        max_energy=summary["max"],
        std_dev=stats.std_dev,
        energy_variation=stats.coefficient_of_variation,
        category=category,
        score=score,
        feedback=feedback,
    )


def build_pauses(energy: EnergyPauseDetector, duration_seconds: float) -> PauseMetrics:
    total = energy.total_pauses
    rate = pause_rate(total, duration_seconds)
    category, score, feedback = score_pauses(rate)
    return PauseMetrics(
        total_pauses=total,
        total_pause_duration=energy.total_pause_duration,
        average_pause_duration=energy.total_pause_duration / total if total else 0.0,
        pause_rate=rate,
        longest_pause=energy.longest_pause,
        pauses=tuple(energy.pauses),
        category=category,
        score=score,
        feedback=feedback,
    )


def analyze(
    audio: AudioBuffer,
    transcript: TranscriptInput,
    config: AnalysisConfig | None = None,
) -> AnalysisResult:
    """Analyze a recorded talk and its transcript.

    Args:
        audio: Decoded mono audio
        transcript: Timed transcript segments or full-text fallback
        config: Analysis parameters (defaults if None)

    Returns:
        Scored AnalysisResult

    Raises:
        EmptyInputError: If the audio buffer holds no samples
    """
    config = config or AnalysisConfig()

    if len(audio.samples) == 0:
        raise EmptyInputError("Audio buffer contains no samples")

    started = time.perf_counter()
    pitch, energy, frames = extract_frame_features(audio, config)
    speech_rate = analyze_speech_rate(transcript)

    duration = audio.duration_seconds
    intonation = build_intonation(pitch)
    energy_metrics = build_energy(energy)
    pauses = build_pauses(energy, duration)

    result = AnalysisResult(
        audio=AudioMetadata(
            duration_seconds=duration,
            sample_rate=audio.sample_rate,
            channels=1,
            frame_count=frames,
        ),
        transcription=summarize_transcription(transcript),
        speech_rate=speech_rate,
        intonation=intonation,
        energy=energy_metrics,
        pauses=pauses,
        overall_score=overall_score(
            speech_rate.score,
            intonation.score,
            energy_metrics.score,
            pauses.score,
        ),
        pitch_series=tuple(pitch.series),
        energy_series=tuple(energy.series),
    )

    logger.info(
        "Analyzed %.2fs of audio (%d frames, %d voiced, %d pauses) in %.3fs; overall %.1f",
        duration,
        frames,
        intonation.voiced_frames,
        pauses.total_pauses,
        time.perf_counter() - started,
        result.overall_score,
    )
    return result
