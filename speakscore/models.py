"""
speakscore.models - Transcript input and analysis result models.

Every result model is frozen: the engine builds each one exactly once and
callers (persistence, chart rendering) only read them.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# Transcript input


class SegmentInput(FrozenModel):
    """One timed transcript segment as delivered by the transcription service."""

    start: float
    end: float
    text: str = ""


class TranscriptInput(FrozenModel):
    """Transcript handed to the engine.

    Either ``segments`` is non-empty, or ``full_text`` with ``total_duration``
    acts as a single fallback segment.
    """

    segments: tuple[SegmentInput, ...] = ()
    full_text: str = ""
    total_duration: float = 0.0
    language: str | None = None

    @classmethod
    def from_segments(
        cls, segments: list[tuple[float, float, str]], language: str | None = None
    ) -> TranscriptInput:
        items = tuple(SegmentInput(start=s, end=e, text=t) for s, e, t in segments)
        return cls(
            segments=items,
            full_text="".join(seg.text for seg in items),
            language=language,
        )

    @classmethod
    def from_text(
        cls, full_text: str, total_duration: float, language: str | None = None
    ) -> TranscriptInput:
        return cls(full_text=full_text, total_duration=total_duration, language=language)

    @property
    def has_segments(self) -> bool:
        return len(self.segments) > 0


# Categories


class SpeechRateCategory(str, Enum):
    VERY_SLOW = "very slow"
    SLOW = "slow"
    GOOD = "good"
    FAST = "fast"
    VERY_FAST = "very fast"


class IntonationCategory(str, Enum):
    LOW = "low"
    GOOD = "good"
    HIGH = "high"


class EnergyCategory(str, Enum):
    LOW = "low"
    GOOD = "good"
    HIGH = "high"


class PauseCategory(str, Enum):
    LESS_PAUSES = "less pauses"
    EXCELLENT = "excellent"
    MANY_PAUSES = "many pauses"


# Time series and segments


class PitchSample(FrozenModel):
    time: float
    frequency_hz: float


class EnergySample(FrozenModel):
    time: float
    rms: float = Field(ge=0.0)


class PauseSegment(FrozenModel):
    start_time: float
    end_time: float
    duration: float


class TranscriptSegment(FrozenModel):
    """A transcript segment mapped back onto the full transcript text."""

    start_time: float
    end_time: float
    text: str
    char_start_index: int
    char_end_index: int
    word_count: int
    speech_rate_wpm: float


# Metrics


class SpeechRateMetrics(FrozenModel):
    avg_wpm: float = 0.0
    min_wpm: float = 0.0
    max_wpm: float = 0.0
    std_dev: float = 0.0
    segments: tuple[TranscriptSegment, ...] = ()
    slowest_segment: TranscriptSegment | None = None
    fastest_segment: TranscriptSegment | None = None
    skipped_segments: int = 0
    category: SpeechRateCategory | None = None
    score: float = Field(default=0.0, ge=0.0, le=100.0)
    feedback: str = ""


class IntonationMetrics(FrozenModel):
    voiced_frames: int = 0
    average_pitch: float = 0.0
    min_pitch: float = 0.0
    max_pitch: float = 0.0
    pitch_range: float = 0.0
    std_dev: float = 0.0
    pitch_variation: float = 0.0
    category: IntonationCategory = IntonationCategory.LOW
    score: float = Field(default=0.0, ge=0.0, le=100.0)
    feedback: str = ""


class EnergyMetrics(FrozenModel):
    average_energy: float = 0.0
    min_energy: float = 0.0
    max_energy: float = 0.0
    std_dev: float = 0.0
    energy_variation: float = 0.0
    category: EnergyCategory = EnergyCategory.LOW
    score: float = Field(default=0.0, ge=0.0, le=100.0)
    feedback: str = ""


class PauseMetrics(FrozenModel):
    total_pauses: int = 0
    total_pause_duration: float = 0.0
    average_pause_duration: float = 0.0
    pause_rate: float = 0.0
    longest_pause: PauseSegment | None = None
    pauses: tuple[PauseSegment, ...] = ()
    category: PauseCategory = PauseCategory.LESS_PAUSES
    score: float = Field(default=0.0, ge=0.0, le=100.0)
    feedback: str = ""


class AudioMetadata(FrozenModel):
    duration_seconds: float
    sample_rate: int
    channels: int = 1
    frame_count: int = 0


class TranscriptionSummary(FrozenModel):
    full_text: str = ""
    language: str | None = None
    word_count: int = 0


class AnalysisResult(FrozenModel):
    """Everything one analysis run produces."""

    audio: AudioMetadata
    transcription: TranscriptionSummary
    speech_rate: SpeechRateMetrics
    intonation: IntonationMetrics
    energy: EnergyMetrics
    pauses: PauseMetrics
    overall_score: float
    pitch_series: tuple[PitchSample, ...] = ()
    energy_series: tuple[EnergySample, ...] = ()
