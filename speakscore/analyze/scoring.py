"""
speakscore.analyze.scoring - Delivery metric scoring.

Maps each raw delivery metric onto a category, a 0-100 score and a fixed
feedback sentence. Scores are piecewise linear within each category and the
overall score is the unweighted mean of the four component scores.
"""

from __future__ import annotations

from speakscore.models import (
    EnergyCategory,
    IntonationCategory,
    PauseCategory,
    SpeechRateCategory,
)

SPEECH_RATE_FEEDBACK: dict[SpeechRateCategory, str] = {
    SpeechRateCategory.VERY_SLOW: "Increase your pace to make the speech more engaging.",
    SpeechRateCategory.SLOW: "Speed up slightly to keep the speech more dynamic.",
    SpeechRateCategory.GOOD: "Well-paced! Keep the flow consistent.",
    SpeechRateCategory.FAST: "Reduce the speed a bit for better impact.",
    SpeechRateCategory.VERY_FAST: "Slow down to make the speech clearer and more effective.",
}

INTONATION_FEEDBACK: dict[IntonationCategory, str] = {
    IntonationCategory.LOW: "The speaker shows limited pitch variation. This might sound monotonous.",
    IntonationCategory.GOOD: "Good pitch variation! The speaker uses dynamic pitch changes for engagement.",
    IntonationCategory.HIGH: "Tone is too exaggerated, reduce variation for clarity.",
}

ENERGY_FEEDBACK: dict[EnergyCategory, str] = {
    EnergyCategory.LOW: "Increase your volume to project more confidence.",
    EnergyCategory.GOOD: "Good energy level, sounds confident and clear.",
    EnergyCategory.HIGH: "Lower your volume slightly to avoid sounding harsh.",
}

PAUSE_FEEDBACK: dict[PauseCategory, str] = {
    PauseCategory.LESS_PAUSES: "Minimal pauses convey strong confidence and authority.",
    PauseCategory.EXCELLENT: "Well-balanced pauses, projecting confidence and clarity.",
    PauseCategory.MANY_PAUSES: "Excessive pauses may weaken confidence; aim for a smoother flow.",
}


def clamp_score(score: float) -> float:
    return max(0.0, min(100.0, score))


# Speech rate (words per minute)


def speech_rate_category(wpm: float) -> SpeechRateCategory:
    if wpm < 100:
        return SpeechRateCategory.VERY_SLOW
    if wpm < 130:
        return SpeechRateCategory.SLOW
    if wpm > 200:
        return SpeechRateCategory.VERY_FAST
    if wpm > 175:
        return SpeechRateCategory.FAST
    return SpeechRateCategory.GOOD


def speech_rate_score(wpm: float) -> float:
    category = speech_rate_category(wpm)
    if category is SpeechRateCategory.VERY_SLOW:
        score = max(0.0, 30 - (100 - wpm) * 0.3)
    elif category is SpeechRateCategory.SLOW:
        score = 30 + (wpm - 100) * (20 / 30)
    elif category is SpeechRateCategory.GOOD:
        score = 50 + (wpm - 130) * (20 / 45)
    elif category is SpeechRateCategory.FAST:
        score = 50 + (wpm - 175) * (20 / 25)
    else:
        score = min(100.0, 70 + (wpm - 200) * 0.3)
    return clamp_score(score)


def score_speech_rate(wpm: float) -> tuple[SpeechRateCategory, float, str]:
    category = speech_rate_category(wpm)
    return category, speech_rate_score(wpm), SPEECH_RATE_FEEDBACK[category]


# Intonation (pitch standard deviation in Hz)


def pitch_variation_score(std_dev: float, voiced_count: int) -> float:
    """Score pitch spread against expressive speech (about 40 Hz).

    Returns 0 when no frame was voiced.
    """
    if voiced_count <= 0:
        return 0.0

    z = (std_dev - 40) / 40
    if std_dev < 20:
        score = std_dev / 20 * 0.5
    elif std_dev > 80:
        score = 80 / std_dev * 0.5
    else:
        score = 1.0 / (1.0 + abs(z))

    return max(0.0, min(1.0, score)) * 100


def intonation_category(score: float) -> IntonationCategory:
    if score > 50:
        return IntonationCategory.HIGH
    if score >= 25:
        return IntonationCategory.GOOD
    return IntonationCategory.LOW


def score_intonation(std_dev: float, voiced_count: int) -> tuple[IntonationCategory, float, str]:
    score = pitch_variation_score(std_dev, voiced_count)
    category = intonation_category(score)
    return category, score, INTONATION_FEEDBACK[category]


# Energy (mean frame RMS)


def energy_category(avg_energy: float) -> EnergyCategory:
    if avg_energy < 0.04:
        return EnergyCategory.LOW
    if avg_energy > 0.08:
        return EnergyCategory.HIGH
    return EnergyCategory.GOOD


def energy_score(avg_energy: float) -> float:
    category = energy_category(avg_energy)
    if category is EnergyCategory.LOW:
        score = 30 + (avg_energy - 0.02) * 2000
    elif category is EnergyCategory.GOOD:
        score = 70 + (avg_energy - 0.04) * 750
    else:
        score = max(0.0, 70 - (avg_energy - 0.08) * 2000)
    return clamp_score(score)


def score_energy(avg_energy: float) -> tuple[EnergyCategory, float, str]:
    category = energy_category(avg_energy)
    return category, energy_score(avg_energy), ENERGY_FEEDBACK[category]


# Pauses (pauses per second of audio)


def pause_rate(total_pauses: int, duration_seconds: float) -> float:
    if duration_seconds <= 0:
        return 0.0
    return total_pauses / duration_seconds


def pause_category(rate: float) -> PauseCategory:
    if rate < 2:
        return PauseCategory.LESS_PAUSES
    if rate > 8:
        return PauseCategory.MANY_PAUSES
    return PauseCategory.EXCELLENT


def pause_score(rate: float) -> float:
    category = pause_category(rate)
    if category is PauseCategory.LESS_PAUSES:
        score = 90 - rate * 20
    elif category is PauseCategory.EXCELLENT:
        score = 70 - (rate - 2) * (20 / 6)
    else:
        score = 50 - (rate - 8) * 7.5
    return clamp_score(score)


def score_pauses(rate: float) -> tuple[PauseCategory, float, str]:
    category = pause_category(rate)
    return category, pause_score(rate), PAUSE_FEEDBACK[category]


def overall_score(
    speech_rate: float,
    intonation: float,
    energy: float,
    pauses: float,
) -> float:
    """Equal-weight mean of the four component scores."""
    return 0.25 * speech_rate + 0.25 * intonation + 0.25 * energy + 0.25 * pauses
