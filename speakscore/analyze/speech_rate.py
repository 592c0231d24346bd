"""
speakscore.analyze.speech_rate - Transcript speech rate analysis.

Computes words per minute for each timed transcript segment, finds the
slowest and fastest parts of the talk, and rolls the segments up into an
average rate and its spread.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from speakscore.analyze.scoring import score_speech_rate
from speakscore.analyze.stats import RunningStats
from speakscore.exceptions import DegenerateSegmentError
from speakscore.models import (
    SegmentInput,
    SpeechRateMetrics,
    TranscriptInput,
    TranscriptionSummary,
    TranscriptSegment,
)

logger = logging.getLogger(__name__)

NO_SPEECH_FEEDBACK = "No speech was detected in the transcript."


def count_words(text: str) -> int:
    return len(text.split())


def measure_segment(
    index: int,
    segment: SegmentInput,
    char_start: int,
) -> TranscriptSegment:
    """Compute word count and words per minute for one segment.

    Raises:
        DegenerateSegmentError: If the segment's duration is not positive
    """
    duration = segment.end - segment.start
    if not duration > 0:
        raise DegenerateSegmentError(index, segment.start, segment.end)

    words = count_words(segment.text)
    return TranscriptSegment(
        start_time=segment.start,
        end_time=segment.end,
        text=segment.text,
        char_start_index=char_start,
        char_end_index=char_start + len(segment.text),
        word_count=words,
        speech_rate_wpm=words / duration * 60.0,
    )


def _segments_for(transcript: TranscriptInput) -> list[SegmentInput]:
    if transcript.has_segments:
        return list(transcript.segments)
    if transcript.full_text:
        return [SegmentInput(start=0.0, end=transcript.total_duration, text=transcript.full_text)]
    return []


def analyze_speech_rate(transcript: TranscriptInput) -> SpeechRateMetrics:
    """Analyze speech rate across all transcript segments.

    Segments with a non-positive duration are logged and skipped; their text
    still advances the character offsets of the segments after them.

    Args:
        transcript: Timed segments, or full text with total duration

    Returns:
        SpeechRateMetrics, zero-valued when there is no usable segment
    """
    measured: list[TranscriptSegment] = []
    skipped = 0
    char_offset = 0
    slowest: TranscriptSegment | None = None
    fastest: TranscriptSegment | None = None

    for i, seg in enumerate(_segments_for(transcript)):
        try:
            item = measure_segment(i, seg, char_offset)
        except DegenerateSegmentError as e:
            logger.warning("Skipping transcript segment: %s", e)
            skipped += 1
            continue
        finally:
            char_offset += len(seg.text)

        if slowest is None or item.speech_rate_wpm < slowest.speech_rate_wpm:
            slowest = item
        if fastest is None or item.speech_rate_wpm > fastest.speech_rate_wpm:
            fastest = item
        measured.append(item)

    if not measured:
        logger.info("No usable transcript segments; speech rate left at zero")
        return SpeechRateMetrics(skipped_segments=skipped, feedback=NO_SPEECH_FEEDBACK)

    rates = RunningStats()
    rates.extend(s.speech_rate_wpm for s in measured)
    category, score, feedback = score_speech_rate(rates.mean)

    return SpeechRateMetrics(
        avg_wpm=rates.mean,
        min_wpm=slowest.speech_rate_wpm,
        max_wpm=fastest.speech_rate_wpm,
        std_dev=math.sqrt(rates.population_variance),
        segments=tuple(measured),
        slowest_segment=slowest,
        fastest_segment=fastest,
        skipped_segments=skipped,
        category=category,
        score=score,
        feedback=feedback,
    )


def summarize_transcription(transcript: TranscriptInput) -> TranscriptionSummary:
    full_text = transcript.full_text or "".join(s.text for s in transcript.segments)
    return TranscriptionSummary(
        full_text=full_text,
        language=transcript.language,
        word_count=count_words(full_text),
    )


def parse_transcription(response: dict[str, Any], duration: float | None = None) -> TranscriptInput:
    """Build a TranscriptInput from a Whisper-style transcription response.

    Args:
        response: Dict with ``text``, optional ``language``, ``duration`` and
            ``segments`` (each with ``start``, ``end``, ``text``)
        duration: Audio duration, used for the fallback segment when the
            response carries none

    Returns:
        TranscriptInput with segments, or the full-text fallback
    """
    full_text = response.get("text") or ""
    language = response.get("language")
    raw_segments = response.get("segments")

    if isinstance(raw_segments, list) and raw_segments:
        segments = tuple(
            SegmentInput(
                start=float(seg.get("start", 0.0)),
                end=float(seg.get("end", 1.0)),
                text=seg.get("text") or "",
            )
            for seg in raw_segments
        )
        return TranscriptInput(segments=segments, full_text=full_text, language=language)

    total = response.get("duration")
    if total is None:
        total = duration if duration is not None else 0.0
    return TranscriptInput.from_text(full_text, float(total), language=language)
