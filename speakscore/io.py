"""
speakscore.io - JSON read/write helpers, atomic file writes.

Reads transcription responses from disk and persists analysis results.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any

from speakscore.models import AnalysisResult, TranscriptInput


def read_json(path: Path) -> dict[str, Any]:
    """Load a transcription response or a saved result.

    Raises:
        FileNotFoundError: If the file is missing
        json.JSONDecodeError: If the file is not valid JSON
    """
    return json.loads(path.read_text(encoding="utf-8"))


def write_json(path: Path, data: dict[str, Any], indent: int = 2) -> None:
    """Write a JSON file atomically.

    The payload is serialized before anything touches the disk, written to a
    sibling temp file and then moved over ``path``, so readers only ever see
    a complete result.
    """
    payload = json.dumps(data, indent=indent, ensure_ascii=False)

    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.stem}-",
        suffix=".tmp",
        delete=False,
    ) as tmp:
        tmp.write(payload)
    Path(tmp.name).replace(path)


def read_transcript(path: Path, duration: float | None = None) -> TranscriptInput:
    """Load a Whisper-style transcription response as a TranscriptInput.

    Args:
        path: JSON file with ``text`` and optional ``segments``
        duration: Audio duration for the full-text fallback
    """
    from speakscore.analyze.speech_rate import parse_transcription

    return parse_transcription(read_json(path), duration=duration)


def write_result(path: Path, result: AnalysisResult, include_series: bool = True) -> None:
    """Persist an analysis result as JSON.

    Args:
        path: Destination path
        result: Result to write
        include_series: Keep the pitch and energy time series
    """
    exclude = None if include_series else {"pitch_series", "energy_series"}
    write_json(path, result.model_dump(mode="json", exclude=exclude))
