"""
speakscore.validation - Dependency checks and upload validation.

Validates the environment and incoming audio uploads before analysis.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Any

from speakscore.config import AnalysisConfig
from speakscore.exceptions import DecodeError, DependencyError, ExtractionError

logger = logging.getLogger(__name__)


FFMPEG_INSTALL_HINT = "Install with: brew install ffmpeg (macOS) or apt install ffmpeg (Linux)"


def _ffmpeg_version(executable: str) -> str:
    """Read the version token from ``ffmpeg -version`` ("ffmpeg version 6.1 ...")."""
    try:
        proc = subprocess.run([executable, "-version"], capture_output=True, text=True, timeout=5)
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.debug("ffmpeg -version failed: %s", e)
        return "unknown"

    first_line = proc.stdout.partition("\n")[0].split()
    return first_line[2] if len(first_line) > 2 else "unknown"


def check_ffmpeg() -> dict[str, str]:
    """Check that FFmpeg is on PATH, for upload normalisation.

    Returns:
        Dict with 'ffmpeg_version'

    Raises:
        DependencyError: If FFmpeg not found
    """
    executable = shutil.which("ffmpeg")
    if executable is None:
        raise DependencyError("ffmpeg", "FFmpeg not found in PATH", FFMPEG_INSTALL_HINT)
    return {"ffmpeg_version": _ffmpeg_version(executable)}


def check_librosa() -> dict[str, str]:
    """Check that librosa and its soundfile backend import.

    Raises:
        DependencyError: If librosa cannot be imported
    """
    try:
        import librosa
    except ImportError as e:
        raise DependencyError(
            "librosa",
            f"librosa not importable: {e}",
            "Install with: pip install librosa",
        ) from e
    return {"librosa_version": librosa.__version__}


def _invalid(message: str, duration: float = 0.0) -> dict[str, Any]:
    logger.error("Audio validation failed: %s", message)
    return {"valid": False, "error_message": message, "duration_seconds": duration, "audio": None}


def validate_audio_file(
    data: bytes,
    filename: str = "",
    content_type: str | None = None,
    config: AnalysisConfig | None = None,
    convert: bool = True,
) -> dict[str, Any]:
    """Validate an uploaded audio file and decode it for analysis.

    Checks size, content type, decodability and duration limits. When
    ``convert`` is set the upload is first normalised to mono WAV at the
    configured sample rate with FFmpeg.

    Args:
        data: Uploaded file contents
        filename: Original filename, for logging
        content_type: MIME type reported by the client
        config: Limits to apply (defaults if None)
        convert: Normalise through FFmpeg before decoding

    Returns:
        Dict with 'valid', 'error_message', 'duration_seconds' and, when
        valid, 'audio' (the decoded AudioBuffer)
    """
    from speakscore.audio.convert import convert_to_wav
    from speakscore.audio.loader import decode_audio

    config = config or AnalysisConfig()
    logger.info(
        "Validating upload %s (%d bytes, content type %s)", filename, len(data), content_type
    )

    if not data:
        return _invalid("Audio file is empty. Please select a valid audio file.")

    if len(data) > config.max_file_size_bytes:
        return _invalid(f"Audio file too large. Maximum size is {config.max_file_size_mb}MB.")

    if content_type is None:
        return _invalid(
            "Unable to determine file type. Please ensure you're uploading an audio file."
        )

    if not content_type.startswith("audio/"):
        return _invalid(
            f"Invalid file type. Only audio files are allowed. Detected type: {content_type}"
        )

    try:
        wav = convert_to_wav(data, config.target_sample_rate) if convert else data
        audio = decode_audio(wav)
    except (ExtractionError, DecodeError) as e:
        return _invalid(
            "Unsupported audio format. Please use common audio formats like MP3, WAV, or M4A. "
            f"Error: {e}"
        )

    duration = audio.duration_seconds
    if duration > config.max_duration_seconds:
        return _invalid(
            f"Audio file too long. Maximum duration is {config.max_duration_seconds:g} seconds.",
            duration,
        )
    if duration < config.min_duration_seconds:
        return _invalid(
            f"Audio file too short. Minimum duration is {config.min_duration_seconds:g} second(s).",
            duration,
        )

    logger.info("Upload %s validated: %.2fs", filename, duration)
    return {"valid": True, "error_message": None, "duration_seconds": duration, "audio": audio}
