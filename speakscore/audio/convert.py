"""
speakscore.audio.convert - FFmpeg upload normalisation.

Re-encodes arbitrary uploads (MP3, M4A, WebM, ...) into mono 16-bit WAV at
the analysis sample rate so the decoder only ever sees PCM.
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path

from speakscore.exceptions import ExtractionError

logger = logging.getLogger(__name__)


def convert_to_wav(data: bytes, sample_rate: int = 44100, console=None) -> bytes:
    """Convert encoded audio bytes to mono PCM WAV bytes using FFmpeg.

    Args:
        data: Encoded audio file contents
        sample_rate: Output sample rate in Hz
        console: Optional rich console for output

    Returns:
        WAV file contents

    Raises:
        ExtractionError: If FFmpeg is missing or fails
    """
    with tempfile.TemporaryDirectory(prefix="speakscore-") as tmp:
        input_path = Path(tmp) / "upload.tmp"
        output_path = Path(tmp) / "converted.wav"
        input_path.write_bytes(data)

        cmd = [
            "ffmpeg",
            "-y",
            "-i",
            str(input_path),
            "-vn",
            "-acodec",
            "pcm_s16le",
            "-ar",
            str(sample_rate),
            "-ac",
            "1",
            str(output_path),
        ]

        if console:
            console.print(f"[dim]  Converting audio to {sample_rate} Hz mono WAV...[/dim]")

        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise ExtractionError("FFmpeg not found in PATH") from e
        except Exception as e:
            raise ExtractionError(f"Audio conversion failed: {e}") from e

        if proc.returncode != 0:
            logger.error("FFmpeg conversion failed: %s", proc.stderr)
            raise ExtractionError(f"Audio conversion failed, exit code: {proc.returncode}")

        converted = output_path.read_bytes()

    logger.debug("Converted %d bytes to %d bytes of WAV", len(data), len(converted))
    return converted
