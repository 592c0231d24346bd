"""
speakscore.utils - Shared formatting helpers for CLI output.
"""

from __future__ import annotations


def format_duration(seconds: float) -> str:
    """Clock-style length of a recording for the score table title.

    Fractional seconds are truncated; the hour field only appears for
    recordings of an hour or more ("1:02:05", otherwise "2:05").
    """
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_size(num_bytes: int) -> str:
    """Format a byte count in human-readable form."""
    size = float(num_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def get_score_style(score: float) -> str:
    """Rich style for a 0-100 score: green (>= 70), yellow (>= 40), red otherwise."""
    if score >= 70:
        return "green"
    elif score >= 40:
        return "yellow"
    return "red"
