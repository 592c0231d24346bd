"""
speakscore.exceptions - Custom exception classes.

All SpeakScore-specific exceptions inherit from SpeakScoreError.
"""


class SpeakScoreError(Exception):
    """Base exception for all SpeakScore errors."""

    pass


class ConfigError(SpeakScoreError):
    """Configuration loading or validation error."""

    pass


class ExtractionError(SpeakScoreError):
    """Audio conversion error."""

    pass


class AnalysisError(SpeakScoreError):
    """Delivery analysis error."""

    pass


class DecodeError(AnalysisError):
    """Audio bytes could not be decoded (unsupported or corrupt format)."""

    pass


class EmptyInputError(AnalysisError):
    """Audio buffer holds no samples."""

    pass


class DegenerateSegmentError(AnalysisError):
    """Transcript segment with a non-positive duration."""

    def __init__(self, index: int, start: float, end: float):
        self.index = index
        self.start = start
        self.end = end
        super().__init__(f"Segment {index} has non-positive duration ({start:.3f}s -> {end:.3f}s)")


class DependencyError(SpeakScoreError):
    """Required dependency missing or misconfigured."""

    def __init__(self, dependency: str, message: str, install_hint: str | None = None):
        self.dependency = dependency
        self.message = message
        self.install_hint = install_hint
        super().__init__(f"{dependency}: {message}")
