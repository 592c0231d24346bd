"""
speakscore.config - YAML config loading and validation.

Handles loading speakscore.yaml, merging it over the built-in analysis
defaults, and validating all parameters.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from speakscore.exceptions import ConfigError

CONFIG_FILENAME = "speakscore.yaml"


class AnalysisConfig(BaseModel):
    """Resolved parameters for one analysis run."""

    frame_size: int = Field(default=1024, gt=0)
    overlap: int = Field(default=512, ge=0)

    silence_threshold: float = Field(default=0.01, gt=0.0)
    min_pause_duration: float = Field(default=0.3, gt=0.0)

    pitch_min_hz: float = Field(default=50.0, gt=0.0)
    pitch_max_hz: float = Field(default=800.0, gt=0.0)
    yin_threshold: float = Field(default=0.20, gt=0.0, lt=1.0)

    target_sample_rate: int = Field(default=44100, gt=0)
    max_file_size_mb: int = Field(default=50, gt=0)
    min_duration_seconds: float = Field(default=1.0, ge=0.0)
    max_duration_seconds: float = Field(default=600.0, gt=0.0)

    @field_validator("frame_size")
    @classmethod
    def validate_frame_size(cls, v: int) -> int:
        if v < 4:
            raise ValueError("frame_size must be at least 4 samples")
        return v

    @model_validator(mode="after")
    def validate_ranges(self) -> AnalysisConfig:
        if self.overlap >= self.frame_size:
            raise ValueError("overlap must be smaller than frame_size")
        if self.pitch_min_hz >= self.pitch_max_hz:
            raise ValueError("pitch_min_hz must be below pitch_max_hz")
        if self.min_duration_seconds >= self.max_duration_seconds:
            raise ValueError("min_duration_seconds must be below max_duration_seconds")
        return self

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


def merge_config(overrides: dict[str, Any], defaults: dict[str, Any]) -> dict[str, Any]:
    """Merge user config over defaults. User values take precedence."""
    merged = defaults.copy()
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def load_config(path: Path) -> AnalysisConfig:
    """Load and validate configuration from a YAML file or a directory holding one."""
    config_file = path / CONFIG_FILENAME if path.is_dir() else path
    if not config_file.exists():
        raise FileNotFoundError(f"No config file found at {config_file}")

    with open(config_file) as f:
        raw_config = yaml.safe_load(f) or {}

    if not isinstance(raw_config, dict):
        raise ConfigError(f"{config_file} must contain a mapping of settings")

    merged = merge_config(raw_config, AnalysisConfig().model_dump())
    try:
        return AnalysisConfig(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_file}: {e}") from e


def create_default_config() -> dict[str, Any]:
    """Create a default config dict, suitable for writing to disk."""
    return AnalysisConfig().model_dump()


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
