"""
speakscore.analyze - Delivery analysis and scoring.

Single ordered pass over the audio frames (pitch, energy, pauses), transcript
speech rate, and piecewise-linear scoring of the four delivery metrics.
"""

from __future__ import annotations

from speakscore.analyze.delivery import analyze

__all__ = ["analyze"]
