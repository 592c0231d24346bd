"""
speakscore.audio - Audio decoding and upload normalisation.

Turns encoded upload bytes into the mono float buffer the analysis
pipeline consumes.
"""

from __future__ import annotations
