"""
SpeakScore - Public-speaking delivery scoring engine.

Turns a recorded talk and its time-aligned transcript into four scored
delivery metrics through a single-pass pipeline: audio decoding → framewise
pitch and energy extraction → pause detection → transcript speech rate →
piecewise-linear scoring.
"""

__version__ = "0.1.0"
