"""
speakscore.logging - Logging setup for the CLI.

Library modules log through children of the "speakscore" logger and never
configure handlers themselves.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("speakscore")

# Audio backends that are chatty at DEBUG level.
NOISY_LOGGERS = ("numba", "audioread", "matplotlib")


def configure_logging(verbose: bool = False) -> None:
    """Route speakscore log records to stderr.

    Args:
        verbose: Show speakscore DEBUG records; otherwise WARNING and above
    """
    logging.basicConfig(format="%(levelname)s: %(name)s: %(message)s")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
