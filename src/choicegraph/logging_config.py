"""Logging configuration for choicegraph."""

import sys

from loguru import logger


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure loguru on stderr.

    verbose shows the per-node relabel trace; quiet keeps only warnings and
    errors (failed moves, unreadable stores).
    """
    logger.remove()
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "WARNING"
    else:
        level = "INFO"
    logger.add(sys.stderr, level=level, format="{level.icon} {message}")
