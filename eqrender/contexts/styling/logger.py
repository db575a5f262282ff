"""
Styling context logger.

Provides logging interface for styling context with automatic [style] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[style]"


def _log_debug(message: str) -> None:
    """Log debug message with [style] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
