"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from eqrender.utils.logger import setup_logger as _setup_logger
from eqrender.utils.paths import display_path

load_dotenv()

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, extra_provenance: dict = None, verbose: bool = False) -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering session
        extra_provenance: Engine names and settings for the provenance header
        verbose: Show DEBUG messages on the console too

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance=extra_provenance,
        console_level="DEBUG" if verbose else "INFO",
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_batch_start(config, file_count: int) -> None:
    """Log start of a batch with its configuration."""
    _log_info(f"Rendering {file_count} equations from {config.equations_dir}")
    _log_debug(f"  Output: {config.out_dir}")
    _log_debug(f"  Mode: {'display' if config.display else 'inline'}")
    _log_debug(f"  PNG scale: {config.png_scale}x")
    _log_debug(f"  Margin: {config.margin}")
    _log_debug(f"  Outline: {config.outline_color} / {config.outline_width}")


def log_svg_written(svg_path: Path, margin: float) -> None:
    suffix = f" (margin: {margin:g})" if margin > 0 else ""
    _log_info(f"Wrote {display_path(svg_path)}{suffix}")


def log_png_written(png_path: Path, scale: float, margin: float) -> None:
    suffix = f", margin: {margin:g}" if margin > 0 else ""
    _log_info(f"Wrote {display_path(png_path)} (scale: {scale:g}x{suffix})")


def log_batch_result(result, elapsed_time: float) -> None:
    """
    Log batch summary.

    Args:
        result: BatchResult from render_batch()
        elapsed_time: Time taken for the whole batch
    """
    summary = (
        f"{len(result.written)} written, {len(result.skipped)} skipped, "
        f"{len(result.failed)} failed ({elapsed_time:.2f}s)"
    )
    if result.success:
        _log_success(f"Batch complete: {summary}")
    else:
        _log_error(f"Batch finished with failures: {summary}")
        for outcome in result.failed:
            _log_error(f"  {outcome.name}: {outcome.error}")
