"""
Generic logger setup utilities.

Provides reusable loguru configuration with provenance tracking.
Context-specific wrappers should be defined in contexts/{context}/logger.py.
"""

import sys
from importlib import metadata
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

# Distributions whose versions decide what a rendered file looks like
RENDER_DISTRIBUTIONS = ("eqrender", "matplotlib", "lxml", "cairosvg")

PROVENANCE_RULE = "-" * 60


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    level_colors: dict = None,
    console_level: str = "INFO",
) -> Path:
    """
    Configure loguru for a context with provenance tracking.

    The session log file receives every record. On the console, records below
    WARNING go to stdout and warnings/errors go to stderr.

    Args:
        context_name: Context identifier (e.g., "render", "style", "intake")
        log_dir: Directory for this logging session
        extra_provenance: Additional key-value pairs for provenance header
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})
        console_level: Minimum level shown on stdout (file sink is always DEBUG)

    Returns:
        Path to log file

    Example:
        from eqrender.utils.logger import setup_logger

        log_file = setup_logger(
            context_name="render",
            log_dir=Path("outs/logs/render_20251114_123456"),
            extra_provenance={"Output": "out"}
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    warning_no = logger.level("WARNING").no
    logger.add(log_file, format=LOG_FORMAT, level="DEBUG")
    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level=console_level,
        colorize=True,
        filter=lambda record: record["level"].no < warning_no,
    )
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level="WARNING", colorize=True)

    log_provenance(extra_provenance)

    return log_file


def _distribution_version(name: str) -> str:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return "not installed"


def provenance_entries(extra_context: dict = None) -> dict:
    """
    Collect the key-value pairs describing one rendering session.

    Covers the invocation (command line, working directory), the interpreter,
    and the installed versions of the libraries that produce the output files.
    Extra entries are appended last and may override the standard keys.

    Examples:
        >>> entries = provenance_entries({"Output": "out"})
        >>> list(entries)[-1]
        'Output'
    """
    entries = {
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
    }
    for name in RENDER_DISTRIBUTIONS:
        entries[name] = _distribution_version(name)
    entries.update(extra_context or {})
    return entries


def log_provenance(extra_context: dict = None) -> None:
    """Log the provenance header, one aligned `key: value` line per entry."""
    entries = provenance_entries(extra_context)
    width = max(len(str(key)) for key in entries)

    logger.info(PROVENANCE_RULE)
    for key, value in entries.items():
        logger.info(f"{str(key) + ':':<{width + 1}} {value}")
    logger.info(PROVENANCE_RULE)
