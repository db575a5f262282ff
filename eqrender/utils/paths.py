"""Path display helpers."""

from pathlib import Path
from typing import Optional


def display_path(path: Path, root: Optional[Path] = None) -> str:
    """Return path relative to root (default: cwd) for cleaner display."""
    root = Path.cwd() if root is None else root
    try:
        return str(Path(path).resolve().relative_to(root.resolve()))
    except ValueError:
        return str(path)
