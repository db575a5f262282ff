"""
Equation Source Discovery

Lists and reads LaTeX equation source files (one equation per file).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List

from eqrender.contexts.intake.logger import _log_debug
from eqrender.exceptions import EquationSourceError

DEFAULT_EXTENSION = ".tex"


@dataclass(frozen=True)
class EquationSource:
    """
    A single equation read from disk.

    Attributes:
        name: File name including extension (e.g., "euler.tex")
        path: Full path to the source file
        latex: Raw file content (not stripped)
    """

    name: str
    path: Path
    latex: str

    @property
    def base_name(self) -> str:
        """Output base name shared by the SVG and PNG artifacts."""
        return base_name(self.name)

    @property
    def is_empty(self) -> bool:
        return not self.latex.strip()


def base_name(file_name: str) -> str:
    """
    Strip the final extension from a file name.

    Examples:
        >>> base_name("euler.tex")
        'euler'
        >>> base_name("a.b.tex")
        'a.b'
        >>> base_name(".tex")
        '.tex'
    """
    stem, dot, _ = file_name.rpartition(".")
    return stem if dot and stem else file_name


def is_equation_file(file_name: str, extension: str = DEFAULT_EXTENSION) -> bool:
    """
    Whether a file name carries the source extension after a non-empty stem.

    A dotfile such as ".tex" has no extension (as with pathlib's suffix), so
    it is not an equation source.
    """
    suffix = extension.lower()
    return len(file_name) > len(suffix) and file_name.lower().endswith(suffix)


def list_equation_files(directory: Path, extension: str = DEFAULT_EXTENSION) -> List[str]:
    """
    List eligible equation source files in a directory.

    Only regular files whose extension matches (case-insensitively) are kept.
    Names keep their original case and are sorted lexicographically, so the
    order is the same on every run and platform.

    Args:
        directory: Directory to scan (not recursive)
        extension: Recognized source extension, including the dot

    Returns:
        Sorted list of file names (empty if nothing matches)

    Raises:
        EquationSourceError: If the directory does not exist or cannot be read
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise EquationSourceError(f"Equation directory not found: {directory}", directory)

    suffix = extension.lower()
    try:
        names = sorted(
            entry.name
            for entry in directory.iterdir()
            if entry.is_file() and is_equation_file(entry.name, suffix)
        )
    except OSError as e:
        raise EquationSourceError(
            f"Cannot read equation directory {directory}: {e}", directory
        ) from e

    _log_debug(f"Found {len(names)} {suffix} files in {directory}")
    return names


def read_equation_source(directory: Path, name: str) -> EquationSource:
    """Read one equation source file as UTF-8."""
    path = Path(directory) / name
    return EquationSource(name=name, path=path, latex=path.read_text(encoding="utf-8"))
