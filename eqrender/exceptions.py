"""Exceptions raised across eqrender contexts."""

from pathlib import Path
from typing import Optional


class EqRenderError(Exception):
    """Base class for all eqrender errors."""


class ConfigurationError(EqRenderError, ValueError):
    """Raised when render configuration values are missing or invalid."""


class EquationSourceError(EqRenderError):
    """
    Exception raised when the equation source directory cannot be used.

    Attributes:
        directory: The directory that was being read
    """

    def __init__(self, message: str, directory: Optional[Path] = None):
        self.message = message
        self.directory = directory
        super().__init__(message)


class NoEquationSourcesError(EquationSourceError):
    """Raised when the source directory contains no eligible equation files."""


class TypesettingError(EqRenderError):
    """
    Exception raised when LaTeX cannot be typeset to SVG.

    Attributes:
        message: Error description
        latex: The LaTeX source that failed
    """

    def __init__(self, message: str, latex: Optional[str] = None):
        self.message = message
        self.latex = latex

        parts = [message]
        if latex:
            snippet = latex[:200] + "..." if len(latex) > 200 else latex
            parts.append(f"\nLaTeX:\n{snippet}")

        super().__init__("\n".join(parts))


class RasterizationError(EqRenderError):
    """
    Exception raised when an SVG document cannot be rasterized.

    Attributes:
        message: Error description
        png_path: Destination the raster output was meant for
    """

    def __init__(self, message: str, png_path: Optional[Path] = None):
        self.message = message
        self.png_path = png_path

        parts = [message]
        if png_path:
            parts.append(f"Output: {png_path}")

        super().__init__("\n".join(parts))
