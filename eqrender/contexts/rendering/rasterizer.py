"""
SVG Rasterization Module

Renders finished SVG documents to PNG with CairoSVG.
"""

import math
from pathlib import Path

from eqrender.config import BASE_DENSITY
from eqrender.exceptions import RasterizationError


def compute_density(scale: float, base: int = BASE_DENSITY) -> int:
    """
    Raster density for a scale factor, rounded half up.

    Examples:
        >>> compute_density(10)
        720
        >>> compute_density(1.5)
        108
    """
    return max(1, math.floor(base * scale + 0.5))


class CairoRasterizer:
    """Writes PNG files from SVG text at a given density (dots per inch)."""

    def rasterize(self, svg_text: str, density: int, png_path: Path) -> Path:
        """
        Rasterize SVG text to a PNG file.

        Args:
            svg_text: Serialized SVG document
            density: Dots per inch; physical SVG units (pt, ex) scale with it
            png_path: Output file path

        Returns:
            png_path

        Raises:
            RasterizationError: If the SVG cannot be rendered or the file cannot be written
        """
        import cairosvg  # needs the native cairo library, loaded on first use

        png_path = Path(png_path)
        try:
            cairosvg.svg2png(
                bytestring=svg_text.encode("utf-8"),
                write_to=str(png_path),
                dpi=density,
            )
        except Exception as e:
            raise RasterizationError(f"Rasterization failed: {e}", png_path=png_path) from e
        return png_path
