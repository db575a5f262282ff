"""
Styling Context

Responsibilities:
- Adds stroke outlines to glyph paths of typeset SVG documents
- Pads SVG documents with a margin, keeping declared sizes proportional

Owns: SVG post-processing
Never: Typesets LaTeX, rasterizes, or touches the filesystem
"""

from eqrender.contexts.styling.margin import add_margin, expand_margin
from eqrender.contexts.styling.outline import OutlineStyle, add_outline, outline_paths

__all__ = ["OutlineStyle", "add_margin", "add_outline", "expand_margin", "outline_paths"]
