"""
Rendering Context

Responsibilities:
- Typesets LaTeX equations to SVG
- Rasterizes finished SVG documents to PNG
- Orchestrates batch rendering and writes output artifacts

Owns: Typesetting, rasterization, output files
Never: Edits equation sources
"""

from eqrender.contexts.rendering.batch import (
    BatchResult,
    FileOutcome,
    render_batch,
    render_file,
    render_svg,
)

__all__ = ["BatchResult", "FileOutcome", "render_batch", "render_file", "render_svg"]
