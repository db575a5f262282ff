"""
eqrender - Equation Rendering for Outlined Vector and Raster Output

Batch-converts LaTeX equation sources into outlined, padded SVG and PNG images.

Architecture:
- Intake Context: Equation source discovery and reading
- Styling Context: SVG post-processing (outline strokes, margin padding)
- Rendering Context: Typesetting, rasterization, and batch orchestration
"""

__version__ = "0.1.0"
