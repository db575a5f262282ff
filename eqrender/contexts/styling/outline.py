"""
Outline Post-Processing

Adds a stroke outline behind the fill of every glyph path in an SVG document,
so equations stay legible on dark and light backgrounds alike.
"""

from dataclasses import dataclass

from lxml import etree

from eqrender.contexts.styling.logger import _log_debug
from eqrender.contexts.styling.svg_document import (
    effective_fill,
    format_number,
    iter_elements,
    parse_svg,
    serialize_svg,
)

# Paths with this fill are decorative or structural, never glyphs
NO_FILL = "none"


@dataclass(frozen=True)
class OutlineStyle:
    """
    Stroke applied uniformly to all filled paths of one document.

    Attributes:
        stroke: Stroke color (e.g., "#ddd")
        stroke_width: Stroke width in document user units. Typeset equations
            are drawn without transforms, so one unit is one point everywhere.
    """

    stroke: str = "#ddd"
    stroke_width: float = 0.9


def outline_paths(root: etree._Element, style: OutlineStyle) -> int:
    """
    Set outline attributes on every filled path under root, in place.

    Paths whose fill is "none" are left untouched. Applying the same style
    twice yields the same document.

    Args:
        root: Parsed SVG element tree
        style: Outline to apply

    Returns:
        Number of paths outlined
    """
    outlined = 0
    for path in iter_elements(root, "path"):
        if effective_fill(path) == NO_FILL:
            continue

        path.set("stroke", style.stroke)
        path.set("stroke-width", format_number(style.stroke_width))
        path.set("paint-order", "stroke fill")
        path.set("stroke-linejoin", "round")
        outlined += 1

    return outlined


def add_outline(svg_text: str, style: OutlineStyle) -> str:
    """
    Add a stroke outline to the filled paths of an SVG document.

    Args:
        svg_text: Serialized SVG
        style: Outline to apply

    Returns:
        Serialized SVG with outline attributes set
    """
    root = parse_svg(svg_text)
    count = outline_paths(root, style)
    _log_debug(f"Outlined {count} paths (stroke: {style.stroke}, width: {style.stroke_width})")
    return serialize_svg(root)
