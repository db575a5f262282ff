"""
Margin Post-Processing

Expands the visible canvas of an SVG document symmetrically so that outline
strokes extending past the glyph bounds are not clipped on rasterization.

Content keeps its absolute position: only the viewBox frame grows, and any
declared width/height grows in proportion so the on-page size stays consistent
with the enlarged frame.

Malformed or missing frames are a defined no-op rather than an error: every
guard below returns the document unchanged.
"""

import math
import re
from typing import Optional, Tuple

from lxml import etree

from eqrender.contexts.styling.logger import _log_debug
from eqrender.contexts.styling.svg_document import (
    find_svg_root,
    format_number,
    parse_svg,
    serialize_svg,
)

ViewBox = Tuple[float, float, float, float]

_NUMBER = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_NUMBER_RE = re.compile(_NUMBER)
_VIEWBOX_SEPARATOR_RE = re.compile(r"[\s,]+")
# Leading number plus an optional unit, e.g. "10ex", "51.84pt", "120"
_LENGTH_RE = re.compile(rf"\s*({_NUMBER})\s*([A-Za-z]*)\s*")


def parse_view_box(value: Optional[str]) -> Optional[ViewBox]:
    """
    Parse a viewBox attribute into (x, y, width, height).

    Returns:
        Four floats, or None unless the value holds exactly four finite numbers
    """
    if not value or not value.strip():
        return None

    parts = _VIEWBOX_SEPARATOR_RE.split(value.strip())
    if len(parts) != 4 or not all(_NUMBER_RE.fullmatch(part) for part in parts):
        return None

    numbers = tuple(float(part) for part in parts)
    if not all(math.isfinite(n) for n in numbers):
        return None
    return numbers


def parse_length(value: str) -> Optional[Tuple[float, str]]:
    """
    Split a declared size into number and unit ("10ex" -> (10.0, "ex")).

    Returns:
        (number, unit), or None for percentages and malformed values
    """
    if "%" in value:
        return None
    match = _LENGTH_RE.fullmatch(value)
    if not match:
        return None
    number = float(match.group(1))
    if not math.isfinite(number):
        return None
    return number, match.group(2)


def format_view_box(view_box: ViewBox) -> str:
    return " ".join(format_number(n) for n in view_box)


def expand_margin(root: etree._Element, margin: float) -> bool:
    """
    Expand the frame of an SVG element tree by margin on every side, in place.

    The viewBox origin shifts by (-margin, -margin) and width/height grow by
    2 * margin. A declared width that is not a percentage is scaled by the
    ratio of new to old viewBox width; the declared height (if present and not
    a percentage) is derived from the new width and the original viewBox
    aspect ratio, written in the width's unit.

    Args:
        root: Parsed SVG element tree
        margin: Padding in viewBox units; <= 0 leaves the tree unchanged

    Returns:
        True if the tree was modified
    """
    if margin <= 0:
        return False

    svg = find_svg_root(root)
    if svg is None:
        return False

    view_box = parse_view_box(svg.get("viewBox"))
    if view_box is None:
        _log_debug(f"Skipping margin: no usable viewBox ({svg.get('viewBox')!r})")
        return False

    x, y, width, height = view_box
    new_view_box = (x - margin, y - margin, width + 2 * margin, height + 2 * margin)
    _log_debug(f"viewBox: {format_view_box(view_box)} -> {format_view_box(new_view_box)}")
    svg.set("viewBox", format_view_box(new_view_box))

    width_attr = svg.get("width")
    height_attr = svg.get("height")
    if width_attr is None:
        return True

    declared = parse_length(width_attr)
    if declared is None or width <= 0 or height <= 0:
        _log_debug(f"Keeping declared size: width={width_attr!r}, height={height_attr!r}")
        return True

    width_value, unit = declared
    new_width_value = width_value + 2 * margin * (width_value / width)
    new_height_value = new_width_value * height / width
    _log_debug(
        f"Declared size: width={width_attr!r}, height={height_attr!r} -> "
        f"{format_number(new_width_value)}{unit} x {format_number(new_height_value)}{unit}"
    )

    svg.set("width", f"{format_number(new_width_value)}{unit}")
    if height_attr is not None and "%" not in height_attr:
        svg.set("height", f"{format_number(new_height_value)}{unit}")

    return True


def add_margin(svg_text: str, margin: float) -> str:
    """
    Pad an SVG document by margin on all four sides.

    Args:
        svg_text: Serialized SVG
        margin: Padding in viewBox units

    Returns:
        Serialized SVG with an expanded frame, or svg_text itself when the
        margin is not positive or the document has no usable viewBox
    """
    if margin <= 0:
        return svg_text

    root = parse_svg(svg_text)
    if not expand_margin(root, margin):
        return svg_text
    return serialize_svg(root)
