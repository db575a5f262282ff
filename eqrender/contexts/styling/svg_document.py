"""
SVG Document Helpers

Parsing and serialization of SVG markup with lxml, shared by the styling passes.
Elements are matched by local name so both namespaced SVG (as produced by
typesetters) and bare hand-written markup are handled.
"""

import re
from typing import Iterator, Optional

from lxml import etree

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

# Entities are never expanded and nothing is fetched over the network
_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)

_STYLE_FILL_RE = re.compile(r"(?:^|;)\s*fill\s*:\s*([^;]+?)\s*(?:;|$)")


def parse_svg(svg_text: str) -> etree._Element:
    """
    Parse SVG text into an lxml element tree.

    The text is encoded before parsing because lxml rejects str input that
    carries an XML encoding declaration.
    """
    return etree.fromstring(svg_text.encode("utf-8"), _PARSER)


def serialize_svg(root: etree._Element) -> str:
    """Serialize an element tree back to SVG text (no XML declaration)."""
    return etree.tostring(root, encoding="unicode")


def iter_elements(root: etree._Element, name: str) -> Iterator[etree._Element]:
    """Yield root and all descendants whose local name matches, in document order."""
    for element in root.iter(f"{{{SVG_NAMESPACE}}}{name}", name):
        yield element


def find_svg_root(root: etree._Element) -> Optional[etree._Element]:
    """Return the first <svg> element (the root itself when it is one)."""
    return next(iter_elements(root, "svg"), None)


def effective_fill(element: etree._Element) -> Optional[str]:
    """
    Fill declared directly on an element.

    The fill attribute wins; otherwise a fill declaration in the inline style
    attribute is used. Inherited fills are not resolved.
    """
    fill = element.get("fill")
    if fill is not None:
        return fill.strip()

    style = element.get("style")
    if style:
        match = _STYLE_FILL_RE.search(style)
        if match:
            return match.group(1)
    return None


def format_number(value: float) -> str:
    """Shortest text for a number: 14.0 -> '14', 0.5 -> '0.5'."""
    if float(value).is_integer():
        return str(int(value))
    return repr(value)
