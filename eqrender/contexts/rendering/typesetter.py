"""
LaTeX Typesetting Module

Converts LaTeX equation strings to self-contained SVG documents using
matplotlib's mathtext layout engine.

Every glyph outline and every rule (fraction bars, radical overlines) is
written as a plain <path> in document coordinates: one user unit per point,
no <defs>, <use> or transform attributes. A stroke width set on any path is
therefore the same visible thickness across the whole equation.

Input is the mathtext subset of LaTeX math. The AMS spellings listed in
MATHTEXT_ALIASES are translated before parsing. Environments (aligned,
pmatrix, cases, ...) are not supported and raise TypesettingError.
"""

import re
from typing import Iterator, Tuple

from lxml import etree
from matplotlib.font_manager import FontProperties
from matplotlib.path import Path as MplPath
from matplotlib.textpath import TextToPath
from matplotlib.transforms import Affine2D

from eqrender.contexts.styling.svg_document import SVG_NAMESPACE, serialize_svg
from eqrender.exceptions import TypesettingError

# Delimiter pairs tolerated around a source's content, longest first
MATH_DELIMITERS = [
    ("$$", "$$"),
    ("\\[", "\\]"),
    ("\\(", "\\)"),
    ("$", "$"),
]

# AMS commands mathtext lacks, mapped to the closest command it renders
MATHTEXT_ALIASES = {
    "\\tfrac": "\\frac",
    "\\lVert": "\\Vert",
    "\\rVert": "\\Vert",
    "\\lvert": "\\vert",
    "\\rvert": "\\vert",
}

_ALIAS_RE = re.compile(
    "(" + "|".join(re.escape(command) for command in MATHTEXT_ALIASES) + ")(?![A-Za-z])"
)

_SVG_COMMANDS = {
    MplPath.MOVETO: "M",
    MplPath.LINETO: "L",
    MplPath.CURVE3: "Q",
    MplPath.CURVE4: "C",
}

GLYPH_CLASS = "glyph"
RULE_CLASS = "rule"


def strip_math_delimiters(latex: str) -> str:
    """
    Remove one pair of surrounding math delimiters, if present.

    Examples:
        >>> strip_math_delimiters("$$x^2 + y^2$$")
        'x^2 + y^2'
        >>> strip_math_delimiters("x^2")
        'x^2'
    """
    text = latex.strip()
    for opening, closing in MATH_DELIMITERS:
        if (
            len(text) >= len(opening) + len(closing)
            and text.startswith(opening)
            and text.endswith(closing)
        ):
            return text[len(opening) : len(text) - len(closing)].strip()
    return text


def translate_ams_commands(latex: str) -> str:
    """
    Rewrite AMS commands that mathtext does not know.

    Examples:
        >>> translate_ams_commands(r"\\lVert v \\rVert + \\tfrac{1}{2}")
        '\\\\Vert v \\\\Vert + \\\\frac{1}{2}'
    """
    return _ALIAS_RE.sub(lambda match: MATHTEXT_ALIASES[match.group(1)], latex)


def _coord(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def path_data(path: MplPath, transform: Affine2D) -> str:
    """Serialize a matplotlib path as SVG path data after applying transform."""
    commands = []
    for vertices, code in path.iter_segments(transform, simplify=False):
        if code == MplPath.CLOSEPOLY:
            commands.append("Z")
        elif code in _SVG_COMMANDS:
            commands.append(" ".join([_SVG_COMMANDS[code], *map(_coord, vertices)]))
    return " ".join(commands)


class MathTextTypesetter:
    """
    Typesets LaTeX math to SVG text.

    One instance is reused for a whole batch; each convert() call is
    independent of the previous ones.

    mathtext has a single math style, so display and inline math differ only
    in font size.

    Attributes:
        display_fontsize: Font size in points for display (block) math
        inline_fontsize: Font size in points for inline math
        color: Glyph fill color
    """

    def __init__(
        self,
        display_fontsize: float = 20.0,
        inline_fontsize: float = 14.0,
        color: str = "black",
    ):
        self.display_fontsize = display_fontsize
        self.inline_fontsize = inline_fontsize
        self.color = color
        self._text_to_path = TextToPath()

    def fontsize(self, display: bool) -> float:
        return self.display_fontsize if display else self.inline_fontsize

    def _layout(self, math: str, prop: FontProperties) -> tuple:
        """Metrics in points plus glyph and rule geometry in layout units."""
        width, height, descent = self._text_to_path.get_text_width_height_descent(
            math, prop, ismath=True
        )
        glyph_info, glyph_map, rects = self._text_to_path.get_glyphs_mathtext(prop, math)
        return width, height, descent, glyph_info, glyph_map, rects

    def _shapes(self, glyph_info, glyph_map, rects) -> Iterator[Tuple[str, MplPath]]:
        for glyph_repr, x, y, scale in glyph_info:
            vertices, codes = glyph_map[glyph_repr]
            yield GLYPH_CLASS, MplPath(vertices * scale + [x, y], codes)
        for vertices, codes in rects:
            yield RULE_CLASS, MplPath(vertices, codes)

    def convert(self, latex: str, display: bool) -> str:
        """
        Typeset one equation.

        Args:
            latex: LaTeX math source, with or without surrounding delimiters
            display: True for display math, False for inline math

        Returns:
            Serialized SVG document sized in points

        Raises:
            TypesettingError: If the LaTeX cannot be parsed
        """
        body = translate_ams_commands(strip_math_delimiters(latex))
        if not body:
            raise TypesettingError("Nothing to typeset", latex=latex)

        fontsize = self.fontsize(display)
        prop = FontProperties(size=fontsize)
        try:
            width, height, descent, glyph_info, glyph_map, rects = self._layout(
                f"${body}$", prop
            )
        except ValueError as e:
            raise TypesettingError(f"Invalid LaTeX: {e}", latex=latex) from e

        # Layout units are TextToPath.FONT_SCALE per em with y pointing up
        units = fontsize / TextToPath.FONT_SCALE
        to_document = Affine2D().scale(units, -units).translate(0, height - descent)

        root = etree.Element(f"{{{SVG_NAMESPACE}}}svg", nsmap={None: SVG_NAMESPACE})
        root.set("version", "1.1")
        root.set("width", f"{_coord(width)}pt")
        root.set("height", f"{_coord(height)}pt")
        root.set("viewBox", f"0 0 {_coord(width)} {_coord(height)}")
        group = etree.SubElement(root, f"{{{SVG_NAMESPACE}}}g", fill=self.color)

        for kind, path in self._shapes(glyph_info, glyph_map, rects):
            data = path_data(path, to_document)
            if not data:
                continue
            element = etree.SubElement(group, f"{{{SVG_NAMESPACE}}}path")
            element.set("class", kind)
            element.set("d", data)

        return serialize_svg(root)
