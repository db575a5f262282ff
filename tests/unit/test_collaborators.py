"""Unit tests for typesetter and rasterizer helpers that need no native libraries."""

import pytest
from matplotlib.path import Path as MplPath
from matplotlib.transforms import Affine2D

from eqrender.contexts.rendering.rasterizer import compute_density
from eqrender.contexts.rendering.typesetter import (
    MathTextTypesetter,
    path_data,
    strip_math_delimiters,
    translate_ams_commands,
)
from eqrender.exceptions import TypesettingError


@pytest.mark.unit
@pytest.mark.parametrize(
    "scale,expected",
    [(1, 72), (10, 720), (1.5, 108), (0.5, 36), (2.25, 162), (0.001, 1)],
)
def test_compute_density(scale, expected):
    """Test density is the 72 dpi base times the scale, rounded half up, at least 1."""
    assert compute_density(scale) == expected


@pytest.mark.unit
def test_compute_density_rounds_half_up():
    """Test x.5 rounds up rather than to even."""
    assert compute_density(0.5, base=5) == 3


@pytest.mark.unit
@pytest.mark.parametrize(
    "latex,expected",
    [
        ("x^2", "x^2"),
        ("$x^2$", "x^2"),
        ("$$ x^2 $$", "x^2"),
        ("\\[\\frac{a}{b}\\]", "\\frac{a}{b}"),
        ("\\(a+b\\)", "a+b"),
        ("  \n$x$\n", "x"),
        ("$", "$"),
    ],
)
def test_strip_math_delimiters(latex, expected):
    assert strip_math_delimiters(latex) == expected


@pytest.mark.unit
def test_typesetter_rejects_empty_body():
    """Test delimiters with nothing inside are a typesetting error."""
    with pytest.raises(TypesettingError, match="Nothing to typeset"):
        MathTextTypesetter().convert("$$ $$", display=True)


@pytest.mark.unit
def test_typesetting_error_includes_snippet():
    """Test long LaTeX is truncated in the error message."""
    error = TypesettingError("Invalid LaTeX", latex="x" * 300)

    assert error.latex == "x" * 300
    assert str(error).endswith("x" * 200 + "...")


@pytest.mark.unit
@pytest.mark.parametrize(
    "latex,expected",
    [
        ("\\tfrac{1}{2}", "\\frac{1}{2}"),
        ("\\lVert v \\rVert", "\\Vert v \\Vert"),
        ("\\lvert x \\rvert", "\\vert x \\vert"),
        ("\\lVert_2", "\\Vert_2"),
        ("\\lVerts", "\\lVerts"),
        ("\\frac{a}{b}", "\\frac{a}{b}"),
    ],
)
def test_translate_ams_commands(latex, expected):
    """Test AMS spellings are rewritten only as whole commands."""
    assert translate_ams_commands(latex) == expected


@pytest.mark.unit
def test_path_data_applies_transform():
    """Test path data is written in the target coordinates with y flipped."""
    square = MplPath(
        [(0, 0), (0, 10), (10, 10), (10, 0), (0, 0), (0, 0)],
        [
            MplPath.MOVETO,
            MplPath.LINETO,
            MplPath.LINETO,
            MplPath.LINETO,
            MplPath.LINETO,
            MplPath.CLOSEPOLY,
        ],
    )
    to_document = Affine2D().scale(0.5, -0.5).translate(0, 5)

    assert path_data(square, to_document) == "M 0 5 L 0 0 L 5 0 L 5 5 L 0 5 Z"


@pytest.mark.unit
def test_path_data_writes_curves():
    curve = MplPath(
        [(0, 0), (1, 2), (3, 4), (5, 6)],
        [MplPath.MOVETO, MplPath.CURVE4, MplPath.CURVE4, MplPath.CURVE4],
    )

    assert path_data(curve, Affine2D()) == "M 0 0 C 1 2 3 4 5 6"
