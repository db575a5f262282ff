"""Unit tests for equation source discovery."""

import pytest

from eqrender.contexts.intake.sources import (
    EquationSource,
    base_name,
    is_equation_file,
    list_equation_files,
    read_equation_source,
)
from eqrender.exceptions import EquationSourceError


@pytest.mark.unit
class TestListEquationFiles:
    """Tests for list_equation_files function."""

    def test_case_insensitive_extension_and_sorted(self, equations_dir):
        """Test ["b.tex", "A.TEX", "c.txt"] -> ["A.TEX", "b.tex"]."""
        for name in ["b.tex", "A.TEX", "c.txt"]:
            (equations_dir / name).write_text("x")

        assert list_equation_files(equations_dir) == ["A.TEX", "b.tex"]

    def test_directories_are_excluded(self, equations_dir):
        """Test subdirectories are skipped even when named like sources."""
        (equations_dir / "nested.tex").mkdir()
        (equations_dir / "euler.tex").write_text("e^{i\\pi}")

        assert list_equation_files(equations_dir) == ["euler.tex"]

    def test_empty_directory_returns_empty_list(self, equations_dir):
        """Test no matches is an empty result, not an error."""
        (equations_dir / "notes.md").write_text("# notes")

        assert list_equation_files(equations_dir) == []

    def test_order_is_deterministic(self, equations_dir):
        """Test repeated listings return the same order."""
        for name in ["zeta.tex", "alpha.tex", "Beta.tex", "_aux.tex", "10.tex", "9.tex"]:
            (equations_dir / name).write_text("x")

        first = list_equation_files(equations_dir)

        assert first == ["10.tex", "9.tex", "Beta.tex", "_aux.tex", "alpha.tex", "zeta.tex"]
        assert list_equation_files(equations_dir) == first

    def test_custom_extension(self, equations_dir):
        """Test other source extensions can be configured."""
        (equations_dir / "a.latex").write_text("x")
        (equations_dir / "b.tex").write_text("x")

        assert list_equation_files(equations_dir, ".latex") == ["a.latex"]

    def test_dotfile_is_not_a_source(self, equations_dir):
        """Test a bare '.tex' file has no stem and is not listed."""
        (equations_dir / ".tex").write_text("x")
        (equations_dir / "euler.tex").write_text("x")

        assert list_equation_files(equations_dir) == ["euler.tex"]

    def test_missing_directory_raises(self, tmp_path):
        """Test a missing directory is a source error."""
        with pytest.raises(EquationSourceError, match="not found"):
            list_equation_files(tmp_path / "missing")


@pytest.mark.unit
@pytest.mark.parametrize(
    "file_name,expected",
    [
        ("euler.tex", "euler"),
        ("A.TEX", "A"),
        ("a.b.tex", "a.b"),
        ("noext", "noext"),
        (".tex", ".tex"),
    ],
)
def test_base_name(file_name, expected):
    """Test the final extension is stripped."""
    assert base_name(file_name) == expected


@pytest.mark.unit
def test_read_equation_source(equations_dir):
    """Test sources keep raw content and expose their base name."""
    (equations_dir / "euler.tex").write_text("  e^{i\\pi} + 1 = 0\n", encoding="utf-8")

    source = read_equation_source(equations_dir, "euler.tex")

    assert source.name == "euler.tex"
    assert source.base_name == "euler"
    assert source.latex == "  e^{i\\pi} + 1 = 0\n"
    assert source.is_empty is False


@pytest.mark.unit
def test_whitespace_only_source_is_empty(tmp_path):
    """Test sources with only whitespace count as empty."""
    source = EquationSource(name="blank.tex", path=tmp_path / "blank.tex", latex=" \n\t ")

    assert source.is_empty is True


@pytest.mark.unit
@pytest.mark.parametrize(
    "file_name,extension,expected",
    [
        ("euler.tex", ".tex", True),
        ("EULER.TEX", ".tex", True),
        ("euler.txt", ".tex", False),
        (".tex", ".tex", False),
        ("a.latex", ".latex", True),
        ("a.latex", ".tex", False),
    ],
)
def test_is_equation_file(file_name, extension, expected):
    assert is_equation_file(file_name, extension) is expected
