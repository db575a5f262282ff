"""Unit tests for session logger setup and the provenance header."""

import sys

import pytest

from eqrender.utils.logger import RENDER_DISTRIBUTIONS, provenance_entries, setup_logger


@pytest.mark.unit
def test_provenance_entries_cover_invocation_and_libraries():
    entries = provenance_entries()

    assert entries["Command"] == " ".join(sys.argv)
    assert entries["Python"] == sys.version.split()[0]
    for name in RENDER_DISTRIBUTIONS:
        assert entries[name]


@pytest.mark.unit
def test_provenance_extra_entries_come_last():
    entries = provenance_entries({"Output": "out", "Mode": "inline"})

    assert list(entries)[-2:] == ["Output", "Mode"]
    assert entries["Mode"] == "inline"


@pytest.mark.unit
def test_setup_logger_writes_header_to_session_file(tmp_path):
    """Test the session log file starts with the aligned provenance block."""
    log_file = setup_logger("render", tmp_path / "session", extra_provenance={"Output": "figs"})

    lines = log_file.read_text().splitlines()

    assert log_file == tmp_path / "session" / "render.log"
    assert any("| Output:" in line and line.endswith(" figs") for line in lines)
    assert any("| matplotlib:" in line for line in lines)
