"""Shared fixtures: collaborator fakes, log capture, and a clean environment."""

import sys
from pathlib import Path

import pytest
from loguru import logger

from eqrender.config import ENV_OVERRIDES, RenderConfig
from eqrender.exceptions import RasterizationError, TypesettingError

# Shaped like typesetter output: a rule with fill="none" plus one glyph path
FAKE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="10ex" height="5ex" viewBox="0 0 100 50">'
    '<path fill="none" d="M 0 25 L 100 25"/>'
    '<path d="M 10 10 L 20 20 Z"/>'
    "</svg>"
)


class FakeTypesetter:
    """Returns FAKE_SVG; raises TypesettingError for sources containing \\bad."""

    def __init__(self):
        self.calls = []

    def convert(self, latex, display):
        self.calls.append((latex, display))
        if "\\bad" in latex:
            raise TypesettingError("Undefined control sequence", latex=latex)
        return FAKE_SVG


class FakeRasterizer:
    """Writes a PNG signature instead of an image; raises RasterizationError when fail is set."""

    PNG_BYTES = b"\x89PNG\r\n\x1a\n"

    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def rasterize(self, svg_text, density, png_path):
        self.calls.append((svg_text, density, Path(png_path)))
        if self.fail:
            raise RasterizationError("Malformed SVG", png_path=png_path)
        Path(png_path).write_bytes(self.PNG_BYTES)
        return Path(png_path)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep EQRENDER_* variables from the developer's shell out of tests."""
    for name in list(ENV_OVERRIDES) + ["EQRENDER_CONFIG_PATH"]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logger():
    """CLI tests reconfigure loguru against temporary streams; restore the default sink."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def log_messages():
    """Capture loguru messages (all levels) as (level, message) tuples."""
    messages = []
    handler_id = logger.add(
        lambda msg: messages.append((msg.record["level"].name, msg.record["message"])),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def typesetter():
    return FakeTypesetter()


@pytest.fixture
def rasterizer():
    return FakeRasterizer()


@pytest.fixture
def equations_dir(tmp_path):
    directory = tmp_path / "equations"
    directory.mkdir()
    return directory


@pytest.fixture
def render_config(equations_dir, tmp_path):
    return RenderConfig(equations_dir=equations_dir, out_dir=tmp_path / "out")
