"""
Render Configuration

Per-batch settings for equation rendering. Values are layered, later layers
overriding earlier ones:

1. RenderConfig dataclass defaults
2. YAML config file (explicit path, or EQRENDER_CONFIG_PATH)
3. EQRENDER_* environment variables (a .env file is honored via python-dotenv)
4. Explicit overrides (e.g., CLI flags)

Examples:
    >>> config = load_render_config(Path("configs/render.yaml"), margin=5)
    >>> config.png_scale
    10.0
"""

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from eqrender.exceptions import ConfigurationError

load_dotenv()

# Reference density of the SVG coordinate system (1pt = 1/72in)
BASE_DENSITY = 72

# outline_width is given in thousandths of an em of the active font size
OUTLINE_UNITS_PER_EM = 1000

FLOAT_FIELDS = ("png_scale", "margin", "outline_width", "display_fontsize", "inline_fontsize")

# Environment variable -> RenderConfig field
ENV_OVERRIDES = {
    "EQRENDER_EQUATIONS_DIR": "equations_dir",
    "EQRENDER_OUT_DIR": "out_dir",
    "EQRENDER_DISPLAY": "display",
    "EQRENDER_PNG_SCALE": "png_scale",
    "EQRENDER_MARGIN": "margin",
}


@dataclass
class RenderConfig:
    """
    Settings for one batch run. Not mutated during processing.

    Attributes:
        equations_dir: Directory holding the LaTeX equation sources
        out_dir: Directory receiving the SVG and PNG outputs
        display: True for display (block) math, False for inline math
        png_scale: Multiplier on BASE_DENSITY for rasterization
        margin: Padding added on every side, in SVG user units (<= 0 disables)
        outline_color: Stroke color applied to glyph paths
        outline_width: Outline stroke width in thousandths of an em (45 = 0.045em)
        source_extension: Extension of eligible source files (case-insensitive)
        display_fontsize: Font size in points for display math
        inline_fontsize: Font size in points for inline math
        text_color: Glyph fill color
        keep_going: Record collaborator failures per file instead of aborting
    """

    equations_dir: Path = Path("equations")
    out_dir: Path = Path("out")
    display: bool = True
    png_scale: float = 1.0
    margin: float = 0.0
    outline_color: str = "#ddd"
    outline_width: float = 45.0
    source_extension: str = ".tex"
    display_fontsize: float = 20.0
    inline_fontsize: float = 14.0
    text_color: str = "black"
    keep_going: bool = False


def _env_overrides() -> Dict[str, Any]:
    """Collect RenderConfig overrides from EQRENDER_* environment variables."""
    return {
        field_name: os.environ[env_name]
        for env_name, field_name in ENV_OVERRIDES.items()
        if os.environ.get(env_name)
    }


def validate_render_config(config: RenderConfig) -> RenderConfig:
    """
    Check value ranges that the type system does not cover.

    Negative margins are accepted and treated as no margin. NaN and infinite
    values are rejected for every numeric field.

    Raises:
        ConfigurationError: If any value is out of range
    """
    for name in FLOAT_FIELDS:
        value = getattr(config, name)
        if not math.isfinite(value):
            raise ConfigurationError(f"{name} must be a finite number, got {value}")
    if config.png_scale <= 0:
        raise ConfigurationError(f"png_scale must be positive, got {config.png_scale}")
    if config.outline_width < 0:
        raise ConfigurationError(
            f"outline_width must not be negative, got {config.outline_width}"
        )
    if config.display_fontsize <= 0 or config.inline_fontsize <= 0:
        raise ConfigurationError("Font sizes must be positive")
    if not config.source_extension.startswith(".") or len(config.source_extension) < 2:
        raise ConfigurationError(
            f"source_extension must look like '.tex', got {config.source_extension!r}"
        )
    return config


def load_render_config(config_path: Optional[Path] = None, **overrides) -> RenderConfig:
    """
    Build a validated RenderConfig from defaults, YAML, environment, and overrides.

    Args:
        config_path: Optional YAML file (defaults to EQRENDER_CONFIG_PATH if set)
        **overrides: Field values that win over every other layer; None values are ignored

    Returns:
        Validated RenderConfig

    Raises:
        ConfigurationError: If the YAML file is missing, has unknown keys or bad types,
            or a value is out of range
    """
    if config_path is None and os.getenv("EQRENDER_CONFIG_PATH"):
        config_path = Path(os.getenv("EQRENDER_CONFIG_PATH"))

    layers = []
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")
        layers.append(OmegaConf.load(config_path))

    layers.append(OmegaConf.create(_env_overrides()))
    layers.append(OmegaConf.create({k: v for k, v in overrides.items() if v is not None}))

    try:
        merged = OmegaConf.merge(OmegaConf.structured(RenderConfig), *layers)
        config = OmegaConf.to_object(merged)
    except OmegaConfBaseException as e:
        raise ConfigurationError(f"Invalid render configuration: {e}") from e

    return validate_render_config(config)
