"""
Batch Rendering Module

Renders every equation source in a directory to an SVG and a PNG sharing the
source's base name.

Per file: read -> (skip if empty) -> typeset -> outline -> margin -> write SVG
-> rasterize -> write PNG. Files are processed one at a time in sorted order
with a single typesetter instance.

By default a typesetting or rasterization failure aborts the batch; outputs
already written for earlier files stay on disk. With keep_going the failure is
recorded for that file and the batch continues.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from lxml import etree

from eqrender.config import OUTLINE_UNITS_PER_EM, RenderConfig
from eqrender.contexts.intake.sources import (
    EquationSource,
    list_equation_files,
    read_equation_source,
)
from eqrender.contexts.rendering.logger import (
    _log_debug,
    _log_error,
    _log_warning,
    log_batch_result,
    log_batch_start,
    log_png_written,
    log_svg_written,
)
from eqrender.contexts.rendering.rasterizer import CairoRasterizer, compute_density
from eqrender.contexts.rendering.typesetter import MathTextTypesetter
from eqrender.contexts.styling.margin import expand_margin
from eqrender.contexts.styling.outline import OutlineStyle, outline_paths
from eqrender.contexts.styling.svg_document import parse_svg, serialize_svg
from eqrender.exceptions import (
    NoEquationSourcesError,
    RasterizationError,
    TypesettingError,
)

SVG_EXTENSION = ".svg"
PNG_EXTENSION = ".png"

WRITTEN = "written"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass
class FileOutcome:
    """
    Terminal state of one equation source.

    Attributes:
        name: Source file name
        status: One of "written", "skipped", "failed"
        svg_path: Path to the written SVG (None unless written)
        png_path: Path to the written PNG (None unless written)
        error: Failure description (None unless failed)
    """

    name: str
    status: str
    svg_path: Optional[Path] = None
    png_path: Optional[Path] = None
    error: Optional[str] = None


@dataclass
class BatchResult:
    """Outcomes of a batch run, in processing order."""

    outcomes: List[FileOutcome] = field(default_factory=list)

    def _with_status(self, status: str) -> List[FileOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def written(self) -> List[FileOutcome]:
        return self._with_status(WRITTEN)

    @property
    def skipped(self) -> List[FileOutcome]:
        return self._with_status(SKIPPED)

    @property
    def failed(self) -> List[FileOutcome]:
        return self._with_status(FAILED)

    @property
    def success(self) -> bool:
        return not self.failed


def create_typesetter(config: RenderConfig) -> MathTextTypesetter:
    """Build the typesetter shared by every file of a batch."""
    return MathTextTypesetter(
        display_fontsize=config.display_fontsize,
        inline_fontsize=config.inline_fontsize,
        color=config.text_color,
    )


def outline_style(config: RenderConfig) -> OutlineStyle:
    """Outline for the active math mode, with the width converted from em units to points."""
    fontsize = config.display_fontsize if config.display else config.inline_fontsize
    return OutlineStyle(
        stroke=config.outline_color,
        stroke_width=config.outline_width * fontsize / OUTLINE_UNITS_PER_EM,
    )


def render_svg(latex: str, config: RenderConfig, typesetter=None) -> str:
    """
    Typeset LaTeX and apply the outline and margin passes.

    The outline is added before the margin so the padding can absorb stroke
    overhang at the glyph bounds.

    Args:
        latex: Equation source text
        config: Render configuration (mode, outline, margin)
        typesetter: Object with convert(latex, display) -> str (default: MathTextTypesetter)

    Returns:
        Finished SVG text ending with a single newline
    """
    if typesetter is None:
        typesetter = create_typesetter(config)

    try:
        root = parse_svg(typesetter.convert(latex, config.display))
    except etree.XMLSyntaxError as e:
        raise TypesettingError(f"Typesetter returned malformed SVG: {e}", latex=latex) from e

    outline_paths(root, outline_style(config))
    expand_margin(root, config.margin)
    return serialize_svg(root).strip() + "\n"


def render_file(
    source: EquationSource,
    config: RenderConfig,
    typesetter=None,
    rasterizer=None,
) -> FileOutcome:
    """
    Render one equation source to <out_dir>/<base>.svg and <out_dir>/<base>.png.

    Empty sources are skipped with a warning. Collaborator errors propagate.

    Args:
        source: Equation source to render
        config: Render configuration
        typesetter: Object with convert(latex, display) -> str
        rasterizer: Object with rasterize(svg_text, density, png_path)

    Returns:
        FileOutcome with status "written" or "skipped"
    """
    if source.is_empty:
        _log_warning(f"Skipping empty file: {source.name}")
        return FileOutcome(name=source.name, status=SKIPPED)

    if rasterizer is None:
        rasterizer = CairoRasterizer()

    out_dir = Path(config.out_dir)
    svg_text = render_svg(source.latex.strip(), config, typesetter)

    svg_path = out_dir / f"{source.base_name}{SVG_EXTENSION}"
    svg_path.write_text(svg_text, encoding="utf-8")
    log_svg_written(svg_path, config.margin)

    png_path = out_dir / f"{source.base_name}{PNG_EXTENSION}"
    density = compute_density(config.png_scale)
    _log_debug(f"Rasterizing {source.name} at {density} dpi")
    rasterizer.rasterize(svg_text, density, png_path)
    log_png_written(png_path, config.png_scale, config.margin)

    return FileOutcome(name=source.name, status=WRITTEN, svg_path=svg_path, png_path=png_path)


def render_batch(config: RenderConfig, typesetter=None, rasterizer=None) -> BatchResult:
    """
    Render every equation source in config.equations_dir.

    The output directory is created (with parents) before sources are listed,
    so it exists even when the batch is rejected.

    Args:
        config: Render configuration
        typesetter: Optional typesetter shared by all files (default: MathTextTypesetter)
        rasterizer: Optional rasterizer (default: CairoRasterizer)

    Returns:
        BatchResult with one outcome per source file

    Raises:
        NoEquationSourcesError: If the directory holds no eligible files
        EquationSourceError: If the directory is missing or unreadable
        TypesettingError, RasterizationError: On the first failure, unless keep_going
    """
    equations_dir = Path(config.equations_dir).resolve()
    out_dir = Path(config.out_dir).resolve()
    out_dir.mkdir(parents=True, exist_ok=True)

    files = list_equation_files(equations_dir, config.source_extension)
    if not files:
        raise NoEquationSourcesError(
            f"No {config.source_extension} files found in {equations_dir}", equations_dir
        )

    log_batch_start(config, len(files))
    start_time = time.time()

    if typesetter is None:
        typesetter = create_typesetter(config)
    if rasterizer is None:
        rasterizer = CairoRasterizer()

    result = BatchResult()
    for name in files:
        source = read_equation_source(equations_dir, name)
        try:
            outcome = render_file(source, config, typesetter, rasterizer)
        except (TypesettingError, RasterizationError) as e:
            if not config.keep_going:
                raise
            _log_error(f"Failed to render {name}: {e}")
            outcome = FileOutcome(name=name, status=FAILED, error=str(e))
        result.outcomes.append(outcome)

    log_batch_result(result, time.time() - start_time)
    return result
