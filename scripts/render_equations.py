#!/usr/bin/env python3
"""
Equation Rendering CLI

Renders LaTeX equation sources to outlined, padded SVG and PNG images.

Commands:
    batch   - Render every .tex file in a directory
    render  - Render a single .tex file
    preview - Print the finished SVG for a LaTeX string

Examples:\n

    render_equations.py batch                                  # equations/ -> out/

    render_equations.py batch -i equations -o out -s 10 -m 2   # 10x PNGs, 2pt margin

    render_equations.py batch --config configs/render.yaml     # Use a YAML preset

    render_equations.py render equations/euler.tex -o out      # Single file

    render_equations.py preview "e^{i\\pi} + 1 = 0"             # SVG to stdout
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from eqrender.config import load_render_config
from eqrender.contexts.intake import is_equation_file, read_equation_source
from eqrender.contexts.rendering import render_batch, render_file, render_svg
from eqrender.contexts.rendering.batch import create_typesetter
from eqrender.contexts.rendering.logger import setup_rendering_logger
from eqrender.contexts.rendering.rasterizer import CairoRasterizer
from eqrender.exceptions import ConfigurationError, EquationSourceError
from eqrender.utils import display_path, now

load_dotenv()


def _session_log_dir(log_dir: Optional[Path]) -> Path:
    """Timestamped log directory under LOGS_PATH unless one is given."""
    if log_dir is not None:
        return log_dir
    return Path(os.getenv("LOGS_PATH", "outs/logs")) / f"render_{now()}"


def _load_config_or_exit(config_path: Optional[Path], **overrides):
    try:
        return load_render_config(config_path, **overrides)
    except ConfigurationError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


app = typer.Typer(
    help="Render LaTeX equations to outlined SVG and PNG images",
    add_completion=False,
    invoke_without_command=True,
)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="YAML render configuration (default: EQRENDER_CONFIG_PATH)"),
]
OutDirOption = Annotated[
    Optional[Path],
    typer.Option("--out-dir", "-o", help="Output directory (default: out)"),
]
DisplayOption = Annotated[
    Optional[bool],
    typer.Option("--display/--inline", help="Display (block) or inline math mode"),
]
ScaleOption = Annotated[
    Optional[float],
    typer.Option("--scale", "-s", help="PNG scale factor on a 72 dpi base", min=0.01),
]
MarginOption = Annotated[
    Optional[float],
    typer.Option("--margin", "-m", help="Padding on every side, in SVG units"),
]
LogDirOption = Annotated[
    Optional[Path],
    typer.Option("--log-dir", help="Session log directory (default: LOGS_PATH/render_<timestamp>)"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show debug output on the console"),
]


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("batch")
def batch_command(
    equations_dir: Annotated[
        Optional[Path],
        typer.Option("--equations-dir", "-i", help="Directory of .tex sources (default: equations)"),
    ] = None,
    out_dir: OutDirOption = None,
    display: DisplayOption = None,
    scale: ScaleOption = None,
    margin: MarginOption = None,
    config_path: ConfigOption = None,
    keep_going: Annotated[
        Optional[bool],
        typer.Option(
            "--keep-going/--fail-fast",
            help="Record per-file failures and continue instead of aborting",
        ),
    ] = None,
    log_dir: LogDirOption = None,
    verbose: VerboseOption = False,
):
    """
    Render every equation source in a directory.

    Writes <name>.svg and <name>.png to the output directory for each
    non-empty source. Empty sources are skipped with a warning.

    Examples:\n

        $ render_equations.py batch -i equations -o out          # Defaults

        $ render_equations.py batch --inline --scale 4           # Inline math, 4x PNGs

        $ render_equations.py batch --keep-going                 # Continue past bad LaTeX
    """
    config = _load_config_or_exit(
        config_path,
        equations_dir=equations_dir,
        out_dir=out_dir,
        display=display,
        png_scale=scale,
        margin=margin,
        keep_going=keep_going,
    )

    log_file = setup_rendering_logger(
        _session_log_dir(log_dir),
        extra_provenance={
            "Equations": config.equations_dir,
            "Output": config.out_dir,
            "Mode": "display" if config.display else "inline",
        },
        verbose=verbose,
    )

    try:
        result = render_batch(config)
    except EquationSourceError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo("")
    if result.success:
        typer.secho("✓ Rendering succeeded", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho(
            f"✗ Rendering failed for {len(result.failed)} files", fg=typer.colors.RED, bold=True
        )
        for outcome in result.failed[:10]:
            typer.secho(f"  - {outcome.name}: {outcome.error}", fg=typer.colors.RED)
        if len(result.failed) > 10:
            typer.echo(f"  ... and {len(result.failed) - 10} more")

    typer.echo(f"  Written: {len(result.written)}")
    typer.echo(f"  Skipped: {len(result.skipped)}")
    typer.echo(f"  Log: {display_path(log_file)}")
    typer.echo("")

    raise typer.Exit(code=0 if result.success else 1)


@app.command("render")
def render_command(
    tex_file: Annotated[
        Path,
        typer.Argument(help="LaTeX equation source file", exists=True, dir_okay=False),
    ],
    out_dir: OutDirOption = None,
    display: DisplayOption = None,
    scale: ScaleOption = None,
    margin: MarginOption = None,
    config_path: ConfigOption = None,
    log_dir: LogDirOption = None,
    verbose: VerboseOption = False,
):
    """
    Render a single equation source to SVG and PNG.

    Examples:\n

        $ render_equations.py render equations/euler.tex               # -> out/euler.{svg,png}

        $ render_equations.py render euler.tex -o figs --margin 3       # Custom output and margin
    """
    config = _load_config_or_exit(
        config_path, out_dir=out_dir, display=display, png_scale=scale, margin=margin
    )
    if not is_equation_file(tex_file.name, config.source_extension):
        typer.secho(
            f"Error: {tex_file.name} is not a {config.source_extension} equation source\n",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)

    setup_rendering_logger(_session_log_dir(log_dir), verbose=verbose)

    Path(config.out_dir).mkdir(parents=True, exist_ok=True)
    source = read_equation_source(tex_file.parent, tex_file.name)
    outcome = render_file(source, config, create_typesetter(config), CairoRasterizer())

    if outcome.svg_path is None:
        typer.secho(f"Nothing rendered: {tex_file.name} is empty", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ {outcome.name}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  SVG: {display_path(outcome.svg_path)}")
    typer.echo(f"  PNG: {display_path(outcome.png_path)}")


@app.command("preview")
def preview_command(
    latex: Annotated[str, typer.Argument(help="LaTeX math (without delimiters)")],
    display: DisplayOption = None,
    margin: MarginOption = None,
    config_path: ConfigOption = None,
):
    """
    Print the finished SVG (outline and margin applied) to stdout.

    Examples:\n

        $ render_equations.py preview "a^2 + b^2 = c^2" > pythagoras.svg
    """
    config = _load_config_or_exit(config_path, display=display, margin=margin)
    if not latex.strip():
        typer.secho("Error: LaTeX input is empty\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo(render_svg(latex, config), nl=False)


if __name__ == "__main__":
    app()
