"""CLI application entry point for particlizer.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from particlizer import __version__
from particlizer.cli.output import (
    console,
    print_document_info,
    print_error,
    print_header,
    print_sampling_info,
    print_step,
    print_success,
)
from particlizer.config import (
    CanvasConfig,
    ExportConfig,
    LoggingConfig,
    ParticlizerSettings,
    SamplingConfig,
    SmoothingConfig,
)
from particlizer.core import ParticleGenerator, ShapeDocument, chaikin_smooth
from particlizer.domain import FreehandPath
from particlizer.exceptions import (
    DocumentLoadError,
    ParticleExportError,
    ParticlizerError,
    UnsupportedFormatError,
)
from particlizer.io import ParticleWriter, SvgImporter
from particlizer.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="particlize",
    help="Scatter edge-biased particles over shapes from SVG documents or scene files.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Particlizer[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def particlize(
    input_path: Annotated[
        Path,
        typer.Argument(
            help="Path to an SVG document or a JSON scene file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path; .png, .svg or .json (default: {name}-particles.png)",
        ),
    ] = None,
    width: Annotated[
        int,
        typer.Option("--width", help="Canvas width in pixels", min=1, max=16384),
    ] = 800,
    height: Annotated[
        int,
        typer.Option("--height", help="Canvas height in pixels", min=1, max=16384),
    ] = 600,
    count: Annotated[
        int,
        typer.Option("--count", "-n", help="Number of particles", min=0),
    ] = 5000,
    edge_bias: Annotated[
        float,
        typer.Option("--edge-bias", help="Edge acceptance scale (0-2)", min=0.0, max=2.0),
    ] = 0.7,
    edge_falloff: Annotated[
        float,
        typer.Option("--edge-falloff", help="Edge falloff exponent", min=0.0),
    ] = 3.0,
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Random seed for reproducible output"),
    ] = None,
    particle_size: Annotated[
        float,
        typer.Option("--particle-size", help="Particle diameter in pixels", min=0.1, max=50.0),
    ] = 1.5,
    color: Annotated[
        str,
        typer.Option("--color", help="Particle color"),
    ] = "#ffffff",
    smooth: Annotated[
        int,
        typer.Option(
            "--smooth",
            help="Chaikin smoothing passes for freehand paths in scene files",
            min=0,
            max=6,
        ),
    ] = 0,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Generate edge-biased particles for the shapes in an SVG or scene file.

    SVG documents are scaled to fit the canvas. Scene files hold a JSON
    shape list ({"shapes": [...]}) already in canvas coordinates.

    Example:
        particlize logo.svg -n 8000

    This will create logo-particles.png next to logo.svg.
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    # Validate input file exists
    if not input_path.is_file():
        print_error(
            f"Input file not found: {input_path}",
            details="Please provide a path to an SVG document or JSON scene file.",
        )
        raise typer.Exit(code=1)

    if output is None:
        output = ParticleWriter.get_output_path(input_path)

    settings = ParticlizerSettings(
        sampling=SamplingConfig(
            target_count=count,
            edge_bias=edge_bias,
            edge_falloff=edge_falloff,
            seed=seed,
        ),
        canvas=CanvasConfig(width=width, height=height),
        smoothing=SmoothingConfig(iterations=smooth),
        export=ExportConfig(particle_size=particle_size, color=color),
        logging=LoggingConfig(
            log_file=log_file,
            log_level="DEBUG" if verbose else log_level,
        ),
    )

    if not quiet:
        print_header(__version__)

    try:
        logger = configure_logging(
            log_file=settings.logging.log_file,
            console_level=settings.logging.log_level,
            file_level=settings.logging.file_log_level,
            quiet=quiet,
        )

        if not quiet:
            print_step("Loading shapes")

        document = _load_document(input_path, settings)

        if not quiet:
            print_document_info(str(input_path), len(document), width, height)

        if len(document) == 0:
            print_error(
                f"No geometry found in {input_path}",
                details="The document contains no usable path, rect, circle, "
                "ellipse, polygon or polyline elements.",
            )
            raise typer.Exit(code=1)

        if not quiet:
            print_step("Generating particles")
            print_sampling_info(count, edge_bias, edge_falloff, seed)

        generator = ParticleGenerator(settings, logger=logger)
        particles = generator.generate(document.snapshot(), width, height)

        ParticleWriter(width, height, settings.export).write(particles, output)

        if not quiet:
            stats = generator.stats
            print_success(
                output_path=str(output),
                total_time_s=stats.duration_seconds,
                particles=len(particles),
                requested=count,
                fallback=particles.fallback_count,
                acceptance_rate=stats.acceptance_rate,
            )

    except DocumentLoadError as e:
        print_error(f"Could not load document: {e.reason}")
        raise typer.Exit(code=1)
    except UnsupportedFormatError as e:
        print_error(str(e), details="Use a .png, .svg or .json output path.")
        raise typer.Exit(code=1)
    except ParticleExportError as e:
        print_error(f"Could not save particles: {e.reason}")
        raise typer.Exit(code=1)
    except ParticlizerError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _load_document(input_path: Path, settings: ParticlizerSettings) -> ShapeDocument:
    """Build a document from an SVG file or a JSON scene file.

    Args:
        input_path: Path to the input file
        settings: Particlizer settings

    Returns:
        Document holding the loaded shapes
    """
    if input_path.suffix.lower() == ".json":
        document = ShapeDocument.load_scene(input_path)
        iterations = settings.smoothing.iterations
        if iterations > 0:
            for index, shape in enumerate(document.shapes):
                if isinstance(shape, FreehandPath) and len(shape.points) > 2:
                    smoothed = chaikin_smooth(shape.points, iterations)
                    document.replace(index, FreehandPath(points=tuple(smoothed)))
        return document

    document = ShapeDocument()
    importer = SvgImporter(settings.importing)
    outlines = importer.import_file(input_path, settings.canvas.width, settings.canvas.height)
    if outlines is not None:
        document.add_outlines(outlines)
    return document


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
