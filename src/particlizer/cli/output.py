"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with formatted step, summary and error messages.
"""


from rich.console import Console
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Particlizer[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_document_info(path: str, shape_count: int, width: int, height: int) -> None:
    """Print loaded document information.

    Args:
        path: Path to the input document
        shape_count: Number of shapes in the document
        width: Canvas width in pixels
        height: Canvas height in pixels
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(path)
    console.print(line)
    console.print(f"  {shape_count:,} shapes {SYM_DOT} {width}×{height} canvas")


def print_sampling_info(count: int, edge_bias: float, edge_falloff: float, seed: int | None) -> None:
    """Print sampling configuration."""
    seed_str = "random" if seed is None else str(seed)
    console.print(
        f"  {count:,} particles {SYM_DOT} bias {edge_bias:.2f} {SYM_DOT} "
        f"falloff {edge_falloff:.1f} {SYM_DOT} seed {seed_str}"
    )


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str,
    total_time_s: float,
    particles: int,
    requested: int,
    fallback: int,
    acceptance_rate: float,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        total_time_s: Generation time in seconds
        particles: Number of particles produced
        requested: Number of particles requested
        fallback: Particles placed by the fallback phase
        acceptance_rate: Fraction of rejection-sampling candidates accepted
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    count_style = "yellow" if particles < requested else "green"
    console.print(
        f"  [{count_style}]{particles:,}/{requested:,} particles[/{count_style}] {SYM_DOT} "
        f"{fallback:,} fallback {SYM_DOT} {acceptance_rate:.1%} accepted"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
