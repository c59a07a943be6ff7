"""Command-line interface for particlizer.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- SVG document and JSON scene input
- PNG, SVG and JSON particle output
- Verbose/quiet output modes
- Detailed error reporting
"""

from particlizer.cli.app import cli, main

__all__ = ["cli", "main"]
