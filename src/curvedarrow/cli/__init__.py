"""Command-line interface for curvedarrow.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for arrow export
- Verbose/quiet output modes
- List and dry-run modes for inspecting documents
- Detailed error reporting
"""

from curvedarrow.cli.app import cli, main

__all__ = ["cli", "main"]
