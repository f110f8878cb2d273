"""Command-line interface for digitflip.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Digit line for a phrase, with per-letter glyph sources
- SVG preview of the written and flipped rows
- Symbol set discovery and single-glyph inspection
"""

from digitflip.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
