"""
Export commands manager.

This module provides the export CLI application that registers
the export commands.
"""

import typer

from .links import create_links_export_command


app = typer.Typer(help="Export Rebrandly data")

app.command("links")(create_links_export_command())
