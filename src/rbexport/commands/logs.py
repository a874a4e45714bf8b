"""
Log management commands for rbexport.

This module provides commands for viewing the application log and
its configuration.
"""

import typer
from datetime import datetime
from typing import Optional
from rich.syntax import Syntax
from rbexport.logging import get_logger, setup_logging
from rbexport.logging.config import LogConfig, get_log_file_path, get_log_directory
from rbexport.logging.utils import format_size
from rbexport.utils.console import console, create_table, error, info, warning
from rbexport.constants import LOG_APP_NAME, LOG_FILE_NAME, LOG_LINES_TO_SHOW

app = typer.Typer(help="Manage rbexport logs")


@app.command("show")
def show_logs(
    lines: int = typer.Option(
        LOG_LINES_TO_SHOW, "--lines", "-n", help="Number of lines to show"
    ),
    level: Optional[str] = typer.Option(
        None, "--level", help="Filter by log level (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    """Show recent log entries"""
    setup_logging()
    logger = get_logger("rbexport.commands.logs")

    try:
        log_file = get_log_file_path()

        if not log_file.exists():
            warning(
                f"No log file found. Run some {LOG_APP_NAME} commands to generate logs."
            )
            return

        with open(log_file, "r", encoding="utf-8") as f:
            all_lines = f.readlines()

        if level:
            level_upper = level.upper()
            all_lines = [line for line in all_lines if level_upper in line]
        display_lines = all_lines[-lines:] if all_lines else []

        if not display_lines:
            info("No log entries found matching the criteria.")
            return

        console.print(
            Syntax("".join(display_lines), "log", theme="monokai", line_numbers=False)
        )

    except OSError as e:
        logger.error(f"Failed to show logs: {str(e)}")
        error(f"Failed to show logs: {str(e)}")
        raise typer.Exit(1)


@app.command("info")
def log_info() -> None:
    """Show log configuration and file information"""
    setup_logging()

    config = LogConfig()
    log_file = get_log_file_path(config)
    log_dir = get_log_directory()

    table = create_table(f"{LOG_APP_NAME} Log Information", ["Setting", "Value"])
    table.add_row("Log Directory", str(log_dir))
    table.add_row("Log File", str(log_file))
    table.add_row("Log Level", config.default_level.value)
    table.add_row("Rotation", "Daily at midnight")
    table.add_row("Retention Days", str(config.log_retention_days))

    if log_file.exists():
        stat = log_file.stat()
        table.add_row("Current Size", format_size(stat.st_size))
        modified = datetime.fromtimestamp(stat.st_mtime)
        table.add_row("Last Modified", modified.strftime("%Y-%m-%d %H:%M:%S"))
    else:
        table.add_row("Current Size", "File not found")
        table.add_row("Last Modified", "N/A")

    rotated_files = list(log_dir.glob(f"{LOG_FILE_NAME}.log.*"))
    table.add_row("Rotated Files", str(len(rotated_files)))

    console.print(table)
