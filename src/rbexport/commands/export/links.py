"""
Links export command.

Exports Rebrandly links to one CSV file per workspace.
"""

from typing import List, Optional

import typer

from rbexport.api import RetryingFetcher
from rbexport.commands.config import resolve_settings
from rbexport.logging import get_logger
from rbexport.utils.console import error, success
from .orchestrator import ExportOrchestrator


def create_links_export_command():
    """Create the links export command function"""

    def export_links(
        workspace: Optional[List[str]] = typer.Option(
            None,
            "--workspace",
            "-w",
            help="Workspace id to export (repeatable). "
            "Falls back to REBRANDLY_WORKSPACES, then to discovery.",
        ),
        out: Optional[str] = typer.Option(
            None,
            "--out",
            "-o",
            help="Base CSV filename; other workspaces get their id appended. "
            "Falls back to REBRANDLY_EXPORT_BASE.",
        ),
        max_page_size: Optional[int] = typer.Option(
            None,
            "--max-page-size",
            help="Links requested per API call. Falls back to REBRANDLY_MAX_PAGE_SIZE.",
        ),
        api_key: Optional[str] = typer.Option(
            None,
            "--api-key",
            help="Rebrandly API key. Falls back to REBRANDLY_API_KEY.",
        ),
        base_url: Optional[str] = typer.Option(
            None,
            "--base-url",
            help="Rebrandly API base URL. Falls back to REBRANDLY_API_BASE_URL.",
        ),
    ):
        """Export links to CSV, one file per workspace"""
        logger = get_logger("rbexport.commands.export.links")

        try:
            settings = resolve_settings(
                workspaces=workspace,
                out=out,
                max_page_size=max_page_size,
                api_key=api_key,
                base_url=base_url,
            )
            with RetryingFetcher(
                base_delay=settings.retry_base_delay,
                timeout=settings.request_timeout,
            ) as fetcher:
                orchestrator = ExportOrchestrator(settings, fetcher)
                total = orchestrator.run(settings.workspaces)
        except Exception as e:
            logger.error(f"Links export failed: {str(e)}")
            error(f"Error: {str(e)}")
            raise typer.Exit(1)

        print()
        success(f"Done! Exported {total} total links.")

    return export_links
