"""
Export orchestration.

Drives a full export run: resolves the workspaces to export, then for
each one, strictly in order, streams its links from the API into a CSV
file. Workspaces are never exported in parallel, to stay within the
API's rate limits. The first failure aborts the run.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from rbexport.api import RetryingFetcher, WorkspaceLister
from rbexport.commands.config import ExportSettings
from rbexport.exceptions import NoWorkspacesFound
from rbexport.logging import get_logger, log_application_event
from rbexport.utils.console import info
from rbexport.utils.export import (
    LinkPager,
    StreamingCsvWriter,
    output_path_for_workspace,
    to_row,
)


@dataclass(frozen=True)
class ExportJob:
    workspace_id: Optional[str]
    output_path: str


@dataclass(frozen=True)
class ExportResult:
    workspace_id: Optional[str]
    total_exported: int
    pages: int
    output_path: str


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


class ExportOrchestrator:
    """Exports the links of one or more workspaces to CSV files"""

    def __init__(
        self,
        settings: ExportSettings,
        fetcher: RetryingFetcher,
        lister: Optional[WorkspaceLister] = None,
        pager: Optional[LinkPager] = None,
        path_for: Callable[[str, Optional[str]], str] = output_path_for_workspace,
    ):
        self.settings = settings
        self.fetcher = fetcher
        self.lister = lister or WorkspaceLister(
            fetcher, settings.api_key, settings.api_base_url
        )
        self.pager = pager or LinkPager(
            fetcher,
            settings.api_key,
            base_url=settings.api_base_url,
            page_size=settings.max_page_size,
        )
        self.path_for = path_for
        self.results: List[ExportResult] = []
        self.logger = get_logger("rbexport.commands.export.orchestrator")

    def resolve_targets(self, configured_workspaces: Sequence[str]) -> List[str]:
        """Use the configured workspaces, or discover them when none are given"""
        if configured_workspaces:
            targets = list(configured_workspaces)
            info(
                f"Exporting {_plural(len(targets), 'configured workspace')}...\n"
            )
            return targets

        info("No workspaces specified. Discovering workspaces...")
        targets = self.lister.list()
        if not targets:
            raise NoWorkspacesFound()
        info(f"Found {_plural(len(targets), 'workspace')}.\n")
        return targets

    def run(self, configured_workspaces: Sequence[str] = ()) -> int:
        """
        Export every target workspace in order.

        Args:
            configured_workspaces: Explicit workspace ids; empty to discover

        Returns:
            Total number of links exported across all workspaces

        Raises:
            NoWorkspacesFound: Discovery returned no workspaces
            ApiError: A fetch failed; later workspaces are not attempted
        """
        self.results = []
        targets = self.resolve_targets(configured_workspaces)
        self.logger.info(f"Exporting {len(targets)} workspaces: {targets}")

        total = 0
        for workspace_id in targets:
            job = ExportJob(
                workspace_id=workspace_id,
                output_path=self.path_for(self.settings.output_base, workspace_id),
            )
            info(f"Exporting workspace {workspace_id}...")
            result = self.export_workspace(job)
            self.results.append(result)
            total += result.total_exported

        log_application_event(
            "export completed",
            details={"workspaces": len(targets), "links": total},
        )
        return total

    def export_workspace(self, job: ExportJob) -> ExportResult:
        """Stream every page of one workspace into its CSV file"""
        self.logger.info(
            f"Starting export of workspace {job.workspace_id or 'default'} "
            f"to {job.output_path}"
        )
        with StreamingCsvWriter(job.output_path) as writer:
            for page in self.pager.produce_pages(job.workspace_id):
                writer.write_page([to_row(link) for link in page])

        return ExportResult(
            workspace_id=job.workspace_id,
            total_exported=writer.total_written,
            pages=writer.page_count,
            output_path=job.output_path,
        )
