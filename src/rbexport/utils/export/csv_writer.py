"""
Streaming CSV writer.

Writes one workspace's export to a text sink page by page. Nothing beyond
the current page is held in memory; when the sink holds more undrained
data than the high water mark the writer blocks on a flush before
accepting the next chunk.
"""

from typing import Optional, Sequence, TextIO

from rbexport.constants import CSV_FIELDNAMES, WRITE_HIGH_WATER_MARK
from rbexport.logging import get_logger
from rbexport.utils.console import progress
from .csv_serializer import header_row


class StreamingCsvWriter:
    """Context manager owning the output sink of one workspace export

    The sink is flushed and closed on every exit path; exceptions raised
    inside the ``with`` block propagate unchanged.
    """

    def __init__(
        self,
        output_path: str,
        sink: Optional[TextIO] = None,
        high_water_mark: int = WRITE_HIGH_WATER_MARK,
        fields: Sequence[str] = CSV_FIELDNAMES,
    ):
        self.output_path = output_path
        self.high_water_mark = high_water_mark
        self.fields = fields
        self.total_written = 0
        self.page_count = 0
        self.drain_count = 0
        self._sink = sink
        self._pending = 0
        self.logger = get_logger("rbexport.utils.export.csv_writer")

    def __enter__(self) -> "StreamingCsvWriter":
        if self._sink is None:
            self._sink = open(self.output_path, "w", encoding="utf-8", newline="")
        self.logger.debug(f"Opened {self.output_path} for writing")
        try:
            self._write_chunk(header_row(self.fields) + "\n")
        except BaseException:
            self._finalize()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._finalize()
        if exc_type is None:
            progress(f"  Exported {self.total_written} links to {self.output_path}\n")
            self.logger.info(
                f"Wrote {self.total_written} links in {self.page_count} pages "
                f"to {self.output_path}"
            )
        else:
            # Clear the progress line before the error is reported
            progress("\n")
            self.logger.warning(
                f"Export to {self.output_path} aborted after "
                f"{self.total_written} links: {exc}"
            )
        return False

    def write_page(self, rows: Sequence[str]) -> int:
        """
        Write one page of serialized rows as a single chunk.

        Args:
            rows: CSV rows without trailing newlines

        Returns:
            Number of rows written
        """
        if not rows:
            return 0
        self._write_chunk("\n".join(rows) + "\n")
        self.total_written += len(rows)
        self.page_count += 1
        progress(f"  Fetched {self.total_written} links (page {self.page_count})...")
        return len(rows)

    def _write_chunk(self, chunk: str) -> None:
        self._sink.write(chunk)
        self._pending += len(chunk)
        if self._pending >= self.high_water_mark:
            self._drain()

    def _drain(self) -> None:
        # Blocks until the sink has handed its buffer to the OS
        self._sink.flush()
        self._pending = 0
        self.drain_count += 1

    def _finalize(self) -> None:
        if self._sink is None:
            return
        try:
            self._sink.flush()
        finally:
            self._sink.close()
            self._sink = None
            self._pending = 0
