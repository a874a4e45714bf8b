"""
Export utilities package.

Provides focused utility modules for export operations.
"""

from .pagination_handler import LinkPager
from .csv_serializer import to_row, header_row, csv_escape
from .csv_writer import StreamingCsvWriter
from .file_paths import output_path_for_workspace, safe_slug

__all__ = [
    "LinkPager",
    "to_row",
    "header_row",
    "csv_escape",
    "StreamingCsvWriter",
    "output_path_for_workspace",
    "safe_slug",
]
