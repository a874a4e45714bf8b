"""
Rebrandly API access.

Provides the retrying HTTP fetcher and the workspace lister built on it.
"""

from .fetcher import RetryingFetcher, ResponseKind, classify_status
from .workspaces import WorkspaceLister

__all__ = ["RetryingFetcher", "ResponseKind", "classify_status", "WorkspaceLister"]
