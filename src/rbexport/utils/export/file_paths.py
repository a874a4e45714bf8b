"""
Output file naming.

The default workspace writes to the base filename; every other workspace
gets its id inserted before the extension.
"""

import re
from pathlib import Path
from typing import Optional

_UNSAFE = re.compile(r"[^a-zA-Z0-9._-]+")


def safe_slug(value: str) -> str:
    """Replace runs of unsafe filename characters with a dash"""
    return _UNSAFE.sub("-", str(value))


def output_path_for_workspace(base: str, workspace_id: Optional[str]) -> str:
    """
    Derive the output path for a workspace.

    Args:
        base: Base output filename, e.g. ``exports/links.csv``
        workspace_id: Workspace id, or None/"" for the default workspace

    Returns:
        ``base`` unchanged for the default workspace, otherwise
        ``<dir>/<stem>-<slug><ext>``
    """
    if not workspace_id:
        return base
    path = Path(base)
    return str(path.with_name(f"{path.stem}-{safe_slug(workspace_id)}{path.suffix}"))
