"""
Workspace context — "which directory are we generating into."

The default root is registered ONCE at startup by the CLI group
(config file directory, or cwd).  Commands may still override it with
an explicit ``--root``.

Module-level singleton (not a class); ``get_workspace_root()`` returns
None while unset.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


_workspace_root: Optional[Path] = None


def set_workspace_root(root: Path | None) -> None:
    """Register the default workspace root for the current process."""
    global _workspace_root
    _workspace_root = root


def get_workspace_root() -> Optional[Path]:
    """Return the registered workspace root, or None if not yet set."""
    return _workspace_root
