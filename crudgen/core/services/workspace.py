"""
Workspace resolution — pick and validate the root for generated files.
"""

from __future__ import annotations

import logging
from pathlib import Path

from crudgen.core.config.loader import Settings
from crudgen.core.context import get_workspace_root
from crudgen.core.errors import NoWorkspace

logger = logging.getLogger(__name__)


def resolve_workspace(explicit: Path | None = None, settings: Settings | None = None) -> Path:
    """Return the absolute workspace root.

    Precedence: ``explicit`` > ``settings.workspace`` > the root
    registered in ``crudgen.core.context``.

    Raises:
        NoWorkspace: No candidate is set, or it is not an existing directory.
    """
    candidate = explicit
    if candidate is None and settings is not None:
        candidate = settings.workspace
    if candidate is None:
        candidate = get_workspace_root()

    if candidate is None:
        raise NoWorkspace("Please open a folder or workspace to generate the project into.")

    root = Path(candidate).expanduser().resolve()
    if not root.is_dir():
        raise NoWorkspace(f"Workspace directory does not exist: {root}")

    logger.debug("Workspace root: %s", root)
    return root
