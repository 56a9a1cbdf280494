"""
File block model — one (path, content) unit parsed from model output.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FileBlock(BaseModel):
    """A file the model asked us to create.

    The path is taken verbatim from the marker line and is NOT
    validated here; the materializer decides whether it is safe.

    Attributes:
        path:    Relative path from the workspace root, as emitted.
        content: Full file content, exactly as emitted.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    content: str = ""
