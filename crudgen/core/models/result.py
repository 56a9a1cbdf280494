"""
Materialization result — which files a batch actually wrote.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from crudgen.core.models.file_block import FileBlock


class MaterializationResult(BaseModel):
    """Outcome of writing a batch of file blocks under one root.

    A failed batch keeps the files written before the offending block;
    nothing is rolled back.
    """

    root: str
    written: list[str] = Field(default_factory=list)  # relative, in write order
    failed_block: FileBlock | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        data: dict = {
            "ok": self.ok,
            "root": self.root,
            "written": list(self.written),
        }
        if self.error:
            data["error"] = self.error
        if self.failed_block is not None:
            data["failed_path"] = self.failed_block.path
        return data
