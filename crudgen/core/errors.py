"""
Error kinds — every way a generation run can end early.

Each kind names the stage that failed and maps to a distinct process
exit code.  Services raise these and never catch them; the ``generate``
command catches ``CrudGenError`` once, at the top, and turns it into a
user-visible message.

    SelectionCancelled   3   user dismissed a prompt
    EndpointUnreachable  4   connection to the model endpoint failed
    EndpointError        5   endpoint answered with a non-success status
    MalformedResponse    6   reply was not JSON or had no "response" text
    NoWorkspace          7   no usable root directory
    UnsafePath           8   a file block would land outside the root
    WriteError           9   OS-level failure creating dirs or writing
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from crudgen.core.models.file_block import FileBlock
    from crudgen.core.models.result import MaterializationResult


class CrudGenError(Exception):
    """Base class for all terminal errors of a generation run."""

    exit_code: int = 1
    stage: str = "crudgen"

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return {
            "ok": False,
            "kind": self.kind,
            "stage": self.stage,
            "error": str(self),
        }


class SelectionCancelled(CrudGenError):
    """The user cancelled one of the interactive prompts."""

    exit_code = 3
    stage = "input"


# ── Model endpoint ──────────────────────────────────────────────


class EndpointUnreachable(CrudGenError):
    """The inference endpoint could not be reached at all."""

    exit_code = 4
    stage = "model"


class EndpointError(CrudGenError):
    """The inference endpoint replied with a non-success HTTP status."""

    exit_code = 5
    stage = "model"

    def __init__(self, model: str, status: int, reason: str) -> None:
        self.model = model
        self.status = status
        self.reason = reason
        super().__init__(f"Error from {model}: {status} {reason}".rstrip())


class MalformedResponse(CrudGenError):
    """The endpoint's success reply did not carry the expected text."""

    exit_code = 6
    stage = "model"


# ── Filesystem ──────────────────────────────────────────────────


class NoWorkspace(CrudGenError):
    """No root directory is available to generate the project into."""

    exit_code = 7
    stage = "workspace"


class MaterializeError(CrudGenError):
    """A file block could not be written; the batch stopped there.

    Attributes:
        block:  The offending block.
        result: What was committed before the failure (not rolled back).
    """

    stage = "write"

    def __init__(
        self,
        message: str,
        block: FileBlock,
        result: MaterializationResult,
    ) -> None:
        self.block = block
        self.result = result
        super().__init__(message)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["path"] = self.block.path
        data["written"] = list(self.result.written)
        return data


class UnsafePath(MaterializeError):
    """A block's path resolves outside the workspace root."""

    exit_code = 8


class WriteError(MaterializeError):
    """Creating a directory or writing a file failed for OS reasons."""

    exit_code = 9
