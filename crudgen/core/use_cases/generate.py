"""
Generate use case — request in, project tree out.

The flow is strictly linear and each step needs the previous one's
output:

    interpret (model #1) → compose → generate (model #2) → parse → write

Any CrudGenError aborts the run at that step and propagates to the
caller.  Nothing is retried and nothing is cleaned up.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from crudgen.adapters.base import ModelClient
from crudgen.core.config.loader import Settings
from crudgen.core.errors import WriteError
from crudgen.core.models.file_block import FileBlock
from crudgen.core.models.request import GenerationRequest
from crudgen.core.models.result import MaterializationResult
from crudgen.core.services.file_blocks import parse_file_blocks
from crudgen.core.services.materialize import materialize
from crudgen.core.services.prompts import (
    build_generation_prompt,
    build_interpretation_prompt,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


@dataclass
class GenerateResult:
    """Everything a successful generation run produced."""

    request: GenerationRequest
    root: Path
    spec: str = ""
    blocks: list[FileBlock] = field(default_factory=list)
    materialized: MaterializationResult | None = None

    @property
    def written(self) -> list[str]:
        return list(self.materialized.written) if self.materialized else []

    def to_dict(self) -> dict:
        return {
            "ok": True,
            "request": self.request.model_dump(mode="json"),
            "root": str(self.root),
            "spec": self.spec,
            "block_count": len(self.blocks),
            "written": self.written,
        }


def _save_raw(raw_dir: Path | None, name: str, text: str) -> None:
    if raw_dir is None:
        return
    try:
        raw_dir.mkdir(parents=True, exist_ok=True)
        (raw_dir / name).write_text(text, encoding="utf-8", newline="")
    except (OSError, ValueError) as e:
        block = FileBlock(path=name, content=text)
        raise WriteError(
            f"Cannot save raw reply to {raw_dir / name}: {e}",
            block=block,
            result=MaterializationResult(root=str(raw_dir), failed_block=block, error=str(e)),
        ) from e
    logger.debug("Saved raw reply to %s", raw_dir / name)


def write_response(text: str, root: Path) -> tuple[list[FileBlock], MaterializationResult]:
    """Parse a model reply and write its file blocks under ``root``."""
    blocks = parse_file_blocks(text)
    if not blocks:
        logger.warning("Model output contained no file blocks; nothing written")
    return blocks, materialize(blocks, root)


def run_generate(
    request: GenerationRequest,
    root: Path,
    client: ModelClient,
    settings: Settings | None = None,
    on_progress: ProgressCallback | None = None,
    raw_dir: Path | None = None,
) -> GenerateResult:
    """Run both model stages and materialize the reply under ``root``.

    Args:
        request:     The user's language/database/description answers.
        root:        Existing workspace directory (see resolve_workspace).
        client:      Model client used for both calls.
        settings:    Model names; defaults when None.
        on_progress: Receives a short message as each stage starts.
        raw_dir:     If set, both raw replies are saved there.

    Returns:
        GenerateResult describing the plan and the files written.

    Raises:
        EndpointUnreachable, EndpointError, MalformedResponse,
        UnsafePath, WriteError: see crudgen.core.errors.
    """
    settings = settings or Settings()
    notify = on_progress or (lambda _msg: None)
    result = GenerateResult(request=request, root=root)

    # ── Stage 1: interpret ──────────────────────────────────────
    notify(f"Interpreting prompt with {settings.interpret_model}...")
    logger.info("Stage 1: interpreting request with %s", settings.interpret_model)
    spec_reply = client.generate(
        settings.interpret_model, build_interpretation_prompt(request),
    )
    _save_raw(raw_dir, "interpretation.txt", spec_reply)
    result.spec = spec_reply.strip()

    # ── Stage 2: generate ───────────────────────────────────────
    notify(f"Generating code with {settings.generate_model}...")
    logger.info("Stage 2: generating code with %s", settings.generate_model)
    code_reply = client.generate(
        settings.generate_model, build_generation_prompt(request, result.spec),
    )
    _save_raw(raw_dir, "generation.txt", code_reply)

    # ── Parse + write ───────────────────────────────────────────
    result.blocks, result.materialized = write_response(code_reply, root)
    logger.info("Generated %d file(s) under %s", len(result.written), root)
    return result
