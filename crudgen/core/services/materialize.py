"""
Filesystem materializer — write parsed file blocks under a root.

Blocks are written in order, creating parent directories as needed and
overwriting existing files.  The first block that fails stops the
batch; files already written stay on disk.
"""

from __future__ import annotations

import logging
from pathlib import Path

from crudgen.core.errors import UnsafePath, WriteError
from crudgen.core.models.file_block import FileBlock
from crudgen.core.models.result import MaterializationResult

logger = logging.getLogger(__name__)


def resolve_target(root: Path, rel_path: str) -> Path | None:
    """Resolve ``rel_path`` under ``root``.

    Backslashes are treated as separators so Windows-style paths from the
    model behave the same on every platform.

    Returns:
        The absolute target path, or None if it is the root itself or
        lies outside it (traversal, absolute path, escaping symlink) or
        cannot be resolved at all (e.g. an embedded NUL byte).
    """
    base = root.resolve()
    cleaned = rel_path.strip().replace("\\", "/")
    if not cleaned:
        return None
    try:
        target = (base / cleaned).resolve()
    except ValueError:
        return None
    if target == base or not target.is_relative_to(base):
        return None
    return target


def write_block(root: Path, block: FileBlock) -> Path:
    """Write one block under ``root`` and return its absolute path.

    Raises:
        UnsafePath: The block's path is unusable or escapes ``root``.
        OSError:    Directory creation or the write itself failed.
        ValueError: The content cannot be encoded as UTF-8.
    """
    target = resolve_target(root, block.path)
    if target is None:
        raise UnsafePath(
            f"Refusing to write outside the workspace: {block.path!r}",
            block=block,
            result=MaterializationResult(root=str(root)),
        )
    target.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps content byte-for-byte on every platform
    target.write_text(block.content, encoding="utf-8", newline="")
    return target


def materialize(blocks: list[FileBlock], root: Path) -> MaterializationResult:
    """Write every block under ``root``, stopping at the first failure.

    Args:
        blocks: File blocks in the order they should be written.
        root:   Existing workspace directory.

    Returns:
        MaterializationResult listing the files written.

    Raises:
        UnsafePath: A block resolves outside ``root``.
        WriteError: The OS refused a write, or the content is not encodable.
        Either error carries the partial result in ``.result``.
    """
    result = MaterializationResult(root=str(root))

    for block in blocks:
        try:
            target = write_block(root, block)
        except UnsafePath as e:
            result.failed_block = block
            result.error = str(e)
            e.result = result
            logger.error("Unsafe path in model output: %r", block.path)
            raise
        except (OSError, ValueError) as e:
            result.failed_block = block
            result.error = f"Error writing {block.path}: {e}"
            logger.error("Write failed for %s: %s", block.path, e)
            raise WriteError(result.error, block=block, result=result) from e

        rel = target.relative_to(root.resolve()).as_posix()
        result.written.append(rel)
        logger.info("Wrote generated file: %s", target)

    return result
