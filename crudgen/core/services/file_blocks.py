"""
File-block parser — split a model reply into (path, content) blocks.

The reply is cut on every triple-backtick fence.  A segment is kept only
when, once stripped, it starts with ``file:``; its first line names the
file and the remaining lines are the content, joined back with ``\\n``.

Known fragility: nothing escapes a fence inside file content, and an odd
number of fences leaves one unclosed trailing segment.  That segment is
dropped if it lacks the marker, otherwise it is parsed like any other
(possibly swallowing text the model meant as commentary).  We log a
warning in that case but do not try to repair it.

Paths are returned as emitted, even when empty or escaping the root.
Rejecting them is the materializer's job.
"""

from __future__ import annotations

import logging

from crudgen.core.models.file_block import FileBlock
from crudgen.core.services.prompts import FENCE, MARKER

logger = logging.getLogger(__name__)


def split_segments(text: str) -> list[str]:
    """Cut ``text`` on every fence, warning if the fences don't pair up."""
    segments = text.split(FENCE)
    fences = len(segments) - 1
    if fences % 2:
        logger.warning(
            "Model output has an odd number of fences (%d); "
            "the last block may be truncated or mis-segmented",
            fences,
        )
    return segments


def parse_segment(segment: str) -> FileBlock:
    """Parse one marker-bearing segment into a FileBlock."""
    lines = segment.strip().split("\n")
    marker_line = lines[0].strip()
    path = marker_line[len(MARKER):].strip()
    content = "\n".join(lines[1:])
    return FileBlock(path=path, content=content)


def parse_file_blocks(text: str) -> list[FileBlock]:
    """Parse a model reply into file blocks, in the order they appear.

    Args:
        text: Raw model reply.

    Returns:
        One FileBlock per fenced segment starting with ``file:``.
        Other segments (prose, fences around explanations) are skipped.
    """
    blocks: list[FileBlock] = []
    for index, segment in enumerate(split_segments(text)):
        if not segment.strip().startswith(MARKER):
            if segment.strip():
                logger.debug("Skipping segment %d: no %r marker", index, MARKER)
            continue
        block = parse_segment(segment)
        logger.debug("Parsed block %r (%d chars)", block.path, len(block.content))
        blocks.append(block)

    logger.info("Parsed %d file block(s) from model output", len(blocks))
    return blocks
