"""Split a file's unified diff into hunks for chunked review."""

import re

from src.core.exceptions import MalformedPatchError
from src.services.reviewer.schemas import DiffChunk

HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")

# Lines allowed ahead of the first hunk when a full `git diff` is passed in
PREAMBLE_PREFIXES = (
    "diff --git ",
    "index ",
    "--- ",
    "+++ ",
    "new file mode ",
    "deleted file mode ",
    "old mode ",
    "new mode ",
    "similarity index ",
    "rename from ",
    "rename to ",
)


def parse_patch(patch: str | None, filename: str = "<patch>") -> list[DiffChunk]:
    """Parse the unified diff of one file into its hunks, in source order.

    Args:
        patch: Unified diff text, e.g. the ``patch`` field GitHub returns per file
        filename: Only used in error messages

    Returns:
        One DiffChunk per ``@@`` hunk. Empty or missing patches give an empty list.

    Raises:
        MalformedPatchError: If the text has content but no hunk header, or
            something other than a diff preamble precedes the first hunk.
    """
    if not patch or not patch.strip():
        return []

    chunks: list[DiffChunk] = []
    header_match = None
    lines: list[str] = []

    for line in patch.splitlines():
        match = HUNK_HEADER.match(line)
        if match:
            if header_match:
                chunks.append(_build_chunk(header_match, lines))
            header_match = match
            lines = [line]
            continue

        if header_match is None:
            if line.strip() and not line.startswith(PREAMBLE_PREFIXES):
                raise MalformedPatchError(filename, f"unexpected line before first hunk: {line[:80]!r}")
            continue

        lines.append(line)

    if header_match is None:
        raise MalformedPatchError(filename, "no hunk header found")

    chunks.append(_build_chunk(header_match, lines))
    return chunks


def _build_chunk(match: re.Match, lines: list[str]) -> DiffChunk:
    source_start, source_length, target_start, target_length = match.groups()
    return DiffChunk(
        content="\n".join(lines),
        header=lines[0],
        source_start=int(source_start),
        source_length=int(source_length) if source_length is not None else 1,
        target_start=int(target_start),
        target_length=int(target_length) if target_length is not None else 1,
    )
