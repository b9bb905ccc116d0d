"""Parsing of unified diff text into hunks.

Diff text is treated as opaque lines: nothing is re-encoded or normalised,
and lines are split on ``\\n`` only so carriage returns stay in the text.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from linelore.repositories.version_control.dtos.diff_hunk_dto import DiffHunkDto, HunkLineDto, HunkLineKind

logger = logging.getLogger(__name__)

_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_DIFF_GIT_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")

_KINDS = {
    "+": HunkLineKind.ADDED,
    "-": HunkLineKind.REMOVED,
    " ": HunkLineKind.CONTEXT,
}


@dataclass
class FileDiff:
    """All hunks of one file section in a (possibly multi-file) diff."""

    old_path: Optional[str] = None
    new_path: Optional[str] = None
    hunks: List[DiffHunkDto] = field(default_factory=list)

    @property
    def path(self) -> Optional[str]:
        """Post-change path, or the old path for deletions."""
        return self.new_path or self.old_path


def parse_hunk_header(header: str) -> Optional[Tuple[int, int, int, int]]:
    """Parse ``@@ -oldStart[,oldCount] +newStart[,newCount] @@``.

    Omitted counts default to 1. Returns None for anything that is not a
    two-way hunk header (combined-diff ``@@@`` headers included).
    """
    match = _HUNK_HEADER_RE.match(header)
    if not match:
        return None

    old_start = int(match.group(1))
    old_count = int(match.group(2)) if match.group(2) is not None else 1
    new_start = int(match.group(3))
    new_count = int(match.group(4)) if match.group(4) is not None else 1
    return old_start, old_count, new_start, new_count


def _strip_prefix(path: str, prefix: str) -> Optional[str]:
    if path == "/dev/null":
        return None
    return path[len(prefix):] if path.startswith(prefix) else path


class _HunkBuilder:
    def __init__(self, header: str, old_start: int, old_count: int, new_start: int, new_count: int):
        self.header = header
        self.old_start = old_start
        self.old_count = old_count
        self.new_start = new_start
        self.new_count = new_count
        self.lines: List[HunkLineDto] = []
        self._next_new = new_start
        self._next_old = old_start

    def add(self, raw: str) -> None:
        kind = _KINDS.get(raw[:1])
        if kind is None:
            # "\ No newline at end of file" and stray text are not content lines
            return

        if kind == HunkLineKind.REMOVED:
            self.lines.append(
                HunkLineDto(
                    kind=kind,
                    text=raw[1:],
                    new_line_number=max(self._next_new - 1, 0),
                    old_line_number=self._next_old,
                )
            )
            self._next_old += 1
        elif kind == HunkLineKind.ADDED:
            self.lines.append(HunkLineDto(kind=kind, text=raw[1:], new_line_number=self._next_new))
            self._next_new += 1
        else:
            self.lines.append(
                HunkLineDto(kind=kind, text=raw[1:], new_line_number=self._next_new, old_line_number=self._next_old)
            )
            self._next_new += 1
            self._next_old += 1

    def complete(self) -> bool:
        """True once the header's counts have been consumed."""
        return self._next_old >= self.old_start + self.old_count and self._next_new >= self.new_start + self.new_count

    def build(self) -> DiffHunkDto:
        return DiffHunkDto(
            old_start=self.old_start,
            old_count=self.old_count,
            new_start=self.new_start,
            new_count=self.new_count,
            header=self.header,
            lines=tuple(self.lines),
        )


def parse_unified_diff(diff_text: str) -> List[FileDiff]:
    """Split diff text into file sections and parse each section's hunks.

    Text without any ``diff --git`` header is treated as a single anonymous
    section, so bare hunks parse as well.
    """
    files: List[FileDiff] = []
    current_file: Optional[FileDiff] = None
    hunk: Optional[_HunkBuilder] = None

    def close_hunk() -> None:
        nonlocal hunk
        if hunk is not None and current_file is not None:
            current_file.hunks.append(hunk.build())
        hunk = None

    for raw in diff_text.split("\n"):
        if hunk is not None and not hunk.complete():
            if raw.startswith("\\"):
                continue
            if raw[:1] in _KINDS:
                hunk.add(raw)
                continue

        if hunk is not None and raw.startswith("--- "):
            # Next file of a plain (non-git) multi-file diff
            close_hunk()
            current_file = None

        if raw.startswith("diff --git "):
            close_hunk()
            current_file = FileDiff()
            files.append(current_file)
            match = _DIFF_GIT_RE.match(raw)
            if match:
                current_file.old_path, current_file.new_path = match.group(1), match.group(2)
            continue

        if raw.startswith("@@"):
            close_hunk()
            counts = parse_hunk_header(raw)
            if counts is None:
                logger.debug(f"Skipping unsupported hunk header: {raw}")
                continue
            if current_file is None:
                current_file = FileDiff()
                files.append(current_file)
            hunk = _HunkBuilder(raw, *counts)
            continue

        if hunk is None:
            if current_file is None:
                if not raw.startswith("--- "):
                    continue
                current_file = FileDiff()
                files.append(current_file)
            if raw.startswith("--- "):
                current_file.old_path = _strip_prefix(raw[4:], "a/")
            elif raw.startswith("+++ "):
                current_file.new_path = _strip_prefix(raw[4:], "b/")
            elif raw.startswith("rename from "):
                current_file.old_path = raw[len("rename from "):]
            elif raw.startswith("rename to "):
                current_file.new_path = raw[len("rename to "):]
            continue

        if hunk is not None:
            # Content after the header counts are exhausted, or an unknown marker
            hunk.add(raw)

    close_hunk()
    return files


def parse_hunks(diff_text: str) -> List[DiffHunkDto]:
    """All hunks of all file sections, in the order they appear."""
    return [h for file_diff in parse_unified_diff(diff_text) for h in file_diff.hunks]
