"""DTOs for unified diff hunks and their content lines."""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class HunkLineKind(str, Enum):
    """Kind of a content line inside a hunk."""

    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"


_MARKERS = {
    HunkLineKind.CONTEXT: " ",
    HunkLineKind.ADDED: "+",
    HunkLineKind.REMOVED: "-",
}


class HunkLineDto(BaseModel):
    """A single content line of a hunk.

    ``text`` excludes the leading marker character. For removed lines
    ``new_line_number`` is the preceding post-change line number, which is
    where the removal is anchored when displayed.
    """

    model_config = ConfigDict(frozen=True)

    kind: HunkLineKind
    text: str
    new_line_number: int
    old_line_number: Optional[int] = None

    def to_patch_line(self) -> str:
        return f"{_MARKERS[self.kind]}{self.text}"


class DiffHunkDto(BaseModel):
    """Data Transfer Object for one hunk of a unified diff."""

    model_config = ConfigDict(frozen=True)

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    header: str
    lines: Tuple[HunkLineDto, ...] = ()

    def new_range(self) -> Tuple[int, int]:
        """Post-change line range ``[start, end]`` used for relevance.

        A pure deletion (``new_count`` of 0) still covers the single line at
        ``new_start``, the line its removed text sat next to.
        """
        return self.new_start, self.new_start + max(self.new_count, 1) - 1

    def lines_of_kind(self, kind: HunkLineKind) -> List[HunkLineDto]:
        return [line for line in self.lines if line.kind == kind]

    def to_patch(self) -> str:
        """Re-emit the hunk as unified diff text, header first."""
        return "\n".join([self.header] + [line.to_patch_line() for line in self.lines])
