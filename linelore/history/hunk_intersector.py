"""Hunk Intersector: keep only the hunks that touch the selected lines."""

import logging
from typing import Iterable, List, Sequence

from linelore.repositories.version_control.dtos.diff_hunk_dto import DiffHunkDto
from linelore.repositories.version_control.dtos.line_range_dto import LineRangeDto
from linelore.repositories.version_control.dtos.resolved_diff_dto import ResolvedDiffDto

logger = logging.getLogger(__name__)


def overlaps_range(hunk: DiffHunkDto, target: LineRangeDto) -> bool:
    hunk_start, hunk_end = hunk.new_range()
    return hunk_end >= target.start and hunk_start <= target.end


def contains_affected_line(hunk: DiffHunkDto, affected_lines: Iterable[int]) -> bool:
    hunk_start, hunk_end = hunk.new_range()
    return any(hunk_start <= line <= hunk_end for line in affected_lines)


def is_relevant(hunk: DiffHunkDto, target: LineRangeDto, affected_lines: Sequence[int]) -> bool:
    """A hunk is relevant if its post-change range overlaps the selection
    or contains any line this commit owns.
    """
    return overlaps_range(hunk, target) or contains_affected_line(hunk, affected_lines)


def select_relevant_hunks(
    hunks: Iterable[DiffHunkDto], target: LineRangeDto, affected_lines: Sequence[int]
) -> List[DiffHunkDto]:
    """Filter hunks to the relevant ones, returned in file order (ascending new start)."""
    relevant: List[DiffHunkDto] = []
    for hunk in hunks:
        hunk_start, hunk_end = hunk.new_range()
        keep = is_relevant(hunk, target, affected_lines)
        logger.debug(f"Hunk {hunk_start}-{hunk_end} relevant={keep} for lines {target.start}-{target.end}")
        if keep:
            relevant.append(hunk)

    return sorted(relevant, key=lambda h: h.new_start)


def intersect(resolved: ResolvedDiffDto, target: LineRangeDto, affected_lines: Sequence[int]) -> List[DiffHunkDto]:
    """Relevant hunks of a resolved diff for the lines a commit owns."""
    return select_relevant_hunks(resolved.hunks, target, affected_lines)
