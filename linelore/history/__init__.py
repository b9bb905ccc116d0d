"""Evolutionary line-history engine."""

from .commit_resolver import CommitResolver
from .history_engine import LineHistoryEngine
from .hunk_intersector import intersect, is_relevant, select_relevant_hunks
from .line_commit_mapper import LineCommitMap, map_lines_to_commits
from .range_blamer import BlameOutput, RangeBlamer
from .timeline_merger import TimelineRecord, merge_timeline, sort_by_date
from .unified_diff_parser import FileDiff, parse_hunk_header, parse_hunks, parse_unified_diff

__all__ = [
    "BlameOutput",
    "CommitResolver",
    "FileDiff",
    "LineCommitMap",
    "LineHistoryEngine",
    "RangeBlamer",
    "TimelineRecord",
    "intersect",
    "is_relevant",
    "map_lines_to_commits",
    "merge_timeline",
    "parse_hunk_header",
    "parse_hunks",
    "parse_unified_diff",
    "select_relevant_hunks",
    "sort_by_date",
]
