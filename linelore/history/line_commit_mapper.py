"""Line-Commit Mapper: dense line -> commit index over a selection."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from linelore.repositories.version_control.dtos.blame_record_dto import BlameRecordDto
from linelore.repositories.version_control.dtos.line_range_dto import LineRangeDto

logger = logging.getLogger(__name__)


@dataclass
class LineCommitMap:
    """Mapping from each line of a range to the commit that owns it.

    ``line_to_commit[i]`` belongs to line ``line_range.start + i``; ``None``
    marks an unattributed line. ``unique_commits`` lists owners in the order
    they are first seen walking the range top to bottom.
    """

    line_range: LineRangeDto
    line_to_commit: List[Optional[str]]
    unique_commits: List[str] = field(default_factory=list)

    @property
    def has_history(self) -> bool:
        """False when no line in the range has any committed history."""
        return bool(self.unique_commits)

    def commit_for_line(self, line_number: int) -> Optional[str]:
        if not self.line_range.contains(line_number):
            raise KeyError(line_number)
        return self.line_to_commit[line_number - self.line_range.start]

    def lines_for_commit(self, commit_id: str) -> List[int]:
        return [
            self.line_range.start + offset
            for offset, owner in enumerate(self.line_to_commit)
            if owner == commit_id
        ]

    def as_dict(self) -> Dict[int, Optional[str]]:
        return {self.line_range.start + offset: owner for offset, owner in enumerate(self.line_to_commit)}


def map_lines_to_commits(records: Iterable[BlameRecordDto], line_range: LineRangeDto) -> LineCommitMap:
    """Build the dense line map and first-seen commit order.

    Records outside ``line_range`` are ignored. Lines the blame output did
    not mention keep the unattributed marker, so every line of the range is
    always present.
    """
    line_to_commit: List[Optional[str]] = [None] * line_range.size

    for record in records:
        if not line_range.contains(record.line_number):
            logger.debug(f"Ignoring blame record for line {record.line_number} outside {line_range}")
            continue
        line_to_commit[record.line_number - line_range.start] = record.commit_id

    unique_commits: List[str] = []
    seen = set()
    for owner in line_to_commit:
        if owner is not None and owner not in seen:
            seen.add(owner)
            unique_commits.append(owner)

    if not unique_commits:
        logger.info(f"No committed history for lines {line_range.start}-{line_range.end}")

    return LineCommitMap(line_range=line_range, line_to_commit=line_to_commit, unique_commits=unique_commits)
