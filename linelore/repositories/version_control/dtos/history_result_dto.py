"""HistoryResultDto, the full outcome of analysing a selection."""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .commit_analysis_dto import CommitAnalysisDto
from .line_range_dto import LineRangeDto


class HistoryResultDto(BaseModel):
    """Result of running the line-history pipeline over one selection.

    ``line_to_commit`` is dense: index ``i`` holds the owner of line
    ``line_range.start + i`` (``None`` when unattributed). ``has_history`` is
    False when no line in the range has committed history, which is distinct
    from having analysed zero commits.
    """

    model_config = ConfigDict(frozen=True)

    repo_root: str
    relative_path: str
    line_range: LineRangeDto
    line_to_commit: Tuple[Optional[str], ...]
    unique_commits: Tuple[str, ...]
    analyses: Tuple[CommitAnalysisDto, ...] = ()
    has_history: bool = True

    def commit_for_line(self, line_number: int) -> Optional[str]:
        if not self.line_range.contains(line_number):
            raise KeyError(line_number)
        return self.line_to_commit[line_number - self.line_range.start]
