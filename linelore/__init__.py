"""Line-range history for files in git repositories."""

import threading
from typing import Optional

from .config import EngineConfig
from .errors import (
    AnalysisCancelledError,
    GitCommandError,
    GitNotAvailableError,
    GitTimeoutError,
    InvalidLineRangeError,
    LineHistoryError,
    MissingFileError,
    NotARepositoryError,
    UntrackedFileError,
)
from .history.history_engine import LineHistoryEngine
from .repositories.version_control.dtos import CommitAnalysisDto, HistoryResultDto, LineRangeDto
from .repositories.version_control.repository_locator import open_repository

__all__ = [
    "AnalysisCancelledError",
    "CommitAnalysisDto",
    "EngineConfig",
    "GitCommandError",
    "GitNotAvailableError",
    "GitTimeoutError",
    "HistoryResultDto",
    "InvalidLineRangeError",
    "LineHistoryEngine",
    "LineHistoryError",
    "LineRangeDto",
    "MissingFileError",
    "NotARepositoryError",
    "UntrackedFileError",
    "analyze_selection",
]


def analyze_selection(
    file_path: str,
    start_line: int,
    end_line: int,
    config: Optional[EngineConfig] = None,
    cancel_event: Optional[threading.Event] = None,
) -> HistoryResultDto:
    """Explain why lines ``start_line..end_line`` of ``file_path`` exist.

    Locates the repository containing the file and runs the line-history
    pipeline over the selection.

    Example:
        >>> from linelore import analyze_selection
        >>> result = analyze_selection("/work/app/src/auth.py", 10, 12)
        >>> for analysis in result.analyses:
        >>>     print(analysis.commit.short_id, analysis.commit.subject, analysis.affected_lines)
    """
    config = config or EngineConfig()
    controller, relative_path = open_repository(file_path, config)
    line_range = LineRangeDto(start=start_line, end=end_line)
    return LineHistoryEngine(config).analyze(controller, relative_path, line_range, cancel_event)
