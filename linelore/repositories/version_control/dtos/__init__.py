from .blame_record_dto import BlameRecordDto
from .commit_analysis_dto import AnalysisStatus, CommitAnalysisDto
from .commit_meta_dto import CommitMetaDto
from .diff_hunk_dto import DiffHunkDto, HunkLineDto, HunkLineKind
from .history_result_dto import HistoryResultDto
from .line_range_dto import LineRangeDto
from .resolved_diff_dto import ResolutionStatus, ResolutionTier, ResolutionTraceDto, ResolvedDiffDto
from .timeline_entry_dto import TimelineEntryDto

__all__ = [
    "AnalysisStatus",
    "BlameRecordDto",
    "CommitAnalysisDto",
    "CommitMetaDto",
    "DiffHunkDto",
    "HistoryResultDto",
    "HunkLineDto",
    "HunkLineKind",
    "LineRangeDto",
    "ResolutionStatus",
    "ResolutionTier",
    "ResolutionTraceDto",
    "ResolvedDiffDto",
    "TimelineEntryDto",
]
