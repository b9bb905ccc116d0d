"""CommitAnalysisDto, the engine's per-commit result."""

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict

from .commit_meta_dto import CommitMetaDto
from .diff_hunk_dto import DiffHunkDto
from .resolved_diff_dto import ResolutionTraceDto


class AnalysisStatus(str, Enum):
    """Outcome of analysing one commit."""

    RESOLVED = "resolved"
    NO_RELEVANT_HUNKS = "no_relevant_hunks"
    NO_DIFF_FOUND = "no_diff_found"
    FAILED = "failed"


class CommitAnalysisDto(BaseModel):
    """Data Transfer Object for a commit that owns part of the selection."""

    model_config = ConfigDict(frozen=True)

    commit: CommitMetaDto
    affected_lines: Tuple[int, ...]
    relevant_hunks: Tuple[DiffHunkDto, ...] = ()
    status: AnalysisStatus
    trace: ResolutionTraceDto

    @property
    def is_degraded(self) -> bool:
        return self.status != AnalysisStatus.RESOLVED

    @property
    def path_used(self) -> str:
        return self.trace.path_used or self.trace.working_path
