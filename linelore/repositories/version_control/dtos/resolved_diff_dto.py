"""DTOs describing how a commit's diff for a file was resolved."""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .diff_hunk_dto import DiffHunkDto


class ResolutionTier(str, Enum):
    """Fallback tiers tried, in order, when resolving a commit's diff."""

    DIRECT_PATH = "direct_path"
    BASENAME_SEARCH = "basename_search"
    PARENT_DIFF = "parent_diff"


class ResolutionStatus(str, Enum):
    RESOLVED = "resolved"
    NO_DIFF_FOUND = "no_diff_found"
    FAILED = "failed"


class ResolutionTraceDto(BaseModel):
    """Structured diagnostics for a single commit resolution.

    Kept separate from the hunk data so consumers can log or display it
    without parsing anything out of the diff text.
    """

    model_config = ConfigDict(frozen=True)

    status: ResolutionStatus
    working_path: str
    tiers_attempted: Tuple[ResolutionTier, ...] = ()
    resolved_by: Optional[ResolutionTier] = None
    path_used: Optional[str] = None
    ambiguous_candidates: Tuple[str, ...] = ()
    notes: Tuple[str, ...] = ()
    error: Optional[str] = None

    @property
    def is_ambiguous(self) -> bool:
        return len(self.ambiguous_candidates) > 1


class ResolvedDiffDto(BaseModel):
    """A commit's diff restricted to one file.

    ``path_used`` may differ from the caller's path when a rename fallback
    found the file at its historical location.
    """

    model_config = ConfigDict(frozen=True)

    commit_id: str
    path_used: Optional[str]
    hunks: Tuple[DiffHunkDto, ...] = ()
    trace: ResolutionTraceDto

    @property
    def found(self) -> bool:
        return self.trace.status == ResolutionStatus.RESOLVED
