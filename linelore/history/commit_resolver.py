"""Commit Resolver: find a commit's diff for a file, following renames."""

import logging
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import List, Optional

from linelore.errors import GitCommandError
from linelore.history.unified_diff_parser import FileDiff, parse_hunks, parse_unified_diff
from linelore.repositories.version_control.abstract_version_controller import AbstractVersionController
from linelore.repositories.version_control.dtos.diff_hunk_dto import DiffHunkDto
from linelore.repositories.version_control.dtos.resolved_diff_dto import (
    ResolutionStatus,
    ResolutionTier,
    ResolutionTraceDto,
    ResolvedDiffDto,
)

logger = logging.getLogger(__name__)


@dataclass
class _Attempt:
    """Mutable record of one resolution while it is in progress."""

    working_path: str
    tiers: List[ResolutionTier] = field(default_factory=list)
    candidates: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)

    def trace(
        self,
        status: ResolutionStatus,
        resolved_by: Optional[ResolutionTier] = None,
        path_used: Optional[str] = None,
        error: Optional[str] = None,
    ) -> ResolutionTraceDto:
        return ResolutionTraceDto(
            status=status,
            working_path=self.working_path,
            tiers_attempted=tuple(self.tiers),
            resolved_by=resolved_by,
            path_used=path_used,
            ambiguous_candidates=tuple(self.candidates) if len(self.candidates) > 1 else (),
            notes=tuple(self.notes),
            error=error,
        )


class CommitResolver:
    """Resolves a commit's diff for one file through an ordered fallback chain.

    1. direct path: the commit's change to the caller's path
    2. basename search: paths the commit modified that share the filename
    3. parent diff: commit vs. its first parent, limited to ``*<filename>``

    The first tier yielding at least one hunk wins. When none does the
    result says so and lists the tiers tried; git failures are reported the
    same way with the error attached.
    """

    def __init__(self, controller: AbstractVersionController):
        self.controller = controller

    def resolve(self, commit_id: str, relative_path: str) -> ResolvedDiffDto:
        attempt = _Attempt(working_path=relative_path)
        try:
            return self._resolve(commit_id, relative_path, attempt)
        except GitCommandError as e:
            logger.error(f"Failed to resolve diff of {relative_path} in {commit_id[:7]}: {e}")
            return ResolvedDiffDto(
                commit_id=commit_id,
                path_used=None,
                trace=attempt.trace(ResolutionStatus.FAILED, error=str(e)),
            )

    def _resolve(self, commit_id: str, relative_path: str, attempt: _Attempt) -> ResolvedDiffDto:
        filename = PurePosixPath(relative_path).name

        attempt.tiers.append(ResolutionTier.DIRECT_PATH)
        hunks = self._diff_for_path(commit_id, relative_path)
        if hunks:
            return self._resolved(commit_id, relative_path, hunks, ResolutionTier.DIRECT_PATH, attempt)
        logger.debug(f"No diff for {relative_path} in {commit_id[:7]}, searching by filename")

        attempt.tiers.append(ResolutionTier.BASENAME_SEARCH)
        changed_files = self.controller.fetch_changed_files(commit_id)
        attempt.candidates = [
            path for path in changed_files if PurePosixPath(path).name == filename and path != relative_path
        ]
        if len(attempt.candidates) > 1:
            logger.warning(
                f"Commit {commit_id[:7]} modified {len(attempt.candidates)} files named {filename}: "
                f"{', '.join(attempt.candidates)}; using the first with changes"
            )
        for candidate in attempt.candidates:
            hunks = self._diff_for_path(commit_id, candidate)
            if hunks:
                return self._resolved(commit_id, candidate, hunks, ResolutionTier.BASENAME_SEARCH, attempt)
            attempt.notes.append(f"candidate {candidate} had no hunks")
        if not attempt.candidates:
            attempt.notes.append(f"commit modified no other file named {filename}")

        attempt.tiers.append(ResolutionTier.PARENT_DIFF)
        parent_id = self.controller.fetch_first_parent(commit_id)
        if parent_id is None:
            attempt.notes.append("root commit has no parent to diff against")
        else:
            file_diffs = parse_unified_diff(self.controller.fetch_parent_diff(commit_id, parent_id, f"*{filename}"))
            chosen = self._pick_file_diff(file_diffs, relative_path, filename)
            if chosen is not None:
                return self._resolved(
                    commit_id, chosen.path or relative_path, chosen.hunks, ResolutionTier.PARENT_DIFF, attempt
                )
            attempt.notes.append(f"diff against parent {parent_id[:7]} had no hunks for *{filename}")

        logger.warning(f"No change to {relative_path} found in commit {commit_id[:7]} after all fallbacks")
        return ResolvedDiffDto(
            commit_id=commit_id,
            path_used=None,
            trace=attempt.trace(ResolutionStatus.NO_DIFF_FOUND),
        )

    def _diff_for_path(self, commit_id: str, path: str) -> List[DiffHunkDto]:
        logger.debug(f"Requesting diff of {path} in {commit_id[:7]}")
        return parse_hunks(self.controller.fetch_file_diff(commit_id, path))

    @staticmethod
    def _pick_file_diff(file_diffs: List[FileDiff], relative_path: str, filename: str) -> Optional[FileDiff]:
        """Prefer the caller's own path, then an exact filename match, then any section with hunks."""
        with_hunks = [f for f in file_diffs if f.hunks]
        for predicate in (
            lambda f: f.path == relative_path,
            lambda f: f.path is not None and PurePosixPath(f.path).name == filename,
            lambda f: True,
        ):
            for file_diff in with_hunks:
                if predicate(file_diff):
                    return file_diff
        return None

    @staticmethod
    def _resolved(
        commit_id: str,
        path_used: str,
        hunks: List[DiffHunkDto],
        tier: ResolutionTier,
        attempt: _Attempt,
    ) -> ResolvedDiffDto:
        if path_used != attempt.working_path:
            logger.info(f"Resolved {attempt.working_path} as {path_used} in {commit_id[:7]} via {tier.value}")
        return ResolvedDiffDto(
            commit_id=commit_id,
            path_used=path_used,
            hunks=tuple(hunks),
            trace=attempt.trace(ResolutionStatus.RESOLVED, resolved_by=tier, path_used=path_used),
        )
