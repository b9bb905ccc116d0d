"""Line-history engine: why does this range of lines exist?

This module provides the LineHistoryEngine class that runs the whole
pipeline for one selection: blame the range, map lines to commits, then
resolve and filter each commit's diff in parallel.
"""

import logging
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from typing import Dict, List, Optional

from linelore.config import EngineConfig
from linelore.errors import AnalysisCancelledError, LineHistoryError
from linelore.history.commit_resolver import CommitResolver
from linelore.history.hunk_intersector import intersect
from linelore.history.line_commit_mapper import LineCommitMap, map_lines_to_commits
from linelore.history.range_blamer import RangeBlamer
from linelore.repositories.version_control.abstract_version_controller import AbstractVersionController
from linelore.repositories.version_control.dtos.commit_analysis_dto import AnalysisStatus, CommitAnalysisDto
from linelore.repositories.version_control.dtos.commit_meta_dto import CommitMetaDto
from linelore.repositories.version_control.dtos.history_result_dto import HistoryResultDto
from linelore.repositories.version_control.dtos.line_range_dto import LineRangeDto
from linelore.repositories.version_control.dtos.resolved_diff_dto import (
    ResolutionStatus,
    ResolutionTraceDto,
)

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR = "Unknown"


class LineHistoryEngine:
    """Runs the line-history pipeline against an explicit repository handle.

    Blame and mapping run first and sequentially; per-commit resolution and
    hunk filtering are independent and run on a bounded thread pool. Errors
    about the request itself (repository, untracked or missing file) abort
    before any commit work; errors resolving one commit only degrade that
    commit's entry.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def analyze(
        self,
        controller: AbstractVersionController,
        relative_path: str,
        line_range: LineRangeDto,
        cancel_event: Optional[threading.Event] = None,
    ) -> HistoryResultDto:
        """Analyse the history of ``line_range`` in ``relative_path``.

        Args:
            controller: Repository handle
            relative_path: File path relative to the repository root
            line_range: 1-based inclusive selection
            cancel_event: Checked before each commit resolution starts

        Returns:
            HistoryResultDto with analyses in first-seen-by-line order

        Raises:
            UntrackedFileError, MissingFileError, InvalidLineRangeError:
                The request cannot be analysed at all
            AnalysisCancelledError: ``cancel_event`` was set
        """
        cancel_event = cancel_event or threading.Event()

        blame = RangeBlamer(controller).blame(relative_path, line_range)
        line_map = map_lines_to_commits(blame.records, line_range)
        logger.info(
            f"Lines {line_range.start}-{line_range.end} of {relative_path} "
            f"are owned by {len(line_map.unique_commits)} commit(s)"
        )

        analyses: List[CommitAnalysisDto] = []
        if line_map.has_history:
            analyses = self._analyze_commits(controller, relative_path, line_map, blame.metadata, cancel_event)

        return HistoryResultDto(
            repo_root=str(controller.root),
            relative_path=relative_path,
            line_range=line_range,
            line_to_commit=tuple(line_map.line_to_commit),
            unique_commits=tuple(line_map.unique_commits),
            analyses=tuple(analyses),
            has_history=line_map.has_history,
        )

    def _analyze_commits(
        self,
        controller: AbstractVersionController,
        relative_path: str,
        line_map: LineCommitMap,
        metadata: Dict[str, CommitMetaDto],
        cancel_event: threading.Event,
    ) -> List[CommitAnalysisDto]:
        resolver = CommitResolver(controller)
        max_workers = min(self.config.max_workers, len(line_map.unique_commits))

        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="linelore") as executor:
            futures: List[Future] = [
                executor.submit(
                    self._analyze_commit,
                    controller,
                    resolver,
                    commit_id,
                    relative_path,
                    line_map,
                    metadata.get(commit_id),
                    cancel_event,
                )
                for commit_id in line_map.unique_commits
            ]

            try:
                # Collected in submission order, which is first-seen order
                return [future.result() for future in futures]
            except (AnalysisCancelledError, CancelledError):
                for future in futures:
                    future.cancel()
                logger.info(f"Analysis of {relative_path} cancelled")
                raise AnalysisCancelledError(f"Analysis of {relative_path} was cancelled")

    def _analyze_commit(
        self,
        controller: AbstractVersionController,
        resolver: CommitResolver,
        commit_id: str,
        relative_path: str,
        line_map: LineCommitMap,
        meta: Optional[CommitMetaDto],
        cancel_event: threading.Event,
    ) -> CommitAnalysisDto:
        if cancel_event.is_set():
            raise AnalysisCancelledError(f"Cancelled before resolving {commit_id[:7]}")

        affected_lines = tuple(line_map.lines_for_commit(commit_id))

        if meta is None:
            try:
                meta = controller.fetch_commit_meta(commit_id)
            except LineHistoryError as e:
                logger.error(f"Failed to fetch metadata for commit {commit_id[:7]}: {e}")
                return CommitAnalysisDto(
                    commit=CommitMetaDto(id=commit_id, author=UNKNOWN_AUTHOR, authored_date="", subject=""),
                    affected_lines=affected_lines,
                    status=AnalysisStatus.FAILED,
                    trace=ResolutionTraceDto(status=ResolutionStatus.FAILED, working_path=relative_path, error=str(e)),
                )

        resolved = resolver.resolve(commit_id, relative_path)
        if resolved.trace.status == ResolutionStatus.FAILED:
            status = AnalysisStatus.FAILED
            hunks = []
        elif resolved.trace.status == ResolutionStatus.NO_DIFF_FOUND:
            status = AnalysisStatus.NO_DIFF_FOUND
            hunks = []
        else:
            hunks = intersect(resolved, line_map.line_range, affected_lines)
            status = AnalysisStatus.RESOLVED if hunks else AnalysisStatus.NO_RELEVANT_HUNKS
            if not hunks:
                logger.warning(
                    f"Commit {commit_id[:7]} changed {resolved.path_used} but no hunk touches "
                    f"lines {', '.join(str(line) for line in affected_lines)}"
                )

        return CommitAnalysisDto(
            commit=meta,
            affected_lines=affected_lines,
            relevant_hunks=tuple(hunks),
            status=status,
            trace=resolved.trace,
        )
