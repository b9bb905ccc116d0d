"""Abstract interface over the version-control tool used by the engine."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from linelore.repositories.version_control.dtos.commit_meta_dto import CommitMetaDto


class AbstractVersionController(ABC):
    """Handle on a single repository.

    Every engine call receives one of these explicitly; it carries the
    repository root and the way commands are executed, so nothing in the
    engine depends on the process working directory. Implementations must
    be safe to call from several threads at once.
    """

    @property
    @abstractmethod
    def root(self) -> Path:
        """Root of the working tree."""
        pass

    @abstractmethod
    def is_work_tree(self) -> bool:
        """Check whether the root is inside a working tree of the repository."""
        pass

    @abstractmethod
    def is_tracked(self, relative_path: str) -> bool:
        """Check whether ``relative_path`` is tracked by the index."""
        pass

    @abstractmethod
    def list_tracked_files(self) -> List[str]:
        """List every tracked path, relative to the root."""
        pass

    @abstractmethod
    def blame_porcelain(self, relative_path: str, start_line: int, end_line: int) -> str:
        """Return porcelain blame output for exactly ``start_line..end_line``."""
        pass

    @abstractmethod
    def fetch_commit_meta(self, commit_id: str) -> CommitMetaDto:
        """Fetch author, date and subject of a commit."""
        pass

    @abstractmethod
    def fetch_file_diff(self, commit_id: str, relative_path: str) -> str:
        """Return the commit's unified diff restricted to one path (may be empty)."""
        pass

    @abstractmethod
    def fetch_changed_files(self, commit_id: str) -> List[str]:
        """List the paths a commit modified, in the order git reports them."""
        pass

    @abstractmethod
    def fetch_first_parent(self, commit_id: str) -> Optional[str]:
        """Return the first parent of a commit, or None for a root commit."""
        pass

    @abstractmethod
    def fetch_parent_diff(self, commit_id: str, parent_id: str, pathspec: str) -> str:
        """Return the diff between ``parent_id`` and ``commit_id`` limited to ``pathspec``."""
        pass

    def file_exists(self, relative_path: str) -> bool:
        return (self.root / relative_path).is_file()
