"""Local git implementation of the version control interface."""

import logging
from pathlib import Path
from typing import List, Optional

from linelore.config import EngineConfig
from linelore.errors import GitCommandError, GitTimeoutError, LineHistoryError, NotARepositoryError
from linelore.repositories.version_control.abstract_version_controller import AbstractVersionController
from linelore.repositories.version_control.command_runner import CommandRunner, SubprocessCommandRunner
from linelore.repositories.version_control.dtos.commit_meta_dto import CommitMetaDto

logger = logging.getLogger(__name__)

# NUL-separated so subjects containing '|' survive
_META_FORMAT = "%H%x00%an%x00%ae%x00%aI%x00%s"
_NOT_A_REPOSITORY = "not a git repository"


class GitCli(AbstractVersionController):
    """Version controller that shells out to the ``git`` executable.

    Holds no mutable state after construction; concurrent calls only share
    the runner, which starts an independent process per call.
    """

    def __init__(
        self,
        root: Path,
        config: Optional[EngineConfig] = None,
        runner: Optional[CommandRunner] = None,
    ):
        """Initialize the controller.

        Args:
            root: Root of the git working tree
            config: Engine configuration (git binary, timeout)
            runner: Process execution strategy; defaults to subprocess
        """
        self._root = Path(root)
        self.config = config or EngineConfig()
        self.runner: CommandRunner = runner or SubprocessCommandRunner()

    @property
    def root(self) -> Path:
        return self._root

    def _git(self, *args: str) -> str:
        command = [self.config.git_binary, *args]
        return self.runner.run(command, self._root, self.config.command_timeout_seconds)

    def version(self) -> str:
        return self._git("--version").strip()

    def is_work_tree(self) -> bool:
        try:
            return self._git("rev-parse", "--is-inside-work-tree").strip() == "true"
        except GitTimeoutError:
            raise
        except GitCommandError as e:
            logger.debug(f"{self._root} is not a working tree: {e.stderr}")
            return False

    def is_tracked(self, relative_path: str) -> bool:
        try:
            self._git("ls-files", "--error-unmatch", "--", relative_path)
            return True
        except GitTimeoutError:
            raise
        except GitCommandError as e:
            if _NOT_A_REPOSITORY in e.stderr:
                raise NotARepositoryError(str(self._root)) from e
            logger.debug(f"{relative_path} is not tracked: {e.stderr}")
            return False

    def list_tracked_files(self) -> List[str]:
        return [line for line in self._git("ls-files").split("\n") if line.strip()]

    def blame_porcelain(self, relative_path: str, start_line: int, end_line: int) -> str:
        return self._git("blame", "--porcelain", "-L", f"{start_line},{end_line}", "--", relative_path)

    def fetch_commit_meta(self, commit_id: str) -> CommitMetaDto:
        output = self._git("show", "--no-patch", "--no-color", f"--format={_META_FORMAT}", commit_id)
        parts = output.rstrip("\n").split("\x00")
        if len(parts) < 5:
            raise LineHistoryError(f"Unexpected commit metadata for {commit_id}: {output!r}")

        return CommitMetaDto(
            id=parts[0],
            author=parts[1],
            author_email=parts[2] or None,
            authored_date=parts[3],
            subject="\x00".join(parts[4:]),
        )

    def fetch_file_diff(self, commit_id: str, relative_path: str) -> str:
        return self._git("show", "--no-color", "--no-ext-diff", "--format=", commit_id, "--", relative_path)

    def fetch_changed_files(self, commit_id: str) -> List[str]:
        output = self._git("show", "--no-color", "--name-only", "--format=", commit_id)
        return [line for line in output.split("\n") if line.strip()]

    def fetch_first_parent(self, commit_id: str) -> Optional[str]:
        output = self._git("rev-list", "--parents", "-n", "1", commit_id).split()
        return output[1] if len(output) > 1 else None

    def fetch_parent_diff(self, commit_id: str, parent_id: str, pathspec: str) -> str:
        return self._git("diff", "--no-color", "--no-ext-diff", parent_id, commit_id, "--", pathspec)
