"""Locate the repository for a file and validate it before analysis."""

import logging
import os
from pathlib import Path, PurePosixPath
from typing import List, Optional, Tuple

from linelore.config import EngineConfig
from linelore.errors import (
    GitCommandError,
    GitNotAvailableError,
    GitTimeoutError,
    MissingFileError,
    NotARepositoryError,
    UntrackedFileError,
)
from linelore.repositories.version_control.abstract_version_controller import AbstractVersionController
from linelore.repositories.version_control.command_runner import CommandRunner, SubprocessCommandRunner
from linelore.repositories.version_control.git_cli import GitCli

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3


def check_git_available(config: Optional[EngineConfig] = None, runner: Optional[CommandRunner] = None) -> str:
    """Return the git version string, raising GitNotAvailableError when git cannot run."""
    config = config or EngineConfig()
    runner = runner or SubprocessCommandRunner()
    try:
        return runner.run([config.git_binary, "--version"], Path.cwd(), config.command_timeout_seconds).strip()
    except GitCommandError as e:
        raise GitNotAvailableError(config.git_binary) from e


def find_repository_root(
    file_path: str, config: Optional[EngineConfig] = None, runner: Optional[CommandRunner] = None
) -> Path:
    """Find the working tree root containing ``file_path``.

    Walks up from the file's directory to the first existing directory and
    asks git for its top level.
    """
    config = config or EngineConfig()
    runner = runner or SubprocessCommandRunner()

    start_dir = Path(file_path).resolve().parent
    while not start_dir.is_dir() and start_dir != start_dir.parent:
        start_dir = start_dir.parent

    try:
        output = runner.run(
            [config.git_binary, "rev-parse", "--show-toplevel"], start_dir, config.command_timeout_seconds
        )
    except GitTimeoutError:
        raise
    except GitCommandError as e:
        logger.debug(f"rev-parse failed in {start_dir}: {e.stderr}")
        raise NotARepositoryError(file_path) from e

    root = output.strip()
    if not root:
        raise NotARepositoryError(file_path)
    return Path(root).resolve()


def to_relative_path(file_path: str, repo_root: Path) -> str:
    """Express ``file_path`` relative to ``repo_root`` with POSIX separators."""
    absolute = Path(file_path).resolve()
    try:
        relative = absolute.relative_to(repo_root.resolve())
    except ValueError:
        raise NotARepositoryError(file_path)
    return PurePosixPath(*relative.parts).as_posix()


def similar_tracked_files(controller: AbstractVersionController, relative_path: str) -> List[str]:
    """Tracked paths sharing ``relative_path``'s filename, for remediation hints."""
    filename = PurePosixPath(relative_path).name
    try:
        tracked = controller.list_tracked_files()
    except GitCommandError as e:
        logger.debug(f"Could not list tracked files: {e}")
        return []
    return [path for path in tracked if PurePosixPath(path).name == filename][:MAX_SUGGESTIONS]


def ensure_tracked(controller: AbstractVersionController, relative_path: str) -> None:
    """Raise UntrackedFileError or MissingFileError unless the file is tracked.

    A handle whose root is not a git working tree raises NotARepositoryError
    before any file check.
    """
    if not controller.is_work_tree():
        raise NotARepositoryError(str(controller.root))

    if controller.is_tracked(relative_path):
        return

    if controller.file_exists(relative_path):
        raise UntrackedFileError(relative_path)

    raise MissingFileError(relative_path, similar_tracked_files(controller, relative_path))


def open_repository(
    file_path: str, config: Optional[EngineConfig] = None, runner: Optional[CommandRunner] = None
) -> Tuple[GitCli, str]:
    """Build a controller for the repository containing ``file_path``.

    Args:
        file_path: Absolute (or cwd-relative) path of the selected file
        config: Engine configuration
        runner: Process execution strategy

    Returns:
        Tuple of (controller, path relative to the repository root)
    """
    config = config or EngineConfig()
    runner = runner or SubprocessCommandRunner()

    root = find_repository_root(os.path.abspath(file_path), config, runner)
    relative_path = to_relative_path(os.path.abspath(file_path), root)
    logger.info(f"Using repository {root} for {relative_path}")
    return GitCli(root, config=config, runner=runner), relative_path
