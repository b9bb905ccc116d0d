from .abstract_version_controller import AbstractVersionController
from .command_runner import CommandRunner, SubprocessCommandRunner
from .git_cli import GitCli
from .repository_locator import check_git_available, ensure_tracked, find_repository_root, open_repository

__all__ = [
    "AbstractVersionController",
    "CommandRunner",
    "GitCli",
    "SubprocessCommandRunner",
    "check_git_available",
    "ensure_tracked",
    "find_repository_root",
    "open_repository",
]
