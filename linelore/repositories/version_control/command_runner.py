"""Process execution strategy used by the git controller."""

import logging
import subprocess
from pathlib import Path
from typing import Protocol, Sequence

from linelore.errors import GitCommandError, GitNotAvailableError, GitTimeoutError, NotARepositoryError

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    """Runs a command in a working directory and returns its stdout."""

    def run(self, args: Sequence[str], cwd: Path, timeout: float) -> str: ...


class SubprocessCommandRunner:
    """CommandRunner backed by ``subprocess.run``.

    Output is read as bytes and decoded without newline translation, so
    carriage returns and other bytes in diffs survive untouched.
    """

    def run(self, args: Sequence[str], cwd: Path, timeout: float) -> str:
        if not cwd.is_dir():
            raise NotARepositoryError(str(cwd))

        logger.debug(f"Running {' '.join(args)} in {cwd}")
        try:
            result = subprocess.run(list(args), cwd=str(cwd), capture_output=True, timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.error(f"Command timed out after {timeout}s: {' '.join(args)}")
            raise GitTimeoutError(args, timeout)
        except FileNotFoundError:
            raise GitNotAvailableError(args[0])

        stdout = result.stdout.decode("utf-8", errors="surrogateescape")
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace")
            raise GitCommandError(args, result.returncode, stderr)
        return stdout
