"""Exception types raised by the line-history engine."""

from typing import List, Optional, Sequence


class LineHistoryError(Exception):
    """Base exception for line-history errors."""
    pass


class GitNotAvailableError(LineHistoryError):
    """Raised when the git executable cannot be run."""

    def __init__(self, git_binary: str):
        self.git_binary = git_binary
        super().__init__(f"git executable '{git_binary}' is not available. Install git and make sure it is on PATH.")


class NotARepositoryError(LineHistoryError):
    """Raised when a path is not inside a git working tree."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Not a git repository: '{path}' is not inside a git working tree.")


class UntrackedFileError(LineHistoryError):
    """Raised when a file exists on disk but is not tracked at HEAD."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"File '{path}' is not tracked by git. Add it with:\n"
            f'  git add "{path}"\n'
            f'  git commit -m "Add {path}"'
        )


class MissingFileError(LineHistoryError):
    """Raised when a file does not exist on disk at all."""

    def __init__(self, path: str, suggestions: Optional[Sequence[str]] = None):
        self.path = path
        self.suggestions: List[str] = list(suggestions or [])
        message = f"File '{path}' does not exist."
        if self.suggestions:
            message += " Did you mean one of these tracked files?\n" + "\n".join(self.suggestions)
        super().__init__(message)


class InvalidLineRangeError(LineHistoryError):
    """Raised when the requested lines fall outside the file."""

    def __init__(self, path: str, start: int, end: int, detail: str = ""):
        self.path = path
        self.start = start
        self.end = end
        message = f"Invalid line range {start}-{end} for '{path}'"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class GitCommandError(LineHistoryError):
    """Raised when a git invocation exits with an error."""

    def __init__(self, command: Sequence[str], returncode: Optional[int], stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr.strip()
        super().__init__(f"git command failed ({returncode}): {' '.join(self.command)}: {self.stderr}")


class GitTimeoutError(GitCommandError):
    """Raised when a git invocation exceeds its timeout."""

    def __init__(self, command: Sequence[str], timeout: float):
        self.timeout = timeout
        super().__init__(command, None, f"timed out after {timeout}s")


class AnalysisCancelledError(LineHistoryError):
    """Raised when the caller cancels an analysis between commit resolutions."""
    pass
