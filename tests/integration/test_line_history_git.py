"""Integration tests running the line-history pipeline against real git repositories."""

from pathlib import Path

import pytest

from linelore import analyze_selection
from linelore.errors import InvalidLineRangeError, MissingFileError, NotARepositoryError, UntrackedFileError
from linelore.history.history_engine import LineHistoryEngine
from linelore.repositories.version_control.dtos.commit_analysis_dto import AnalysisStatus
from linelore.repositories.version_control.dtos.diff_hunk_dto import HunkLineKind
from linelore.repositories.version_control.dtos.line_range_dto import LineRangeDto
from linelore.repositories.version_control.dtos.resolved_diff_dto import ResolutionTier
from linelore.repositories.version_control.git_cli import GitCli
from tests.utils.fixtures import GitRepoBuilder


def _lines(count: int, prefix: str = "line") -> list:
    return [f"{prefix} {i}" for i in range(1, count + 1)]


@pytest.mark.integration
class TestLineHistoryWithGit:
    """End-to-end runs of the pipeline on scratch repositories."""

    def test_two_commits_own_the_selection(self, git_repo: GitRepoBuilder):
        """Test two commits each own their lines and get only their own hunks."""
        git_repo.write("src/app.py", _lines(15))
        first = git_repo.commit("Add app", author="Alice Smith")

        lines = _lines(15)
        lines[10], lines[11] = "changed 11", "changed 12"
        git_repo.write("src/app.py", lines)
        second = git_repo.commit("Tweak app", author="Bob Jones")

        result = analyze_selection(str(git_repo.root / "src" / "app.py"), 10, 12)

        assert result.relative_path == "src/app.py"
        assert result.line_to_commit == (first, second, second)
        assert result.unique_commits == (first, second)
        assert [a.commit.id for a in result.analyses] == [first, second]

        added, tweaked = result.analyses
        assert added.commit.author == "Alice Smith"
        assert added.commit.subject == "Add app"
        assert added.affected_lines == (10,)
        assert added.status == AnalysisStatus.RESOLVED
        assert added.trace.resolved_by == ResolutionTier.DIRECT_PATH

        assert tweaked.commit.author == "Bob Jones"
        assert tweaked.affected_lines == (11, 12)
        assert tweaked.status == AnalysisStatus.RESOLVED
        assert len(tweaked.relevant_hunks) == 1
        added_text = [line.text for line in tweaked.relevant_hunks[0].lines_of_kind(HunkLineKind.ADDED)]
        assert added_text == ["changed 11", "changed 12"]

    def test_repeated_runs_are_identical(self, git_repo: GitRepoBuilder):
        """Test repeated runs on an unchanged repository return equal results."""
        git_repo.write("app.py", _lines(5))
        git_repo.commit("Add app")
        file_path = str(git_repo.root / "app.py")

        assert analyze_selection(file_path, 1, 5) == analyze_selection(file_path, 1, 5)

    def test_renamed_file_uses_historical_path(self, git_repo: GitRepoBuilder):
        """Test a file moved with git mv resolves through its old path."""
        git_repo.write("old/util.py", _lines(5, "util"))
        first = git_repo.commit("Add util")
        (git_repo.root / "new").mkdir()
        git_repo.git("mv", "old/util.py", "new/util.py")
        git_repo.commit("Move util")

        result = analyze_selection(str(git_repo.root / "new" / "util.py"), 1, 2)

        assert result.unique_commits == (first,)
        analysis = result.analyses[0]
        assert analysis.status == AnalysisStatus.RESOLVED
        assert analysis.path_used == "old/util.py"
        assert analysis.trace.working_path == "new/util.py"
        assert analysis.trace.resolved_by == ResolutionTier.BASENAME_SEARCH

    def test_uncommitted_lines_are_unattributed(self, git_repo: GitRepoBuilder):
        """Test working-tree edits show up as unattributed lines."""
        git_repo.write("app.py", _lines(4))
        first = git_repo.commit("Add app")
        lines = _lines(4)
        lines[2] = "work in progress"
        git_repo.write("app.py", lines)

        result = analyze_selection(str(git_repo.root / "app.py"), 2, 3)

        assert result.line_to_commit == (first, None)
        assert result.unique_commits == (first,)
        assert result.analyses[0].affected_lines == (2,)

    def test_untracked_file(self, git_repo: GitRepoBuilder):
        """Test an untracked file is rejected before blame."""
        git_repo.write("tracked.py", _lines(2))
        git_repo.commit("Add tracked")
        git_repo.write("scratch.py", _lines(2))

        with pytest.raises(UntrackedFileError):
            analyze_selection(str(git_repo.root / "scratch.py"), 1, 1)

    def test_missing_file_suggests_tracked_files(self, git_repo: GitRepoBuilder):
        """Test a missing file lists tracked files with the same name."""
        git_repo.write("lib/helpers.py", _lines(2))
        git_repo.commit("Add helpers")

        with pytest.raises(MissingFileError) as exc_info:
            analyze_selection(str(git_repo.root / "src" / "helpers.py"), 1, 1)

        assert exc_info.value.suggestions == ["lib/helpers.py"]

    def test_range_past_end_of_file(self, git_repo: GitRepoBuilder):
        """Test a selection past the last line is an invalid range."""
        git_repo.write("app.py", _lines(5))
        git_repo.commit("Add app")

        with pytest.raises(InvalidLineRangeError):
            analyze_selection(str(git_repo.root / "app.py"), 4, 9)


def test_outside_any_repository(git_check: str, tmp_path: Path, monkeypatch):
    """Test a file outside every working tree is rejected."""
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    target = tmp_path / "loose.py"
    target.write_text("x = 1\n")

    with pytest.raises(NotARepositoryError):
        analyze_selection(str(target), 1, 1)


def test_handle_on_plain_directory(git_check: str, tmp_path: Path, monkeypatch):
    """Test a repository handle rooted outside git reports the missing repository."""
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    (tmp_path / "a.py").write_text("x = 1\n")

    with pytest.raises(NotARepositoryError):
        LineHistoryEngine().analyze(GitCli(tmp_path), "a.py", LineRangeDto(start=1, end=1))
