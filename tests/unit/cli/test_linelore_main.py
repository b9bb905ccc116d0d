"""Tests for the linelore command line entry point."""

import json
from unittest.mock import patch

import pytest

from linelore.errors import GitNotAvailableError, UntrackedFileError
from linelore.main import main
from linelore.repositories.version_control.dtos import HistoryResultDto, LineRangeDto

_ENV_VARS = ("LINELORE_GIT_BINARY", "LINELORE_COMMAND_TIMEOUT", "LINELORE_MAX_WORKERS", "LINELORE_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("linelore.main.dotenv.load_dotenv", lambda: False)


def _empty_result() -> HistoryResultDto:
    return HistoryResultDto(
        repo_root="/repo",
        relative_path="src/app.py",
        line_range=LineRangeDto(start=3, end=4),
        line_to_commit=(None, None),
        unique_commits=(),
        has_history=False,
    )


class TestMain:
    """Test argument handling and exit codes."""

    def test_prints_result_as_json(self, capsys):
        """Test a successful run prints the result as JSON and applies overrides."""
        with patch("linelore.main.check_git_available", return_value="git version 2.43.0"), patch(
            "linelore.main.analyze_selection", return_value=_empty_result()
        ) as mock_analyze:
            exit_code = main(["src/app.py", "3", "4", "--workers", "2"])

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["relative_path"] == "src/app.py"
        assert payload["line_range"] == {"start": 3, "end": 4}
        assert payload["has_history"] is False

        config = mock_analyze.call_args.kwargs["config"]
        assert config.max_workers == 2
        assert mock_analyze.call_args.args == ("src/app.py", 3, 4)

    def test_invalid_override_is_rejected(self, capsys):
        """Test an out-of-range worker count exits with status 2."""
        assert main(["src/app.py", "1", "2", "--workers", "0"]) == 2
        assert "Invalid configuration" in capsys.readouterr().err

    def test_invalid_range_is_rejected(self, capsys):
        """Test a start line after the end line exits with status 2."""
        with patch("linelore.main.check_git_available", return_value="git version 2.43.0"), patch(
            "linelore.open_repository", return_value=(object(), "src/app.py")
        ):
            exit_code = main(["src/app.py", "5", "2"])

        assert exit_code == 2
        assert "Invalid line range" in capsys.readouterr().err

    def test_git_missing(self, capsys):
        """Test a missing git binary exits with status 1."""
        with patch("linelore.main.check_git_available", side_effect=GitNotAvailableError("git")):
            assert main(["src/app.py", "1", "2"]) == 1

        assert "not available" in capsys.readouterr().err

    def test_untracked_file(self, capsys):
        """Test the untracked-file hint reaches stderr."""
        with patch("linelore.main.check_git_available", return_value="git version 2.43.0"), patch(
            "linelore.main.analyze_selection", side_effect=UntrackedFileError("scratch.py")
        ):
            assert main(["scratch.py", "1", "1"]) == 1

        assert 'git add "scratch.py"' in capsys.readouterr().err
