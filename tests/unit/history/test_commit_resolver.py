"""Tests for the commit diff fallback chain."""

from linelore.history.commit_resolver import CommitResolver
from linelore.repositories.version_control.dtos.resolved_diff_dto import ResolutionStatus, ResolutionTier
from tests.utils.fake_controller import FakeController, sha

COMMIT = sha("a")
PARENT = sha("p")


def _diff(path: str, new_start: int = 10) -> str:
    return (
        f"diff --git a/{path} b/{path}\n"
        f"--- a/{path}\n"
        f"+++ b/{path}\n"
        f"@@ -{new_start},1 +{new_start},2 @@\n"
        " kept\n"
        "+added\n"
    )


class TestCommitResolver:
    """Test each tier of the resolution chain."""

    def test_direct_path(self):
        """Test the caller's path resolves on the first tier."""
        controller = FakeController(file_diffs={(COMMIT, "src/app.py"): _diff("src/app.py")})

        resolved = CommitResolver(controller).resolve(COMMIT, "src/app.py")

        assert resolved.found
        assert resolved.path_used == "src/app.py"
        assert len(resolved.hunks) == 1
        assert resolved.trace.resolved_by == ResolutionTier.DIRECT_PATH
        assert resolved.trace.tiers_attempted == (ResolutionTier.DIRECT_PATH,)
        assert controller.calls_to("fetch_changed_files") == []

    def test_file_moved_from_another_directory(self):
        """Test basename search finds the path a moved file had in the commit."""
        controller = FakeController(
            file_diffs={(COMMIT, "old/place/app.py"): _diff("old/place/app.py")},
            changed_files={COMMIT: ["README.md", "old/place/app.py"]},
        )

        resolved = CommitResolver(controller).resolve(COMMIT, "src/app.py")

        assert resolved.found
        assert resolved.path_used == "old/place/app.py"
        assert resolved.trace.working_path == "src/app.py"
        assert resolved.trace.resolved_by == ResolutionTier.BASENAME_SEARCH
        assert resolved.trace.tiers_attempted == (ResolutionTier.DIRECT_PATH, ResolutionTier.BASENAME_SEARCH)
        assert not resolved.trace.is_ambiguous

    def test_basename_must_match_exactly(self):
        """Test filenames that only share a suffix are not candidates."""
        controller = FakeController(
            file_diffs={(COMMIT, "lib/myapp.py"): _diff("lib/myapp.py")},
            changed_files={COMMIT: ["lib/myapp.py"]},
        )

        resolved = CommitResolver(controller).resolve(COMMIT, "src/app.py")

        assert not resolved.found
        assert ("fetch_file_diff", COMMIT, "lib/myapp.py") not in controller.calls

    def test_ambiguous_candidates_take_first_with_changes_and_are_recorded(self):
        """Test ambiguous candidates are tried in order and kept in the trace."""
        controller = FakeController(
            file_diffs={
                (COMMIT, "b/app.py"): _diff("b/app.py"),
                (COMMIT, "c/app.py"): _diff("c/app.py"),
            },
            changed_files={COMMIT: ["a/app.py", "b/app.py", "c/app.py"]},
        )

        resolved = CommitResolver(controller).resolve(COMMIT, "src/app.py")

        assert resolved.path_used == "b/app.py"
        assert resolved.trace.is_ambiguous
        assert resolved.trace.ambiguous_candidates == ("a/app.py", "b/app.py", "c/app.py")
        assert "candidate a/app.py had no hunks" in resolved.trace.notes
        assert ("fetch_file_diff", COMMIT, "c/app.py") not in controller.calls

    def test_parent_diff_fallback(self):
        """Test the first-parent diff is used when per-path lookups are empty."""
        controller = FakeController(
            parents={COMMIT: PARENT},
            parent_diffs={(COMMIT, "*app.py"): _diff("src/app.py", new_start=3)},
        )

        resolved = CommitResolver(controller).resolve(COMMIT, "src/app.py")

        assert resolved.found
        assert resolved.trace.resolved_by == ResolutionTier.PARENT_DIFF
        assert resolved.path_used == "src/app.py"
        assert resolved.hunks[0].new_start == 3
        assert controller.calls_to("fetch_parent_diff") == [("fetch_parent_diff", COMMIT, PARENT, "*app.py")]

    def test_parent_diff_prefers_exact_filename_over_suffix_match(self):
        """Test the parent diff section with the exact filename wins."""
        controller = FakeController(
            parents={COMMIT: PARENT},
            parent_diffs={(COMMIT, "*app.py"): _diff("lib/webapp.py") + _diff("moved/app.py", new_start=20)},
        )

        resolved = CommitResolver(controller).resolve(COMMIT, "src/app.py")

        assert resolved.path_used == "moved/app.py"
        assert resolved.hunks[0].new_start == 20

    def test_no_diff_found_lists_every_tier(self):
        """Test an exhausted chain reports every tier it tried."""
        controller = FakeController(parents={COMMIT: PARENT})

        resolved = CommitResolver(controller).resolve(COMMIT, "src/app.py")

        assert resolved.trace.status == ResolutionStatus.NO_DIFF_FOUND
        assert resolved.hunks == ()
        assert resolved.path_used is None
        assert resolved.trace.working_path == "src/app.py"
        assert resolved.trace.tiers_attempted == (
            ResolutionTier.DIRECT_PATH,
            ResolutionTier.BASENAME_SEARCH,
            ResolutionTier.PARENT_DIFF,
        )
        assert resolved.trace.error is None

    def test_root_commit_skips_parent_diff(self):
        """Test a root commit records why the parent diff was skipped."""
        controller = FakeController()

        resolved = CommitResolver(controller).resolve(COMMIT, "src/app.py")

        assert resolved.trace.status == ResolutionStatus.NO_DIFF_FOUND
        assert "root commit has no parent to diff against" in resolved.trace.notes
        assert controller.calls_to("fetch_parent_diff") == []

    def test_git_failure_is_reported_not_raised(self):
        """Test git errors become a failed trace."""
        controller = FakeController(
            changed_files={COMMIT: ["x/app.py"]},
            failures=[("fetch_changed_files", COMMIT)],
        )

        resolved = CommitResolver(controller).resolve(COMMIT, "src/app.py")

        assert resolved.trace.status == ResolutionStatus.FAILED
        assert "simulated failure" in resolved.trace.error
        assert resolved.trace.tiers_attempted == (ResolutionTier.DIRECT_PATH, ResolutionTier.BASENAME_SEARCH)
