"""
Shared pytest configuration and fixtures for linelore tests.
"""

from tests.utils.fixtures import git_check, git_repo  # noqa: F401
