"""
Pytest configuration and fixtures for Linked-Issue Check tests.
"""

import sys
from pathlib import Path

# Ensure 'src' directory is on sys.path so 'linked_issue_check' package is importable everywhere
_repo_root = Path(__file__).resolve().parents[1]
_src_path = _repo_root / "src"
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

from unittest.mock import Mock

import pytest

from linked_issue_check.config import settings
from linked_issue_check.github_client import GitHubClient
from linked_issue_check.models import ClosingIssuesResult, PullRequestContext


# Test stabilization: eliminate GitHub Actions environment influence
@pytest.fixture(autouse=True)
def _clear_github_env(monkeypatch):
    for key in ("GITHUB_TOKEN", "GITHUB_REPOSITORY", "GITHUB_EVENT_PATH", "LOG_FILE"):
        monkeypatch.delenv(key, raising=False)
    # Settings are loaded at import time; drop anything picked up from the real environment
    monkeypatch.setattr(settings, "github_token", None)
    monkeypatch.setattr(settings, "github_repository", None)
    monkeypatch.setattr(settings, "github_event_path", None)
    monkeypatch.setattr(settings, "log_file", None)


@pytest.fixture(autouse=True)
def _reset_github_client_singleton():
    """Reset GitHubClient singleton between tests to ensure isolation."""
    GitHubClient.reset_singleton()
    yield
    GitHubClient.reset_singleton()


@pytest.fixture
def test_repo_name():
    """Test repository name."""
    return "test-owner/test-repo"


@pytest.fixture
def make_pr(test_repo_name):
    """Factory for PullRequestContext objects."""

    def _make(title="", body="", number=456):
        return PullRequestContext.from_repo_name(test_repo_name, number, title=title, body=body)

    return _make


@pytest.fixture
def mock_github_client():
    """Mock GitHub client whose GraphQL query succeeds with no closing issues."""
    client = Mock(spec=GitHubClient)
    client.token = "test_github_token"
    client.get_pr_closing_issues.return_value = ClosingIssuesResult.ok([])
    client.get_timeline_events.return_value = []
    return client


@pytest.fixture
def raw_timeline_event():
    """Factory for raw REST timeline events as returned by the GitHub API."""

    def _make(event, created_at, issue_id=None):
        raw = {"event": event, "created_at": created_at}
        if issue_id is not None:
            raw["source"] = {"issue": {"id": issue_id}}
        return raw

    return _make
