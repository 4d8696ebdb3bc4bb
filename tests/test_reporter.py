import io
from unittest.mock import Mock

import pytest
from github.GithubException import GithubException

from linked_issue_check.github_client import GitHubClient
from linked_issue_check.models import DetectionResult
from linked_issue_check.reporter import FAILURE_COMMENT, FAILURE_MESSAGE, OutcomeReporter, escape_data, post_failure_comment


def test_escape_data():
    assert escape_data("100%\r\nnext") == "100%25%0D%0Anext"


def test_failure_message_text():
    lines = FAILURE_MESSAGE.split("\n")
    assert lines[0] == "❌ This pull request must be linked to an issue."
    assert lines[3] == '1. Adding "Fixes #<issue-number>" or "Closes #<issue-number>" to the PR description'
    assert lines[-1] == 'Example: "Fixes #123" or "Closes #456"'
    # No indentation leaks into the message
    assert all(line == line.lstrip() for line in lines)


def test_failure_comment_sections():
    assert FAILURE_COMMENT.startswith("## ❌ Missing Linked Issue")
    assert "1. **Add keywords to PR description:**" in FAILURE_COMMENT
    assert "2. **Reference issue in PR title or description:**" in FAILURE_COMMENT
    assert "3. **Use GitHub's UI:**" in FAILURE_COMMENT
    assert "💡 **Tip:**" in FAILURE_COMMENT


def test_report_success_emits_notice():
    stream = io.StringIO()
    result = DetectionResult(linked=True, issue_numbers=["5", "7"])

    assert OutcomeReporter(stream).report(result) is True
    assert stream.getvalue() == "::notice::✅ Pull request is properly linked to issue(s): 5, 7\n"


def test_report_success_from_timeline_lists_no_numbers():
    stream = io.StringIO()

    assert OutcomeReporter(stream).report(DetectionResult(linked=True)) is True
    assert stream.getvalue() == "::notice::✅ Pull request is properly linked to issue(s): \n"


def test_report_failure_emits_escaped_error():
    stream = io.StringIO()

    assert OutcomeReporter(stream).report(DetectionResult()) is False

    output = stream.getvalue()
    assert output.startswith("::error::❌ This pull request must be linked to an issue.%0A%0A")
    assert output.count("\n") == 1


def test_post_failure_comment(make_pr):
    client = Mock(spec=GitHubClient)
    post_failure_comment(client, make_pr())
    client.add_comment_to_pr.assert_called_once_with("test-owner/test-repo", 456, FAILURE_COMMENT)


def test_post_failure_comment_propagates_errors(make_pr):
    client = Mock(spec=GitHubClient)
    client.add_comment_to_pr.side_effect = GithubException(403, {"message": "Forbidden"}, None)
    with pytest.raises(GithubException):
        post_failure_comment(client, make_pr())
