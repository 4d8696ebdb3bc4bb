"""
Check outcome reporting through GitHub Actions workflow commands and PR comments.
"""

import sys
from typing import IO, Optional

from .github_client import GitHubClient
from .logger_config import get_logger
from .models import DetectionResult, PullRequestContext

logger = get_logger(__name__)

FAILURE_MESSAGE = (
    "❌ This pull request must be linked to an issue.\n"
    "\n"
    "Please link this PR to an issue by:\n"
    "1. Adding \"Fixes #<issue-number>\" or \"Closes #<issue-number>\" to the PR description\n"
    "2. Using GitHub's UI to link the PR to an existing issue\n"
    "3. Referencing the issue number with #<issue-number> in the PR title or description\n"
    "\n"
    'Example: "Fixes #123" or "Closes #456"'
)

FAILURE_COMMENT = """## ❌ Missing Linked Issue

This pull request needs to be linked to at least one issue before it can be merged.

### How to link an issue:

1. **Add keywords to PR description:**
   - `Fixes #123`
   - `Closes #456`
   - `Resolves #789`
   - `Fixes #123, #456, and #789` (multiple issues)

2. **Reference issue in PR title or description:**
   - `#123`
   - `Issue #456`
   - `Addresses #123 and #456` (multiple issues)

3. **Use GitHub's UI:**
   - Go to the "Development" section in the right sidebar
   - Click "Link an issue"
   - Select the relevant issue(s)

💡 **Tip:** You can link multiple issues using any combination of the above methods!

Once you've linked at least one issue, this check will automatically pass! 🚀"""


def escape_data(message: str) -> str:
    """Escape a message for use as workflow command data."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def success_message(result: DetectionResult) -> str:
    return f"✅ Pull request is properly linked to issue(s): {', '.join(result.issue_numbers)}"


class OutcomeReporter:
    """Writes the check result as ``::notice::``/``::error::`` workflow commands.

    The process exit code is left to the caller; ``report`` only says
    whether the check passed.
    """

    def __init__(self, stream: Optional[IO[str]] = None):
        self.stream = stream or sys.stdout

    def _command(self, name: str, message: str) -> None:
        self.stream.write(f"::{name}::{escape_data(message)}\n")
        self.stream.flush()

    def notice(self, message: str) -> None:
        self._command("notice", message)

    def error(self, message: str) -> None:
        self._command("error", message)

    def report(self, result: DetectionResult) -> bool:
        if result.linked:
            message = success_message(result)
            logger.info(f"✅ PR is linked to issue(s): {', '.join(result.issue_numbers)}")
            self.notice(message)
            return True

        logger.error("PR is not linked to any issue")
        self.error(FAILURE_MESSAGE)
        return False


def post_failure_comment(github_client: GitHubClient, pr: PullRequestContext) -> None:
    """Post the explanatory comment on a PR that failed the check.

    Errors from the API propagate to the caller.
    """
    github_client.add_comment_to_pr(pr.repo_name, pr.number, FAILURE_COMMENT)
