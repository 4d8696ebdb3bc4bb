"""
Linked-issue detection: text references, GraphQL closing issues, timeline fallback.
"""

from typing import Optional

from .github_client import GitHubClient
from .logger_config import get_logger, log_calls
from .models import ClosingIssuesResult, DetectionResult, PullRequestContext
from .text_scanner import extract_issue_references
from .timeline import has_current_connections

logger = get_logger(__name__)

SOURCE_TEXT = "text"
SOURCE_GRAPHQL = "graphql"
SOURCE_TIMELINE = "timeline"


def needs_timeline_fallback(result: ClosingIssuesResult) -> bool:
    """Return True when the closing-issues query itself failed.

    An empty but successful result is an answer, not a reason to fall back.
    """
    return not result.success


class LinkedIssueDetector:
    """Decides whether a pull request is linked to at least one issue.

    Title/body references and GraphQL closing issues are always both
    collected and unioned. The timeline is read only when the GraphQL
    query fails, and then only sets the ``linked`` flag.
    """

    def __init__(self, github_client: GitHubClient, closing_issues_limit: Optional[int] = None):
        self.github = github_client
        self.closing_issues_limit = closing_issues_limit

    @log_calls
    def detect(self, pr: PullRequestContext) -> DetectionResult:
        result = DetectionResult()

        result.add_issues(extract_issue_references(pr.title, pr.body), SOURCE_TEXT)

        closing = self.github.get_pr_closing_issues(pr.repo_name, pr.number, limit=self.closing_issues_limit)
        if needs_timeline_fallback(closing):
            result.fallback_used = True
            self._apply_timeline_fallback(pr, result)
        else:
            result.add_issues([str(issue.number) for issue in closing.issues], SOURCE_GRAPHQL)

        if result.linked:
            logger.info(f"PR #{pr.number} is linked (sources: {', '.join(result.sources)})")
        else:
            logger.info(f"PR #{pr.number} has no linked issue")
        return result

    def _apply_timeline_fallback(self, pr: PullRequestContext, result: DetectionResult) -> None:
        try:
            events = self.github.get_timeline_events(pr.repo_name, pr.number)
        except Exception as e:
            # Terminal fallback: keep whatever the text scan found
            logger.warning(f"Could not fetch timeline events: {e}")
            return

        if has_current_connections(events):
            result.linked = True
            result.mark_source(SOURCE_TIMELINE)
            logger.info("Found currently linked issues via timeline events fallback")
