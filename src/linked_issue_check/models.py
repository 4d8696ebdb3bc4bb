"""
Data types shared by the detector, the GitHub client and the reporter.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set


@dataclass
class PullRequestContext:
    """Identifying data for the pull request under test."""

    owner: str
    repo: str
    number: int
    title: str = ""
    body: str = ""

    @property
    def repo_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_repo_name(cls, repo_name: str, number: int, title: Optional[str] = None, body: Optional[str] = None) -> "PullRequestContext":
        """Build a context from an ``owner/repo`` string.

        ``None`` title/body (GitHub returns ``null`` for an empty description) become "".
        """
        owner, _, repo = repo_name.partition("/")
        if not owner or not repo or "/" in repo:
            raise ValueError(f"Repository must be in 'owner/repo' format, got '{repo_name}'")
        return cls(owner=owner, repo=repo, number=int(number), title=title or "", body=body or "")


@dataclass
class ClosingIssue:
    """An issue GitHub will close automatically when the pull request merges."""

    number: int
    title: str = ""


@dataclass
class ClosingIssuesResult:
    """Return type for the closing-issues query.

    Either ``success`` with a (possibly empty) list of issues, or a failure
    carrying the error message. An empty successful result is not a failure.
    """

    success: bool = True
    issues: List[ClosingIssue] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def ok(cls, issues: List[ClosingIssue]) -> "ClosingIssuesResult":
        return cls(success=True, issues=list(issues))

    @classmethod
    def failed(cls, error: str) -> "ClosingIssuesResult":
        return cls(success=False, issues=[], error=error)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a GitHub timestamp (``2024-01-01T00:00:00Z``) into an aware datetime.

    Returns None for missing or unparseable values.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if not isinstance(value, str) or not value:
        return None
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


@dataclass
class TimelineEvent:
    """A single entry from the pull request's timeline.

    ``source_issue_id`` is GitHub's internal issue id (``source.issue.id``),
    not the human-facing issue number.
    """

    event: str
    created_at: Optional[datetime] = None
    source_issue_id: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "TimelineEvent":
        """Build an event from the REST timeline JSON representation."""
        issue_id = None
        source = raw.get("source")
        if isinstance(source, dict) and isinstance(source.get("issue"), dict):
            issue_id = source["issue"].get("id")
        return cls(
            event=str(raw.get("event") or ""),
            created_at=parse_timestamp(raw.get("created_at")),
            source_issue_id=str(issue_id) if issue_id is not None else None,
        )


@dataclass
class DetectionResult:
    """Outcome of the linked-issue detection.

    ``issue_numbers`` keeps the order of first discovery (title/body matches,
    then GraphQL results). The timeline fallback only sets ``linked``.
    """

    linked: bool = False
    issue_numbers: List[str] = field(default_factory=list)
    sources: List[str] = field(default_factory=list)
    fallback_used: bool = False

    @property
    def issue_set(self) -> Set[str]:
        return set(self.issue_numbers)

    def add_issues(self, numbers: List[str], source: str) -> None:
        """Union issue numbers into the result and record the contributing source."""
        for number in numbers:
            if number not in self.issue_numbers:
                self.issue_numbers.append(number)
        if numbers:
            self.linked = True
            self.mark_source(source)

    def mark_source(self, source: str) -> None:
        if source not in self.sources:
            self.sources.append(source)
