"""
Linked-Issue Check: CI policy check requiring every pull request to be linked to an issue.
"""

__version__ = "2025.12.22.1"
__author__ = "Linked-Issue Check Team"
__description__ = "CI policy check requiring every pull request to be linked to an issue"

from .detector import LinkedIssueDetector
from .models import ClosingIssue, ClosingIssuesResult, DetectionResult, PullRequestContext, TimelineEvent

__all__ = [
    "LinkedIssueDetector",
    "ClosingIssue",
    "ClosingIssuesResult",
    "DetectionResult",
    "PullRequestContext",
    "TimelineEvent",
]
