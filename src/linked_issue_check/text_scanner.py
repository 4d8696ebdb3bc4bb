import re
from typing import List

from .logger_config import get_logger

logger = get_logger(__name__)

# GitHub's closing keywords: close, closes, closed, fix, fixes, fixed, resolve, resolves, resolved
_KEYWORDS = r"(?:close[sd]?|fix(?:e[sd])?|resolve[sd]?)"

# The whitespace set of JavaScript's \s
_WS = r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"

# Applied independently to the whole text; every captured number counts.
# re.ASCII: only 0-9 are digits and case folding stays within ASCII.
ISSUE_PATTERNS = [
    # Fixes #123
    re.compile(rf"{_KEYWORDS}{_WS}+#(\d+)", re.IGNORECASE | re.ASCII),
    # Fixes https://github.com/owner/repo/issues/123
    re.compile(rf"{_KEYWORDS}{_WS}+https?://github\.com/[^/]+/[^/]+/issues/(\d+)", re.IGNORECASE | re.ASCII),
    # #123 anywhere. This also matches unrelated mentions without a keyword.
    re.compile(r"#(\d+)", re.ASCII),
    # Issue 123, issues #123
    re.compile(rf"(?:issue|issues){_WS}+#?(\d+)", re.IGNORECASE | re.ASCII),
]


def build_text_blob(title: str, body: str) -> str:
    """Join title and body the way they are scanned."""
    return f"{title or ''} {body or ''}"


def extract_issue_references(title: str, body: str) -> List[str]:
    """Extract referenced issue numbers from a PR title and body.

    Numbers are returned as strings, deduplicated, in order of first match
    (pattern by pattern). No check is made that the issues exist.

    Args:
        title: PR title (may be empty)
        body: PR description (may be empty or None)

    Returns:
        List of issue numbers found in the text
    """
    text = build_text_blob(title, body)

    found: List[str] = []
    for pattern in ISSUE_PATTERNS:
        for match in pattern.finditer(text):
            number = match.group(1)
            if number and number not in found:
                found.append(number)

    if found:
        logger.info(f"Found {len(found)} issue reference(s) in PR title/body: {', '.join(found)}")
    else:
        logger.debug("No issue references found in PR title/body")

    return found
