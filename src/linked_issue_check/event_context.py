"""Helpers for reading the pull request identity from a GitHub Actions event payload."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import PullRequestContextError

# pull_request actions that trigger the check
TRIGGER_ACTIONS = ("opened", "edited", "synchronize", "reopened")


def load_event_payload(event_path: Optional[str]) -> Dict[str, Any]:
    """Load the JSON payload GitHub Actions writes to ``GITHUB_EVENT_PATH``.

    Returns an empty dict when no path is given.
    """
    if not event_path:
        return {}

    path = Path(event_path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise PullRequestContextError(f"Could not read event payload {path}: {e}") from e

    if not isinstance(payload, dict):
        raise PullRequestContextError(f"Event payload {path} is not a JSON object")
    return payload


def get_event_action(payload: Dict[str, Any]) -> Optional[str]:
    return payload.get("action")


def is_trigger_action(action: Optional[str]) -> bool:
    """Return True for actions the check runs on, or when the action is unknown."""
    return action is None or action in TRIGGER_ACTIONS


def resolve_repo_name(repo: Optional[str], payload: Dict[str, Any]) -> str:
    """Repository from the option/env var, else ``repository.full_name`` in the payload."""
    if repo:
        return repo
    full_name = (payload.get("repository") or {}).get("full_name")
    if full_name:
        return full_name
    raise PullRequestContextError("Repository is required. Use --repo or set GITHUB_REPOSITORY.")


def resolve_pr_number(pr_number: Optional[int], payload: Dict[str, Any]) -> int:
    """PR number from the option, else ``pull_request.number`` or ``number`` in the payload."""
    if pr_number is not None:
        return pr_number

    number = (payload.get("pull_request") or {}).get("number", payload.get("number"))
    if number is None:
        raise PullRequestContextError("Pull request number is required. Use --pr or run on a pull_request event.")
    try:
        return int(number)
    except (TypeError, ValueError) as e:
        raise PullRequestContextError(f"Invalid pull request number in event payload: {number!r}") from e
