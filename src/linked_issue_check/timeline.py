"""
Current link state reconstructed from ``connected``/``disconnected`` timeline events.
"""

from datetime import datetime, timezone
from typing import Dict, Iterable, List

from .models import TimelineEvent

CONNECTION_EVENTS = ("connected", "disconnected")

# Events without a timestamp sort before everything else.
_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def filter_connection_events(events: Iterable[TimelineEvent]) -> List[TimelineEvent]:
    """Keep connection events, sorted oldest first.

    ``sorted`` is stable, so events sharing a timestamp keep their API order.
    """
    connection_events = [e for e in events if e.event in CONNECTION_EVENTS]
    return sorted(connection_events, key=lambda e: e.created_at or _EARLIEST)


def fold_connection_state(events: Iterable[TimelineEvent]) -> Dict[str, bool]:
    """Map each source issue id to whether it is currently connected.

    The last connection event per issue id wins. Events without a source
    issue id are ignored.
    """
    state: Dict[str, bool] = {}
    for event in filter_connection_events(events):
        if event.source_issue_id is None:
            continue
        state[event.source_issue_id] = event.event == "connected"
    return state


def has_current_connections(events: Iterable[TimelineEvent]) -> bool:
    """Return True if at least one issue is connected after replaying the events."""
    return any(fold_connection_state(events).values())
