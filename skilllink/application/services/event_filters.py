"""Tab filtering for the events list (pure)."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from skilllink.domain.entities.event import MentorshipEvent
from skilllink.domain.enums import EventTab


def filter_events_for_tab(
    events: Iterable[MentorshipEvent],
    tab: EventTab,
    user_id: str | None,
    today: date,
) -> list[MentorshipEvent]:
    """Return the events shown under a tab, keeping input order.

    - mine: created or joined by user_id (nothing without a user).
    - past: dated before today; undated events never appear.
    - upcoming: dated today or later, plus every undated event.
    """
    selected: list[MentorshipEvent] = []
    for event in events:
        if tab is EventTab.MINE:
            if user_id and event.involves(user_id):
                selected.append(event)
            continue
        event_day = event.event_date()
        if tab is EventTab.PAST:
            if event_day is not None and event_day < today:
                selected.append(event)
        elif event_day is None or event_day >= today:
            selected.append(event)
    return selected
