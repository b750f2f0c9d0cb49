"""Event list helpers for a group's detail view."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from outreach_app.core.config import DESCRIPTION_PREVIEW_LENGTH
from outreach_app.core.dates import to_aware_timestamp
from outreach_app.core.models import MeetupEventModel

ELLIPSIS = "…"


@dataclass(frozen=True, slots=True)
class DisplayEvent:
    id: str
    title: str
    description_preview: str
    date_time: str
    event_url: str
    rsvp_count: int


@dataclass(slots=True)
class CategorizedEvents:
    upcoming: list[DisplayEvent] = field(default_factory=list)
    past: list[DisplayEvent] = field(default_factory=list)


def truncate_description(description: str, max_length: int = DESCRIPTION_PREVIEW_LENGTH) -> str:
    """Cut at the last word boundary before ``max_length`` and append an ellipsis."""
    if len(description) <= max_length:
        return description
    truncated = description[:max_length]
    last_space = truncated.rfind(" ")
    if last_space <= 0:
        return truncated + ELLIPSIS
    return truncated[:last_space] + ELLIPSIS


def to_display_event(event: MeetupEventModel) -> DisplayEvent:
    return DisplayEvent(
        id=event.id,
        title=event.title,
        description_preview=truncate_description(event.description),
        date_time=event.date_time,
        event_url=event.event_url,
        rsvp_count=event.rsvp_count,
    )


def categorize_events(events: Iterable[MeetupEventModel], reference: datetime, *, tz=None) -> CategorizedEvents:
    """Split events into upcoming (soonest first) and past (latest first).

    Events strictly after ``reference`` are upcoming; everything else,
    including events with an unparsable start time, is past.
    """
    ref = to_aware_timestamp(reference, tz)
    upcoming = []
    past = []
    for event in events:
        started = to_aware_timestamp(event.date_time, tz)
        if started is not None and started > ref:
            upcoming.append((started, to_display_event(event)))
        else:
            past.append((started, to_display_event(event)))
    upcoming.sort(key=lambda pair: pair[0])
    # Unparsable start times sink to the end of the past list.
    dated_past = sorted((p for p in past if p[0] is not None), key=lambda pair: pair[0], reverse=True)
    undated_past = [p for p in past if p[0] is None]
    return CategorizedEvents(
        upcoming=[d for _, d in upcoming],
        past=[d for _, d in dated_past + undated_past],
    )
