"""Per-group monthly event aggregation for the community goals view."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

import pytz

from outreach_app.core.config import MEETUP_PAGE_URL_PATTERN
from outreach_app.core.dates import to_aware_timestamp, to_local_calendar_date
from outreach_app.core.models import MeetupEventModel, MeetupGroupModel
from outreach_app.core.settings import get_settings

MONTHS_PER_YEAR = 12

_MEETUP_PAGE_RE = re.compile(MEETUP_PAGE_URL_PATTERN)


@dataclass(slots=True)
class GroupSummary:
    id: str
    name: str
    city: str
    country: str
    meetup_page_url: str | None
    event_count: int
    past_event_count: int
    total_rsvps: int
    member_count: int
    founded_date: str
    goal_met: bool
    monthly_counts: list[int] = field(default_factory=lambda: [0] * MONTHS_PER_YEAR)
    monthly_event_titles: list[list[str]] = field(default_factory=lambda: [[] for _ in range(MONTHS_PER_YEAR)])

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "city": self.city,
            "country": self.country,
            "meetupPageUrl": self.meetup_page_url,
            "eventCount": self.event_count,
            "pastEventCount": self.past_event_count,
            "totalRsvps": self.total_rsvps,
            "memberCount": self.member_count,
            "foundedDate": self.founded_date,
            "goalMet": self.goal_met,
            "monthlyCounts": list(self.monthly_counts),
            "monthlyEventTitles": [list(t) for t in self.monthly_event_titles],
        }


def derive_meetup_page_url(event_url: str | None) -> str | None:
    """``https://www.meetup.com/<slug>/events/<id>/`` -> ``https://www.meetup.com/<slug>/``."""
    if not event_url:
        return None
    match = _MEETUP_PAGE_RE.match(event_url)
    return match.group(1) if match else None


def extract_year(date_time: str, tz=None) -> int | None:
    local = to_local_calendar_date(date_time, tz)
    return local.year if local else None


def extract_month(date_time: str, tz=None) -> int | None:
    """Zero-based month (0 = January), or None when unparsable."""
    local = to_local_calendar_date(date_time, tz)
    return local.month - 1 if local else None


def get_all_events(group: MeetupGroupModel) -> list[MeetupEventModel]:
    return [*group.past_events, *group.upcoming_events]


def compute_monthly_event_counts(
    events: Iterable[MeetupEventModel], year: int, *, tz=None
) -> tuple[list[int], list[list[str]]]:
    counts = [0] * MONTHS_PER_YEAR
    titles: list[list[str]] = [[] for _ in range(MONTHS_PER_YEAR)]
    for event in events:
        local = to_local_calendar_date(event.date_time, tz)
        if local is None or local.year != year:
            continue
        counts[local.month - 1] += 1
        titles[local.month - 1].append(event.title)
    return counts, titles


def _summarize_group(group: MeetupGroupModel, year: int, now, threshold: int, tz) -> GroupSummary:
    events = get_all_events(group)
    monthly_counts, monthly_titles = compute_monthly_event_counts(events, year, tz=tz)

    in_year = [e for e in events if extract_year(e.date_time, tz) == year]
    past_count = 0
    for event in in_year:
        started = to_aware_timestamp(event.date_time, tz)
        if started is not None and started < now:
            past_count += 1

    first_with_url = next((e for e in events if e.event_url), None)
    return GroupSummary(
        id=group.id,
        name=group.name,
        city=group.city,
        country=group.country,
        meetup_page_url=derive_meetup_page_url(first_with_url.event_url) if first_with_url else None,
        event_count=sum(monthly_counts),
        past_event_count=past_count,
        total_rsvps=sum(e.rsvp_count for e in in_year),
        member_count=group.member_count,
        founded_date=group.founded_date,
        goal_met=past_count >= threshold,
        monthly_counts=monthly_counts,
        monthly_event_titles=monthly_titles,
    )


def compute_community_goals_data(
    groups: Sequence[MeetupGroupModel],
    year: int,
    *,
    now: datetime | None = None,
    threshold: int | None = None,
    tz=None,
) -> list[GroupSummary]:
    """Summarize each group's events for ``year``, one summary per input group.

    ``now`` decides which events count as past (strictly earlier); it
    defaults to the current time. ``threshold`` defaults to the configured
    goal of past events per year.
    """
    reference = to_aware_timestamp(now if now is not None else datetime.now(pytz.UTC), tz)
    goal = get_settings().goal_event_threshold if threshold is None else threshold
    return [_summarize_group(group, year, reference, goal, tz) for group in groups]
