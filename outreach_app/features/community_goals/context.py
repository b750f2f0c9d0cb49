"""Pure helpers to build the community goals context (no Streamlit)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

import pandas as pd

from outreach_app.analytics.aggregations.community_goals import (
    GroupSummary,
    compute_community_goals_data,
    extract_year,
    get_all_events,
)
from outreach_app.core.config import DISPLAY_ORDER_COMMUNITY_GOALS, MONTH_ABBREVS
from outreach_app.core.models import MeetupGroupModel


@dataclass(slots=True)
class CommunityGoalsContext:
    year: int
    summaries: list[GroupSummary]
    table: pd.DataFrame
    goals_met: int
    total_events: int


def available_years(groups: Sequence[MeetupGroupModel], *, tz=None) -> list[int]:
    """Distinct event years across all groups, newest first."""
    years = {
        year
        for group in groups
        for event in get_all_events(group)
        if (year := extract_year(event.date_time, tz)) is not None
    }
    return sorted(years, reverse=True)


def summaries_to_frame(summaries: Sequence[GroupSummary]) -> pd.DataFrame:
    columns = [*DISPLAY_ORDER_COMMUNITY_GOALS, *MONTH_ABBREVS]
    rows = []
    for summary in summaries:
        row = summary.to_dict()
        record = {col: row[col] for col in DISPLAY_ORDER_COMMUNITY_GOALS}
        record.update(dict(zip(MONTH_ABBREVS, summary.monthly_counts)))
        rows.append(record)
    return pd.DataFrame(rows, columns=columns)


def build_goals_context(
    groups: Sequence[MeetupGroupModel],
    year: int,
    *,
    now: datetime | None = None,
    tz=None,
) -> CommunityGoalsContext:
    summaries = compute_community_goals_data(groups, year, now=now, tz=tz)
    return CommunityGoalsContext(
        year=year,
        summaries=summaries,
        table=summaries_to_frame(summaries),
        goals_met=sum(1 for s in summaries if s.goal_met),
        total_events=sum(s.event_count for s in summaries),
    )
