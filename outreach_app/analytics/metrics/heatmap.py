"""Calendar-aligned activity heatmap (7 weekday rows x N week columns)."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta

import pandas as pd

from outreach_app.core.config import MONTH_ABBREVS, STATUS_PRIORITY
from outreach_app.core.dates import (
    days_between,
    iso_date,
    to_local_calendar_date,
    to_utc_aligned_week,
)
from outreach_app.core.fields import get_ticket_date
from outreach_app.core.models import TicketModel
from outreach_app.core.status import StatusBucket, get_ticket_heatmap_status

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


@dataclass(frozen=True, slots=True)
class DateRange:
    start: date
    end: date

    @property
    def year(self) -> int:
        """Calendar year the range was built for (the Saturday end may spill into the next one)."""
        return (self.end - timedelta(days=6)).year

    def to_dict(self) -> dict:
        return {"start": iso_date(self.start), "end": iso_date(self.end)}


@dataclass(frozen=True, slots=True)
class HeatmapEntry:
    title: str
    status: StatusBucket

    def to_dict(self) -> dict:
        return {"title": self.title, "status": self.status.value}


@dataclass(slots=True)
class HeatmapCell:
    date: str
    tickets: list[HeatmapEntry] = field(default_factory=list)
    dominant_status: StatusBucket | None = None

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "tickets": [t.to_dict() for t in self.tickets],
            "dominantStatus": self.dominant_status.value if self.dominant_status else None,
        }


@dataclass(frozen=True, slots=True)
class MonthLabel:
    label: str
    week_index: int

    def to_dict(self) -> dict:
        return {"label": self.label, "weekIndex": self.week_index}


@dataclass(slots=True)
class HeatmapGrid:
    cells: list[list[HeatmapCell | None]]
    week_count: int
    month_labels: list[MonthLabel] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "cells": [[c.to_dict() if c else None for c in row] for row in self.cells],
            "weekCount": self.week_count,
            "monthLabels": [m.to_dict() for m in self.month_labels],
        }


def get_dominant_status(statuses: Sequence[StatusBucket]) -> StatusBucket | None:
    """Highest-priority status present: resolved > accepted > assigned."""
    if not statuses:
        return None
    return max(statuses, key=lambda s: STATUS_PRIORITY[StatusBucket(s).value])


def _earliest_local_date(tickets: Iterable[TicketModel], tz) -> date | None:
    earliest: date | None = None
    for ticket in tickets:
        local = to_local_calendar_date(get_ticket_date(ticket), tz)
        if local is None:
            continue
        if earliest is None or local < earliest:
            earliest = local
    return earliest


def compute_date_range(tickets: Iterable[TicketModel], *, tz=None) -> DateRange | None:
    """Week-aligned full calendar year of the earliest ticket date.

    The range always covers January 1 through December 31 of that year,
    widened back to a Sunday and forward to a Saturday. Returns None when no
    ticket carries a parsable date.
    """
    earliest = _earliest_local_date(tickets, tz)
    if earliest is None:
        return None
    jan1 = date(earliest.year, 1, 1)
    dec31 = date(earliest.year, 12, 31)
    return DateRange(
        start=to_utc_aligned_week(jan1, align="start"),
        end=to_utc_aligned_week(dec31, align="end"),
    )


def _index_tickets_by_date(tickets: Iterable[TicketModel], tz) -> dict[str, list[HeatmapEntry]]:
    index: dict[str, list[HeatmapEntry]] = {}
    excluded = 0
    for ticket in tickets:
        local = to_local_calendar_date(get_ticket_date(ticket), tz)
        status = get_ticket_heatmap_status(ticket)
        if local is None or status is None:
            excluded += 1
            continue
        index.setdefault(iso_date(local), []).append(HeatmapEntry(title=ticket.title, status=status))
    if excluded:
        logger.debug("Heatmap excluded %s ticket(s) without a date or status", excluded)
    return index


def _month_labels(cells: list[list[HeatmapCell | None]], week_count: int, year: int) -> list[MonthLabel]:
    labels: list[MonthLabel] = []
    last_month = None
    for week in range(week_count):
        cell = cells[0][week]
        if cell is None:
            continue
        # The leading Sunday may fall in the previous December; that column
        # still opens January.
        month = 1 if int(cell.date[:4]) < year else int(cell.date[5:7])
        if month != last_month:
            labels.append(MonthLabel(label=MONTH_ABBREVS[month - 1], week_index=week))
            last_month = month
    return labels


def build_heatmap_grid(tickets: Iterable[TicketModel], *, tz=None) -> HeatmapGrid | None:
    """Lay tickets out on a Sunday-first weekday x week grid.

    Returns None when there is nothing to place (no tickets, or none with a
    parsable date). Tickets lacking a date or a resolvable status are left
    out of the grid.
    """
    items = list(tickets)
    if not items:
        return None
    date_range = compute_date_range(items, tz=tz)
    if date_range is None:
        return None

    total_days = days_between(date_range.start, date_range.end) + 1
    week_count = math.ceil(total_days / DAYS_PER_WEEK)
    index = _index_tickets_by_date(items, tz)

    cells: list[list[HeatmapCell | None]] = [[None] * week_count for _ in range(DAYS_PER_WEEK)]
    cursor = date_range.start
    for week in range(week_count):
        for day in range(DAYS_PER_WEEK):
            key = iso_date(cursor)
            entries = list(index.get(key, ()))
            cells[day][week] = HeatmapCell(
                date=key,
                tickets=entries,
                dominant_status=get_dominant_status([e.status for e in entries]),
            )
            cursor += timedelta(days=1)

    month_labels = _month_labels(cells, week_count, date_range.year)
    return HeatmapGrid(cells=cells, week_count=week_count, month_labels=month_labels)


def heatmap_to_frame(grid: HeatmapGrid | None) -> pd.DataFrame:
    """Flatten a grid into one row per cell for charting."""
    columns = ["date", "weekday", "week", "count", "dominant_status", "titles"]
    if grid is None:
        return pd.DataFrame(columns=columns)
    rows = []
    for weekday, row in enumerate(grid.cells):
        for week, cell in enumerate(row):
            if cell is None:
                continue
            rows.append(
                {
                    "date": cell.date,
                    "weekday": weekday,
                    "week": week,
                    "count": len(cell.tickets),
                    "dominant_status": cell.dominant_status.value if cell.dominant_status else "none",
                    "titles": "\n".join(t.title for t in cell.tickets),
                }
            )
    return pd.DataFrame(rows, columns=columns)
