"""Label statistics: status counts, per-label totals and organizer cross-tab."""

from __future__ import annotations

import unicodedata
from collections import Counter, defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

import pandas as pd

from outreach_app.core.config import IMPORTANT_EXACT_LABELS, IMPORTANT_LABEL_MARKER
from outreach_app.core.fields import get_attendees, get_organizer
from outreach_app.core.models import TicketModel
from outreach_app.core.status import group_by_status


def label_sort_key(label: str) -> tuple[str, str]:
    """Case- and accent-insensitive collation key for label names.

    Accents are stripped and case folded for the primary comparison; the
    raw label breaks ties so the order stays total.
    """
    decomposed = unicodedata.normalize("NFKD", label)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), label


@dataclass(frozen=True, slots=True)
class StatusCounts:
    assigned: int = 0
    accepted: int = 0
    resolved: int = 0

    def to_dict(self) -> dict:
        return {"assigned": self.assigned, "accepted": self.accepted, "resolved": self.resolved}


@dataclass(frozen=True, slots=True)
class LabelStat:
    label: str
    ticket_count: int
    total_attendees: int | float

    def to_dict(self) -> dict:
        return {"label": self.label, "ticketCount": self.ticket_count, "totalAttendees": self.total_attendees}


@dataclass(frozen=True, slots=True)
class OrganizerCrossRow:
    label: str
    counts: dict[str, int]
    total: int

    def to_dict(self) -> dict:
        return {"label": self.label, "counts": dict(self.counts), "total": self.total}


@dataclass(slots=True)
class StatisticsData:
    status_counts: StatusCounts = field(default_factory=StatusCounts)
    label_stats: list[LabelStat] = field(default_factory=list)
    organizer_cross: list[OrganizerCrossRow] = field(default_factory=list)
    organizer_names: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "statusCounts": self.status_counts.to_dict(),
            "labelStats": [s.to_dict() for s in self.label_stats],
            "organizerCross": [r.to_dict() for r in self.organizer_cross],
            "organizerNames": list(self.organizer_names),
        }


def is_important_label(name: str) -> bool:
    return IMPORTANT_LABEL_MARKER in name or name in IMPORTANT_EXACT_LABELS


def important_labels(ticket: TicketModel) -> list[str]:
    """Important labels of ``ticket``, deduplicated, first occurrence order."""
    return list(dict.fromkeys(name for name in ticket.labels if is_important_label(name)))


def compute_statistics(tickets: Iterable[TicketModel]) -> StatisticsData:
    """Aggregate tickets into status counts and important-label statistics.

    Each ticket contributes once per distinct important label: one ticket to
    the label count, its audience size to the attendee total, and one to the
    ``[label][organizer]`` cross-tab cell. Organizers seen only on tickets
    without important labels are not reported.
    """
    items = list(tickets)
    groups = group_by_status(items)
    status_counts = StatusCounts(
        assigned=len(groups.assigned),
        accepted=len(groups.accepted),
        resolved=len(groups.resolved),
    )

    ticket_counts: Counter[str] = Counter()
    attendee_totals: dict[str, int | float] = defaultdict(int)
    organizer_counts: dict[str, Counter[str]] = defaultdict(Counter)
    organizers: set[str] = set()

    for ticket in items:
        names = important_labels(ticket)
        if not names:
            continue
        attendees = get_attendees(ticket)
        organizer = get_organizer(ticket)
        organizers.add(organizer)
        for name in names:
            ticket_counts[name] += 1
            attendee_totals[name] += attendees
            organizer_counts[name][organizer] += 1

    ordered = sorted(ticket_counts, key=label_sort_key)
    label_stats = [
        LabelStat(label=name, ticket_count=ticket_counts[name], total_attendees=attendee_totals[name])
        for name in ordered
    ]
    organizer_cross = []
    for name in ordered:
        counts = dict(organizer_counts[name])
        organizer_cross.append(OrganizerCrossRow(label=name, counts=counts, total=sum(counts.values())))

    return StatisticsData(
        status_counts=status_counts,
        label_stats=label_stats,
        organizer_cross=organizer_cross,
        organizer_names=sorted(organizers),
    )


def label_stats_frame(stats: StatisticsData) -> pd.DataFrame:
    columns = ["label", "ticket_count", "total_attendees"]
    rows = [
        {"label": s.label, "ticket_count": s.ticket_count, "total_attendees": s.total_attendees}
        for s in stats.label_stats
    ]
    return pd.DataFrame(rows, columns=columns)


def organizer_cross_frame(stats: StatisticsData) -> pd.DataFrame:
    """Label x organizer matrix (zeros filled) with a trailing ``Total`` column."""
    if not stats.organizer_cross:
        return pd.DataFrame(columns=["label", *stats.organizer_names, "Total"])
    frame = pd.DataFrame(
        [row.counts for row in stats.organizer_cross],
        index=[row.label for row in stats.organizer_cross],
    )
    frame = frame.reindex(columns=stats.organizer_names).fillna(0).astype(int)
    frame["Total"] = [row.total for row in stats.organizer_cross]
    frame.index.name = "label"
    return frame.reset_index()
