"""Ticket view filters: named tabs and inclusive date ranges."""

from __future__ import annotations

from collections.abc import Iterable

from outreach_app.core.config import CFP_LABELS, IDENTITY_TABS, STUDENTS_LABEL
from outreach_app.core.dates import to_local_date_str
from outreach_app.core.fields import get_ticket_date
from outreach_app.core.models import TicketModel


def has_cfp_label(ticket: TicketModel) -> bool:
    return any(name in CFP_LABELS for name in ticket.labels)


def has_students_label(ticket: TicketModel) -> bool:
    return STUDENTS_LABEL in ticket.labels


TAB_PREDICATES = {
    "conferences": has_cfp_label,
    "students": has_students_label,
}


def filter_by_tab(tickets: Iterable[TicketModel], tab_id: str) -> list[TicketModel]:
    """Narrow tickets to the named tab.

    "all" and "statistics" keep every ticket, as does any unknown tab id.
    """
    items = list(tickets)
    if tab_id in IDENTITY_TABS:
        return items
    predicate = TAB_PREDICATES.get(tab_id)
    if predicate is None:
        return items
    return [t for t in items if predicate(t)]


def filter_by_date_range(
    tickets: Iterable[TicketModel],
    start: str | None = None,
    end: str | None = None,
    *,
    tz=None,
) -> list[TicketModel]:
    """Keep tickets whose local ``date`` lies within ``[start, end]``.

    Bounds are canonical ``YYYY-MM-DD`` strings compared lexicographically.
    No bounds keeps everything; ``start > end`` keeps nothing; a ticket
    without a parsable date is dropped as soon as any bound is given.
    """
    items = list(tickets)
    if not start and not end:
        return items
    if start and end and start > end:
        return []
    out = []
    for ticket in items:
        local = to_local_date_str(get_ticket_date(ticket), tz)
        if local is None:
            continue
        if start and local < start:
            continue
        if end and local > end:
            continue
        out.append(ticket)
    return out
