"""Ticket field accessors.

Lookups return explicit optionals (``None`` when the field is absent); the
defaults used by the views (empty string, ``0``, ``"Unknown"``) are applied
once, here, by the ``get_*`` helpers further down.
"""

from __future__ import annotations

import calendar
import re
from collections.abc import Iterable

from .config import (
    CFP_ACCEPTED_LABEL,
    CFP_SUBMITTED_LABEL,
    EXTERNAL_ALIAS_PREFIX,
    FIELD_IDS,
    UNKNOWN_ORGANIZER,
)
from .dates import to_local_calendar_date
from .models import CustomField, TicketModel
from .settings import get_settings

_KERBEROS_RE = re.compile(r"^kerberos:([^@]+)@")


def find_custom_field(ticket: TicketModel, kind: str, field_id: str) -> CustomField | None:
    """Return the first custom field of ``kind`` whose id matches ``field_id``."""
    for entry in getattr(ticket.custom_fields, kind, ()) or ():
        if entry.id == field_id:
            return entry
    return None


def get_custom_field_string(ticket: TicketModel, field_id: str) -> str | None:
    entry = find_custom_field(ticket, "string", field_id)
    if entry is None or entry.value is None:
        return None
    return str(entry.value)


def get_custom_field_date(ticket: TicketModel, field_id: str) -> str | None:
    entry = find_custom_field(ticket, "date", field_id)
    if entry is None or entry.value is None:
        return None
    return str(entry.value)


def get_custom_field_number(ticket: TicketModel, field_id: str) -> int | float | None:
    entry = find_custom_field(ticket, "number", field_id)
    if entry is None:
        return None
    value = entry.value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def get_custom_field_boolean(ticket: TicketModel, field_id: str) -> bool | None:
    entry = find_custom_field(ticket, "boolean", field_id)
    if entry is None or not isinstance(entry.value, bool):
        return None
    return entry.value


def field_or_default(value, default):
    return default if value is None else value


def get_ticket_date(ticket: TicketModel) -> str:
    return field_or_default(get_custom_field_date(ticket, FIELD_IDS["date"]), "")


def get_organizer(ticket: TicketModel) -> str:
    organizer = field_or_default(get_custom_field_string(ticket, FIELD_IDS["organizer"]), "")
    return organizer if organizer.strip() else UNKNOWN_ORGANIZER


def get_attendees(ticket: TicketModel) -> int | float:
    return field_or_default(get_custom_field_number(ticket, FIELD_IDS["attendees"]), 0)


def get_ticket_id(ticket: TicketModel) -> str | None:
    """Return the first alias referencing the external issue tracker."""
    for alias in ticket.aliases:
        if alias.id.startswith(EXTERNAL_ALIAS_PREFIX):
            return alias.id
    return None


def get_ticket_link(ticket: TicketModel, base_url: str | None = None) -> str | None:
    ticket_id = get_ticket_id(ticket)
    if ticket_id is None:
        return None
    base = (base_url or get_settings().ticket_link_base).rstrip("/")
    return f"{base}/{ticket_id}"


def get_cfp_status(ticket: TicketModel) -> str:
    """Call-for-papers state; "accepted" wins over "submitted"."""
    if CFP_ACCEPTED_LABEL in ticket.labels:
        return "accepted"
    if CFP_SUBMITTED_LABEL in ticket.labels:
        return "submitted"
    return "none"


def get_assignee_alias(ticket: TicketModel) -> str:
    match = _KERBEROS_RE.match(ticket.assignee_identity or "")
    return match.group(1) if match else ""


def is_non_empty_url(value: str | None) -> bool:
    return bool(value) and value != "NA"


def sort_by_date(tickets: Iterable[TicketModel], order: str = "asc") -> list[TicketModel]:
    """Sort by the raw ``date`` field; tickets without a date go last."""
    items = list(tickets)
    dated = [t for t in items if get_ticket_date(t)]
    undated = [t for t in items if not get_ticket_date(t)]
    dated.sort(key=get_ticket_date, reverse=(order == "desc"))
    return dated + undated


def group_by_month(tickets: Iterable[TicketModel], tz=None) -> list[tuple[str, list[TicketModel]]]:
    """Group consecutive tickets by month label; expects date-sorted input."""
    groups: list[tuple[str, list[TicketModel]]] = []
    current = None
    for ticket in tickets:
        local = to_local_calendar_date(get_ticket_date(ticket), tz)
        label = f"{calendar.month_name[local.month]} {local.year}" if local else "No date"
        if label != current:
            groups.append((label, []))
            current = label
        groups[-1][1].append(ticket)
    return groups
