"""Mapping raw ticket / meetup JSON into model instances."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import pandas as pd

from .config import TICKET_CORE_COLUMNS
from .dates import to_local_date_str
from .fields import get_attendees, get_cfp_status, get_organizer, get_ticket_date, get_ticket_id
from .models import (
    CustomField,
    CustomFields,
    MeetupEventModel,
    MeetupGroupModel,
    TicketAlias,
    TicketModel,
)
from .status import classify

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _sequence(value: Any) -> list:
    return value if isinstance(value, list) else []


def _int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _custom_fields(raw: Any) -> CustomFields:
    groups = _mapping(raw)

    def group(kind: str) -> tuple[CustomField, ...]:
        out = []
        for entry in _sequence(groups.get(kind)):
            if not isinstance(entry, dict) or "id" not in entry:
                continue
            out.append(CustomField(id=_text(entry.get("id")), value=entry.get("value")))
        return tuple(out)

    return CustomFields(
        string=group("string"),
        date=group("date"),
        boolean=group("boolean"),
        number=group("number"),
    )


def map_ticket(raw: dict[str, Any]) -> TicketModel:
    tt = _mapping(_mapping(raw.get("extensions")).get("tt"))
    aliases = tuple(
        TicketAlias(precedence=_text(a.get("precedence")), id=_text(a.get("id")))
        for a in _sequence(raw.get("aliases"))
        if isinstance(a, dict)
    )
    labels = tuple(str(name) for name in _sequence(raw.get("labels")) if isinstance(name, str))
    pending = tt.get("computedPendingReason")
    return TicketModel(
        title=_text(raw.get("title")),
        id=_text(raw.get("id")),
        status=_text(tt.get("status")),
        computed_pending_reason=pending if isinstance(pending, str) else None,
        aliases=aliases,
        labels=labels,
        custom_fields=_custom_fields(raw.get("customFields")),
        description=_text(raw.get("description")),
        description_content_type=_text(raw.get("descriptionContentType")),
        assignee_identity=raw.get("assigneeIdentity") if isinstance(raw.get("assigneeIdentity"), str) else None,
    )


def map_tickets(raw_items: Iterable[Any]) -> list[TicketModel]:
    out: list[TicketModel] = []
    skipped = 0
    for raw in raw_items or []:
        if isinstance(raw, TicketModel):
            out.append(raw)
        elif isinstance(raw, dict):
            out.append(map_ticket(raw))
        else:
            skipped += 1
    if skipped:
        logger.debug("Skipped %s non-object ticket entries", skipped)
    return out


def map_meetup_event(raw: dict[str, Any]) -> MeetupEventModel:
    return MeetupEventModel(
        id=_text(raw.get("id")),
        title=_text(raw.get("title")),
        date_time=_text(raw.get("dateTime")),
        description=_text(raw.get("description")),
        end_time=_text(raw.get("endTime")),
        event_url=_text(raw.get("eventUrl")),
        rsvp_count=_int(_mapping(raw.get("rsvps")).get("totalCount")),
    )


def _events(raw: Any) -> tuple[MeetupEventModel, ...]:
    edges = _sequence(_mapping(raw).get("edges"))
    return tuple(
        map_meetup_event(edge["node"])
        for edge in edges
        if isinstance(edge, dict) and isinstance(edge.get("node"), dict)
    )


def map_meetup_group(raw: dict[str, Any]) -> MeetupGroupModel:
    return MeetupGroupModel(
        id=_text(raw.get("id")),
        name=_text(raw.get("name")),
        city=_text(raw.get("city")),
        country=_text(raw.get("country")),
        description=_text(raw.get("description")),
        founded_date=_text(raw.get("foundedDate")),
        member_count=_int(_mapping(raw.get("memberships")).get("totalCount")),
        past_events=_events(raw.get("pastEvents")),
        upcoming_events=_events(raw.get("upcomingEvents")),
    )


def map_meetup_groups(raw_items: Iterable[Any]) -> list[MeetupGroupModel]:
    out: list[MeetupGroupModel] = []
    skipped = 0
    for raw in raw_items or []:
        if isinstance(raw, MeetupGroupModel):
            out.append(raw)
        elif isinstance(raw, dict):
            out.append(map_meetup_group(raw))
        else:
            skipped += 1
    if skipped:
        logger.debug("Skipped %s non-object meetup group entries", skipped)
    return out


def tickets_to_dataframe(tickets: Iterable[TicketModel], tz=None) -> pd.DataFrame:
    rows = []
    for t in tickets:
        bucket = classify(t)
        rows.append(
            {
                "title": t.title,
                "id": t.id,
                "ticket_id": get_ticket_id(t),
                "status": t.status,
                "bucket": bucket.value if bucket else None,
                "date": to_local_date_str(get_ticket_date(t), tz),
                "organizer": get_organizer(t),
                "attendees": get_attendees(t),
                "cfp_status": get_cfp_status(t),
                "labels": t.labels,
            }
        )
    df = pd.DataFrame(rows, columns=list(TICKET_CORE_COLUMNS))
    if not df.empty:

        def _format_labels(val):
            if not val:
                return ""
            unique = {v for v in val if v}
            ordered = sorted(unique, key=lambda s: s.lower())
            return ", ".join(ordered)

        df["labels"] = df["labels"].apply(_format_labels)
    return df
