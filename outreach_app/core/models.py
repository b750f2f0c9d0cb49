"""Domain data models for tickets and meetup groups."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class TicketAlias:
    precedence: str
    id: str


@dataclass(frozen=True, slots=True)
class CustomField:
    id: str
    value: object


@dataclass(frozen=True, slots=True)
class CustomFields:
    string: tuple[CustomField, ...] = ()
    date: tuple[CustomField, ...] = ()
    boolean: tuple[CustomField, ...] = ()
    number: tuple[CustomField, ...] = ()


@dataclass(frozen=True, slots=True)
class TicketModel:
    title: str
    id: str
    status: str = ""
    computed_pending_reason: str | None = None
    aliases: tuple[TicketAlias, ...] = ()
    labels: tuple[str, ...] = ()
    custom_fields: CustomFields = field(default_factory=CustomFields)
    description: str = ""
    description_content_type: str = ""
    assignee_identity: str | None = None


@dataclass(frozen=True, slots=True)
class MeetupEventModel:
    id: str
    title: str
    date_time: str
    description: str = ""
    end_time: str = ""
    event_url: str = ""
    rsvp_count: int = 0


@dataclass(frozen=True, slots=True)
class MeetupGroupModel:
    id: str
    name: str
    city: str = ""
    country: str = ""
    description: str = ""
    founded_date: str = ""
    member_count: int = 0
    past_events: tuple[MeetupEventModel, ...] = ()
    upcoming_events: tuple[MeetupEventModel, ...] = ()
