"""Ticket lifecycle classification.

Each ticket lands in at most one of three buckets. The rule is an ordered
table of ``(predicate, bucket)`` pairs evaluated first-match-wins, so a
ticket whose status is "Assigned" but whose pending reason is "Accepted"
stays in ``assigned``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

from .config import (
    ACCEPTED_PENDING_REASONS,
    ACCEPTED_STATUSES,
    ASSIGNED_STATUSES,
    RESOLVED_STATUSES,
)
from .models import TicketModel


class StatusBucket(str, Enum):
    ASSIGNED = "assigned"
    ACCEPTED = "accepted"
    RESOLVED = "resolved"


def _is_assigned(ticket: TicketModel) -> bool:
    return ticket.status in ASSIGNED_STATUSES


def _is_accepted(ticket: TicketModel) -> bool:
    return ticket.computed_pending_reason in ACCEPTED_PENDING_REASONS or ticket.status in ACCEPTED_STATUSES


def _is_resolved(ticket: TicketModel) -> bool:
    return ticket.status in RESOLVED_STATUSES


STATUS_RULES: tuple[tuple[Callable[[TicketModel], bool], StatusBucket], ...] = (
    (_is_assigned, StatusBucket.ASSIGNED),
    (_is_accepted, StatusBucket.ACCEPTED),
    (_is_resolved, StatusBucket.RESOLVED),
)


def classify(ticket: TicketModel) -> StatusBucket | None:
    """Return the bucket of ``ticket``, or None when no rule matches.

    Parameters
    ----------
    ticket : TicketModel
        Ticket to classify. Missing or unexpected status strings never raise.

    Returns
    -------
    StatusBucket or None
        First bucket whose predicate matches, in ``STATUS_RULES`` order.

    Examples
    --------
    >>> classify(TicketModel(title="t", id="1", status="Resolved"))
    <StatusBucket.RESOLVED: 'resolved'>
    """
    for predicate, bucket in STATUS_RULES:
        if predicate(ticket):
            return bucket
    return None


def get_ticket_heatmap_status(ticket: TicketModel) -> StatusBucket | None:
    """Heatmap colouring status; always the ticket's ``classify`` bucket."""
    return classify(ticket)


@dataclass(slots=True)
class StatusGroups:
    assigned: list[TicketModel] = field(default_factory=list)
    accepted: list[TicketModel] = field(default_factory=list)
    resolved: list[TicketModel] = field(default_factory=list)

    def bucket(self, bucket: StatusBucket) -> list[TicketModel]:
        return getattr(self, bucket.value)


def group_by_status(tickets: Iterable[TicketModel]) -> StatusGroups:
    """Partition tickets into the three buckets, keeping input order in each."""
    groups = StatusGroups()
    for ticket in tickets:
        bucket = classify(ticket)
        if bucket is not None:
            groups.bucket(bucket).append(ticket)
    return groups
