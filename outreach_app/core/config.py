"""Central configuration, constants, and shared column definitions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Locale / Timezone Settings
# =============================================================================
# Viewer timezone used to turn ticket timestamps into calendar dates.
# Overridable through settings.yaml (see settings.py).
TIMEZONE = "UTC"

# =============================================================================
# Ticket Workflow Status Configuration
# =============================================================================
STATUS_ASSIGNED = "Assigned"
STATUS_UNDER_CONSIDERATION = "Under Consideration"
STATUS_IN_PROGRESS = "In Progress"
STATUS_RESOLVED = "Resolved"

PENDING_ACCEPTED = "Accepted"
PENDING_IN_PROGRESS = "In Progress"

ASSIGNED_STATUSES: frozenset[str] = frozenset({STATUS_ASSIGNED, STATUS_UNDER_CONSIDERATION})
ACCEPTED_PENDING_REASONS: frozenset[str] = frozenset({PENDING_ACCEPTED, PENDING_IN_PROGRESS})
ACCEPTED_STATUSES: frozenset[str] = frozenset({STATUS_IN_PROGRESS})
RESOLVED_STATUSES: frozenset[str] = frozenset({STATUS_RESOLVED})

# Display order for the status groups (matches bucket evaluation order)
STATUS_DISPLAY_ORDER: Sequence[str] = ("assigned", "accepted", "resolved")

# Colour priority when several statuses share a heatmap cell (highest wins)
STATUS_PRIORITY: dict[str, int] = {
    "assigned": 1,
    "accepted": 2,
    "resolved": 3,
}

# =============================================================================
# Label Configuration
# =============================================================================
CFP_SUBMITTED_LABEL = "CFP_Submitted: Yes"
CFP_ACCEPTED_LABEL = "CFP_Accepted: Yes"
STUDENTS_LABEL = "Segment: Students"
RECAP_LABEL = "Program: re:Invent re:Cap"

CFP_LABELS: frozenset[str] = frozenset({CFP_SUBMITTED_LABEL, CFP_ACCEPTED_LABEL})

# Labels counted by the statistics view: anything containing the marker,
# plus these exact names.
IMPORTANT_LABEL_MARKER = "DEU:"
IMPORTANT_EXACT_LABELS: frozenset[str] = frozenset(
    {
        CFP_ACCEPTED_LABEL,
        CFP_SUBMITTED_LABEL,
        STUDENTS_LABEL,
        RECAP_LABEL,
    }
)

UNKNOWN_ORGANIZER = "Unknown"

# =============================================================================
# Tabs
# =============================================================================
TAB_IDS: Sequence[str] = (
    "statistics",
    "all",
    "conferences",
    "students",
    "community-goals",
    "faq",
)
IDENTITY_TABS: frozenset[str] = frozenset({"all", "statistics"})

# =============================================================================
# Ticket Custom Field IDs
# =============================================================================
FIELD_IDS = {
    "date": "date",
    "organizer": "activity_organizer",
    "attendees": "actual_audience_size_reached",
}

# Alias ids starting with this prefix reference the external issue tracker
EXTERNAL_ALIAS_PREFIX = "D"
TICKET_LINK_BASE = "https://sim.amazon.com/issues"

# =============================================================================
# Calendar
# =============================================================================
MONTH_ABBREVS: Sequence[str] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

# =============================================================================
# Community Goals
# =============================================================================
GOAL_EVENT_THRESHOLD: int = 7  # past events in the year needed to meet the goal
MEETUP_PAGE_URL_PATTERN = r"^(https://www\.meetup\.com/[^/]+/)"
DESCRIPTION_PREVIEW_LENGTH: int = 150

# =============================================================================
# Table Columns
# =============================================================================
TICKET_CORE_COLUMNS: Sequence[str] = (
    "title",
    "id",
    "ticket_id",
    "status",
    "bucket",
    "date",
    "organizer",
    "attendees",
    "cfp_status",
    "labels",
)

DISPLAY_ORDER_TICKET_LIST: Sequence[str] = (
    "Ticket",
    "title",
    "date",
    "bucket",
    "status",
    "organizer",
    "attendees",
    "cfp_status",
    "labels",
)

DISPLAY_ORDER_COMMUNITY_GOALS: Sequence[str] = (
    "name",
    "city",
    "country",
    "eventCount",
    "pastEventCount",
    "totalRsvps",
    "memberCount",
    "goalMet",
    "meetupPageUrl",
)


@dataclass(slots=True)
class AppSettings:
    timezone: str = TIMEZONE
    goal_event_threshold: int = GOAL_EVENT_THRESHOLD
    ticket_link_base: str = TICKET_LINK_BASE
    max_table_rows: int = 1000
    download_encoding: str = "utf-8"
