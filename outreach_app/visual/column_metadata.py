"""Central column metadata and helpers for table rendering."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import streamlit as st

# Mapping of raw column keys to (label, help text, format key)
# format key: "int" -> integer, "bool" -> checkbox, None -> default text column
COLUMN_METADATA: dict[str, tuple[str, str, str | None]] = {
    # Tickets
    "title": ("Title", "Ticket title.", None),
    "date": ("Date", "Activity date in the viewer timezone.", None),
    "bucket": ("Bucket", "Lifecycle bucket: assigned, accepted or resolved.", None),
    "status": ("Status", "Raw ticket workflow status.", None),
    "organizer": ("Organizer", "Activity organizer (Unknown when not recorded).", None),
    "attendees": ("Attendees", "Actual audience size reached.", "int"),
    "cfp_status": ("CFP", "Call-for-papers state from the ticket labels.", None),
    "labels": ("Labels", "Labels attached to the ticket.", None),
    # Statistics
    "label": ("Label", "Important label counted by the statistics view.", None),
    "ticket_count": ("Tickets", "Tickets carrying the label.", "int"),
    "total_attendees": ("Attendees", "Audience size summed over tickets with the label.", "int"),
    "Total": ("Total", "Tickets with the label across all organizers.", "int"),
    # Community goals
    "name": ("Group", "Community group name.", None),
    "city": ("City", "Group home city.", None),
    "country": ("Country", "Group home country.", None),
    "eventCount": ("Events", "Events held or planned in the selected year.", "int"),
    "pastEventCount": ("Past Events", "Events in the selected year that already started.", "int"),
    "totalRsvps": ("RSVPs", "RSVPs across the year's events.", "int"),
    "memberCount": ("Members", "Group membership count.", "int"),
    "goalMet": ("Goal Met", "Whether the group reached the yearly event goal.", "bool"),
}


def apply_column_metadata(
    columns: Iterable[str],
    existing: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Return a column_config dictionary with human labels and hover help."""

    columns = list(columns)
    config: dict[str, Any] = dict(existing or {})
    for col in columns:
        if col in config:
            continue
        meta = COLUMN_METADATA.get(col)
        if not meta:
            continue
        label, help_text, fmt = meta
        if fmt == "int":
            config[col] = st.column_config.NumberColumn(label, help=help_text, format="%d")
        elif fmt == "bool":
            config[col] = st.column_config.CheckboxColumn(label, help=help_text)
        else:
            config[col] = st.column_config.Column(label, help=help_text)
    if "meetupPageUrl" in columns and "meetupPageUrl" not in config:
        config["meetupPageUrl"] = st.column_config.LinkColumn("Meetup Page", help="Group page on meetup.com")
    return config
