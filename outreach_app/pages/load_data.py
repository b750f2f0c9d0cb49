"""Upload page: read ticket / meetup JSON exports into the session."""

from __future__ import annotations

import logging

import streamlit as st

from outreach_app.app import register_page
from outreach_app.core.loader import DataLoadError, read_json_payload, validate_file_selections
from outreach_app.core.mappers import map_meetup_groups, map_tickets

logger = logging.getLogger(__name__)


@register_page("Load Data")
def load_data_page():
    st.title("Load Data")
    st.caption("Upload the ticket export and/or the meetup groups export (JSON arrays).")

    tickets_file = st.file_uploader("Tickets JSON", type=["json"], key="tickets_upload")
    meetups_file = st.file_uploader("Meetups JSON", type=["json"], key="meetups_upload")
    selection = validate_file_selections(tickets_file, meetups_file)
    load_btn = st.button("Load", type="primary", disabled=not selection.valid)

    if load_btn:
        try:
            if tickets_file is not None:
                raw = read_json_payload(tickets_file.name, tickets_file.getvalue())
                st.session_state["tickets"] = map_tickets(raw)
            if meetups_file is not None:
                raw = read_json_payload(meetups_file.name, meetups_file.getvalue())
                st.session_state["meetups"] = map_meetup_groups(raw)
        except DataLoadError as exc:
            logger.error("Upload rejected: %s", exc)
            st.error(str(exc))
            return
        st.success("Data loaded.")

    tickets = st.session_state.get("tickets")
    meetups = st.session_state.get("meetups")
    if tickets is not None:
        st.info(f"{len(tickets)} ticket(s) in session.")
    if meetups is not None:
        st.info(f"{len(meetups)} meetup group(s) in session.")
