"""Tickets page: tab + date filters, status groups and ticket table."""

from __future__ import annotations

import streamlit as st

from outreach_app.app import register_page
from outreach_app.core.config import STATUS_DISPLAY_ORDER, TAB_IDS
from outreach_app.core.dates import iso_date
from outreach_app.core.fields import get_ticket_date, get_ticket_link
from outreach_app.core.settings import get_settings
from outreach_app.features.ticket_view.context import build_ticket_context
from outreach_app.visual.charts import heatmap_chart
from outreach_app.visual.column_metadata import apply_column_metadata
from outreach_app.visual.tables import prepare_ticket_table

TAB_LABELS = {
    "all": "All",
    "conferences": "Conferences",
    "students": "Students",
}

# Ticket-list tabs in navigation order; the other tab ids have their own pages.
TICKET_TABS = [tab for tab in TAB_IDS if tab in TAB_LABELS]


@register_page("Tickets")
def tickets_page():
    st.title("Tickets")
    tickets = st.session_state.get("tickets")
    if tickets is None:
        st.warning("Load a tickets export on the Load Data page first.")
        return

    settings = get_settings()
    tab = st.radio(
        "View",
        TICKET_TABS,
        format_func=TAB_LABELS.get,
        horizontal=True,
    )
    use_range = st.checkbox("Filter by date range")
    start = end = None
    if use_range:
        col1, col2 = st.columns(2)
        start_day = col1.date_input("From", value=None)
        end_day = col2.date_input("To", value=None)
        start = iso_date(start_day) if start_day else None
        end = iso_date(end_day) if end_day else None
        if start and end and start > end:
            st.info("Start date is after end date; no tickets match.")

    ctx = build_ticket_context(tickets, tab, start, end, tz=settings.timezone)

    for col, name in zip(st.columns(len(STATUS_DISPLAY_ORDER)), STATUS_DISPLAY_ORDER):
        col.metric(name.title(), len(getattr(ctx.groups, name)))

    chart = heatmap_chart(ctx.heatmap)
    if chart is not None:
        st.altair_chart(chart, use_container_width=True)

    for label, month_tickets in ctx.months:
        with st.expander(f"{label} ({len(month_tickets)})"):
            for ticket in month_tickets:
                link = get_ticket_link(ticket, settings.ticket_link_base)
                title = f"[{ticket.title}]({link})" if link else ticket.title
                st.markdown(f"- {title} · {get_ticket_date(ticket) or 'No date'} · {ticket.status or 'Unknown'}")

    prepared, display_cols, cfg = prepare_ticket_table(ctx.table, settings.ticket_link_base)
    if not display_cols:
        st.info("No tickets match the current filters.")
        return
    st.markdown("---")
    column_config = apply_column_metadata(display_cols, cfg)
    st.dataframe(
        prepared[display_cols].head(settings.max_table_rows),
        hide_index=True,
        column_config=column_config,
    )
    csv = prepared[display_cols].to_csv(index=False).encode(settings.download_encoding)
    st.download_button("Download CSV", csv, file_name=f"tickets_{tab}.csv", mime="text/csv")
