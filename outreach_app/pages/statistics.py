"""Statistics page: status counts, label totals and organizer cross-tab."""

from __future__ import annotations

import streamlit as st

from outreach_app.analytics.aggregations.labels import (
    compute_statistics,
    label_stats_frame,
    organizer_cross_frame,
)
from outreach_app.app import register_page
from outreach_app.visual.column_metadata import apply_column_metadata


@register_page("Statistics")
def statistics_page():
    st.title("Statistics")
    tickets = st.session_state.get("tickets")
    if tickets is None:
        st.warning("Load a tickets export on the Load Data page first.")
        return

    stats = compute_statistics(tickets)
    c1, c2, c3 = st.columns(3)
    c1.metric("Assigned", stats.status_counts.assigned)
    c2.metric("Accepted", stats.status_counts.accepted)
    c3.metric("Resolved", stats.status_counts.resolved)

    st.subheader("Labels")
    labels_df = label_stats_frame(stats)
    if labels_df.empty:
        st.info("No tickets carry a tracked label.")
        return
    st.dataframe(labels_df, hide_index=True, column_config=apply_column_metadata(labels_df.columns))

    st.subheader("Organizers by label")
    cross_df = organizer_cross_frame(stats)
    st.dataframe(cross_df, hide_index=True, column_config=apply_column_metadata(cross_df.columns))
