"""Community goals page: per-group monthly events and yearly goal status."""

from __future__ import annotations

from datetime import datetime

import pytz
import streamlit as st

from outreach_app.analytics.aggregations.community_goals import get_all_events
from outreach_app.analytics.metrics.events import categorize_events
from outreach_app.app import register_page
from outreach_app.core.settings import get_settings
from outreach_app.features.community_goals.context import available_years, build_goals_context
from outreach_app.visual.charts import monthly_events_chart
from outreach_app.visual.column_metadata import apply_column_metadata


@register_page("Community Goals")
def community_goals_page():
    st.title("Community Goals")
    groups = st.session_state.get("meetups")
    if groups is None:
        st.warning("Load a meetups export on the Load Data page first.")
        return

    settings = get_settings()
    tz = pytz.timezone(settings.timezone)
    now = datetime.now(tz)
    years = available_years(groups, tz=tz) or [now.year]
    year = st.selectbox("Year", years)
    ctx = build_goals_context(groups, year, now=now, tz=tz)

    c1, c2 = st.columns(2)
    c1.metric("Groups meeting goal", f"{ctx.goals_met} / {len(ctx.summaries)}")
    c2.metric("Events this year", ctx.total_events)
    st.caption(f"Goal: at least {settings.goal_event_threshold} past events in {year}.")

    chart = monthly_events_chart(ctx.summaries)
    if chart is not None:
        st.altair_chart(chart, use_container_width=True)
    st.dataframe(ctx.table, hide_index=True, column_config=apply_column_metadata(ctx.table.columns))

    names = {g.id: g.name for g in groups}
    if not names:
        return
    selected = st.selectbox("Group details", list(names), format_func=names.get)
    group = next(g for g in groups if g.id == selected)
    events = categorize_events(get_all_events(group), now, tz=tz)
    for heading, items in (("Upcoming", events.upcoming), ("Past", events.past)):
        st.subheader(f"{heading} ({len(items)})")
        for event in items:
            st.markdown(f"**[{event.title}]({event.event_url})** · {event.date_time} · {event.rsvp_count} RSVPs")
            if event.description_preview:
                st.caption(event.description_preview)
