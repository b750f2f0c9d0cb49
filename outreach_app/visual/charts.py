"""Chart builders (Altair) for the heatmap and community goals."""

from __future__ import annotations

from collections.abc import Sequence

import altair as alt
import pandas as pd

from outreach_app.analytics.aggregations.community_goals import GroupSummary
from outreach_app.analytics.metrics.heatmap import HeatmapGrid, heatmap_to_frame
from outreach_app.core.config import MONTH_ABBREVS

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

STATUS_COLORS = {
    "none": "#ebedf0",
    "assigned": "#f2c14e",
    "accepted": "#4e79a7",
    "resolved": "#59a14f",
}


def _month_label_expr(labels: dict[int, str]) -> str:
    """Vega expression showing a month name only on the week where it starts."""
    branches = [f"datum.value == {week} ? '{label}'" for week, label in labels.items()]
    return " : ".join([*branches, "''"])


def heatmap_chart(grid: HeatmapGrid | None):
    if grid is None:
        return None
    data = heatmap_to_frame(grid)
    if data.empty:
        return None
    data["weekday_name"] = data["weekday"].map(lambda i: WEEKDAY_NAMES[i])
    labels = {m.week_index: m.label for m in grid.month_labels}
    domain = list(STATUS_COLORS.keys())
    chart = (
        alt.Chart(data)
        .mark_rect(stroke="white", strokeWidth=1)
        .encode(
            x=alt.X(
                "week:O",
                title=None,
                axis=alt.Axis(
                    labelExpr=_month_label_expr(labels),
                    labelAngle=0,
                ),
            ),
            y=alt.Y("weekday_name:O", title=None, sort=list(WEEKDAY_NAMES)),
            color=alt.Color(
                "dominant_status:N",
                scale=alt.Scale(domain=domain, range=[STATUS_COLORS[k] for k in domain]),
                legend=alt.Legend(title="Status"),
            ),
            tooltip=[
                alt.Tooltip("date:N", title="Date"),
                alt.Tooltip("count:Q", title="Tickets"),
                alt.Tooltip("titles:N", title="Titles"),
            ],
        )
        .properties(height=160)
    )
    return chart


def monthly_events_chart(summaries: Sequence[GroupSummary]):
    rows = [
        {"group": s.name, "month": MONTH_ABBREVS[i], "events": count}
        for s in summaries
        for i, count in enumerate(s.monthly_counts)
    ]
    if not rows:
        return None
    data = pd.DataFrame(rows)
    chart = (
        alt.Chart(data)
        .mark_bar()
        .encode(
            x=alt.X("month:O", title="Month", sort=list(MONTH_ABBREVS)),
            y=alt.Y("sum(events):Q", title="Events"),
            color=alt.Color("group:N", legend=alt.Legend(title="Group")),
            tooltip=[
                alt.Tooltip("group:N", title="Group"),
                alt.Tooltip("month:O", title="Month"),
                alt.Tooltip("events:Q", title="Events"),
            ],
        )
        .properties(height=280)
    )
    return chart
