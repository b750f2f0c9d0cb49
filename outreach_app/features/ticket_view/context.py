"""Pure helpers to build ticket view context for testing (no Streamlit)."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import pandas as pd

from outreach_app.analytics.metrics.heatmap import HeatmapGrid, build_heatmap_grid
from outreach_app.analytics.segments.filters import filter_by_date_range, filter_by_tab
from outreach_app.core.fields import group_by_month, sort_by_date
from outreach_app.core.mappers import tickets_to_dataframe
from outreach_app.core.models import TicketModel
from outreach_app.core.status import StatusGroups, group_by_status


@dataclass(slots=True)
class TicketViewContext:
    """Derived structures for one tab of the ticket dashboard."""

    tab: str
    tickets: list[TicketModel]
    groups: StatusGroups
    heatmap: HeatmapGrid | None
    table: pd.DataFrame
    months: list[tuple[str, list[TicketModel]]] = field(default_factory=list)


def build_ticket_context(
    tickets: Iterable[TicketModel],
    tab: str,
    start: str | None = None,
    end: str | None = None,
    *,
    tz=None,
) -> TicketViewContext:
    """Apply the tab and date filters and derive everything the page shows.

    The heatmap always spans the tab's tickets (a whole calendar year); the
    date range narrows the status groups, month list and table only.
    """
    tab_tickets = filter_by_tab(tickets, tab)
    visible = filter_by_date_range(tab_tickets, start, end, tz=tz)
    ordered = sort_by_date(visible, order="desc")
    return TicketViewContext(
        tab=tab,
        tickets=visible,
        groups=group_by_status(visible),
        heatmap=build_heatmap_grid(tab_tickets, tz=tz),
        table=tickets_to_dataframe(ordered, tz=tz),
        months=group_by_month(ordered, tz=tz),
    )
