"""Reusable table helpers for Streamlit rendering."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from outreach_app.core.config import DISPLAY_ORDER_TICKET_LIST


def add_ticket_link(df: pd.DataFrame, base_url: str, id_col: str = "ticket_id", label: str = "Ticket"):
    if df.empty or id_col not in df.columns:
        return df, {}
    out = df.copy()
    base = base_url.rstrip("/")
    out[label] = out[id_col].apply(lambda k: f"{base}/{k}" if isinstance(k, str) and k else "")
    cfg = {
        label: st.column_config.LinkColumn(
            label,
            display_text=r"/([^/]*)$",
            help="Open in the issue tracker",
            width="medium",
        )
    }
    return out, cfg


def prepare_ticket_table(df: pd.DataFrame, base_url: str) -> tuple[pd.DataFrame, list[str], dict[str, object]]:
    if df.empty:
        return df, [], {}
    table, cfg = add_ticket_link(df, base_url)
    display_cols = [col for col in DISPLAY_ORDER_TICKET_LIST if col in table.columns]
    if not display_cols:
        display_cols = list(table.columns)
    return table, display_cols, cfg
