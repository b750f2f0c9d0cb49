"""Page registry and sidebar router."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import streamlit as st

PAGES = {}

PAGE_ORDER = ("Tickets", "Statistics", "Community Goals", "Load Data")
UPLOAD_PAGE = "Load Data"
SESSION_DATA_KEYS = ("tickets", "meetups")


def register_page(label):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


def ordered_pages(names: Iterable[str]) -> list[str]:
    """Known pages in ``PAGE_ORDER``, then any extra pages alphabetically."""
    names = set(names)
    known = [name for name in PAGE_ORDER if name in names]
    return known + sorted(names.difference(PAGE_ORDER))


def default_page_index(pages: list[str], state: Mapping) -> int:
    """Open the upload page until the session holds tickets or meetups."""
    has_data = any(key in state for key in SESSION_DATA_KEYS)
    if UPLOAD_PAGE in pages and not has_data:
        return pages.index(UPLOAD_PAGE)
    return 0


def main():
    st.sidebar.title("Outreach Dashboard")
    pages = ordered_pages(PAGES)
    if not pages:
        st.write("No pages registered yet.")
        return
    page = st.sidebar.selectbox("Page", pages, index=default_page_index(pages, st.session_state))
    PAGES[page]()


if __name__ == "__main__":
    main()
