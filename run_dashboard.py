"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``outreach_app/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from outreach_app.app import main

st.set_page_config(layout="wide")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("outreach_app")

PAGES_DIR = Path(__file__).parent / "outreach_app" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"outreach_app.pages.{py.stem}"
    try:
        import_module(mod_name)
    except Exception as e:  # pragma: no cover
        logger.error("Failed importing page %s: %s", mod_name, e)

if __name__ == "__main__":
    main()
