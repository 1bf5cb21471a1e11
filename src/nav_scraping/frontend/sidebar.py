from dataclasses import dataclass
from typing import Sequence

import streamlit as st

ALL_SOURCES = "All sources"


@dataclass
class SidebarState:
    source: str
    refresh: bool


def render_sidebar(sources: Sequence[str]) -> SidebarState:
    st.sidebar.header("Settings")

    source = st.sidebar.selectbox("Source", [ALL_SOURCES, *sources])

    st.sidebar.markdown("---")
    st.sidebar.info("Every refresh fetches all sources again; it can take a while.")
    refresh = st.sidebar.button("Refresh NAVs", type="primary")

    return SidebarState(source=source, refresh=refresh)
