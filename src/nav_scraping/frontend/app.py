import streamlit as st

from nav_scraping.core import load_settings
from nav_scraping.frontend.api_client import ApiClient
from nav_scraping.frontend.records import load_records, render_download, render_records
from nav_scraping.frontend.sidebar import render_sidebar

# Scraping all sources takes far longer than a normal API call.
API_TIMEOUT_S = 180


def main() -> None:
    st.set_page_config(page_title="NAV Monitor", layout="wide")
    settings = load_settings()
    client = ApiClient(settings.api_url, timeout=API_TIMEOUT_S)

    st.title("Mutual Fund NAV Monitor")

    records = st.session_state.get("records")
    sources = sorted(records["source"].unique()) if records is not None and not records.empty else []
    state = render_sidebar(sources)

    if state.refresh:
        with st.spinner("Fetching NAVs from every source..."):
            records = load_records(client)
        st.session_state["records"] = records

    if records is None:
        st.info("Click 'Refresh NAVs' in the sidebar to fetch the latest quotes.")
        return

    render_records(records, state.source)
    st.markdown("---")
    render_download(client)


main()
