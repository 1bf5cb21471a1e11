import pandas as pd
import streamlit as st

from nav_scraping.frontend.api_client import ApiClient
from nav_scraping.frontend.errors import show_error
from nav_scraping.frontend.sidebar import ALL_SOURCES
from nav_scraping.services.export import EXCEL_MEDIA_TYPE, export_filename

DISPLAY_COLUMNS = {
    "source": "Source",
    "category": "Category",
    "short_code": "Short Name",
    "fund_name": "Fund Name",
    "as_of_date": "Date",
    "nav": "NAV",
    "change": "Change",
    "change_percent": "% Change",
    "bid_price": "Bid",
    "offer_price": "Offer",
    "total_net_assets": "Total Net Asset",
    "currency": "Currency",
}


def load_records(client: ApiClient) -> pd.DataFrame:
    result = client.get("/api/nav")
    if result.error:
        show_error(result.error)
        return pd.DataFrame(columns=list(DISPLAY_COLUMNS))

    if not result.data:
        return pd.DataFrame(columns=list(DISPLAY_COLUMNS))

    df = pd.DataFrame(result.data)
    if "as_of_date" in df.columns:
        df["as_of_date"] = pd.to_datetime(df["as_of_date"], errors="coerce").dt.date
    return df


def render_records(df: pd.DataFrame, source: str) -> None:
    if source != ALL_SOURCES:
        df = df[df["source"] == source]

    if df.empty:
        st.info("No records for the current selection.")
        return

    counts = df.groupby("source").size()
    cols = st.columns(len(counts))
    for col, (name, count) in zip(cols, counts.items()):
        col.metric(name, f"{count} funds")

    st.dataframe(
        df[[c for c in DISPLAY_COLUMNS if c in df.columns]].rename(columns=DISPLAY_COLUMNS),
        use_container_width=True,
        hide_index=True,
    )


def render_download(client: ApiClient) -> None:
    if not st.button("Prepare Excel export"):
        return
    result = client.get_bytes("/api/nav/download")
    if result.error or not result.data:
        show_error(result.error or "Export is not available.")
        return
    st.download_button(
        "Download Excel",
        data=result.data,
        file_name=export_filename(),
        mime=EXCEL_MEDIA_TYPE,
    )
