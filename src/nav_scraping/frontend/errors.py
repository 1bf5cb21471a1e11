import streamlit as st


def parse_error_response(resp, fallback: str) -> str:
    """Pull ``detail`` out of the API's ``{"status": "error", "detail": ...}`` body."""
    try:
        payload = resp.json()
    except ValueError:
        return fallback
    if not isinstance(payload, dict) or payload.get("status") != "error":
        return fallback
    detail = payload.get("detail")
    return str(detail) if detail else fallback


def show_error(message: str) -> None:
    st.error(message)
