"""Rendering and API helpers for the Streamlit dashboard."""
import html

import requests
import streamlit as st


def api_error_detail(resp: requests.Response) -> str:
    try:
        return resp.json().get("detail", resp.text)
    except ValueError:
        return resp.text


def result_card_html(item: dict, index: int, color: str, emoji: str) -> str:
    """Card markup for one result. The analysed text is user input and is escaped."""
    return f"""
    <div style="padding: 10px; border-left: 4px solid {color}; background-color: #f8f9fa; margin: 10px 0; border-radius: 5px;">
        <p style="margin: 0;"><strong>{emoji} #{index} {item['sentiment']}</strong> ({item['confidence'] * 100:.1f}% confidence)</p>
        <p style="margin: 5px 0; color: #333;">{html.escape(item['text'])}</p>
    </div>
    """


@st.cache_data(show_spinner=False, max_entries=32)
def fetch_export(api_base: str, fmt: str, analysis_json: str) -> bytes:
    """
    Render one export of an analysis through the API.

    Cached per (format, analysis) so reruns of the dashboard do not re-post.
    Failed requests raise and are not cached.
    """
    resp = requests.post(
        f"{api_base}/api/v1/export/{fmt}",
        data=analysis_json.encode("utf-8"),
        headers={"Content-Type": "application/json"},
        timeout=30,
    )
    if not resp.ok:
        raise requests.HTTPError(f"{resp.status_code} - {api_error_detail(resp)}", response=resp)
    return resp.content
