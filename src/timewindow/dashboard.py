"""Streamlit dashboard for picking the metrics time window

Run with:

    streamlit run src/timewindow/dashboard.py
"""

import asyncio
import datetime

import asyncpg
import plotly.express as px
import streamlit as st

from timewindow.adjust import adjust_time_scale
from timewindow.catalog import AVAILABLE_TIME_SCALES
from timewindow.dashboard_utils import adjustment_message, retention_bands
from timewindow.manager import refresh_window, window_expires_at
from timewindow.matching import find_closest_time_scale
from timewindow.models import TimeWindow
from timewindow.retention import StorageTTLs, connect, fetch_storage_ttls
from timewindow.settings import load_settings
from timewindow.state import SetRange, SetScale, TimeWindowState, time_window_reducer
from timewindow.time_utils import format_duration, utcnow


async def _fetch_ttls(db_config: dict) -> StorageTTLs:
    connection = await connect(**db_config)
    try:
        return await fetch_storage_ttls(connection)
    finally:
        await connection.close()


settings = load_settings()

st.set_page_config(page_title="Metrics Time Window", page_icon="🕒", layout="wide")
st.title("🕒 Metrics Time Window")

if "time_window" not in st.session_state:
    st.session_state.time_window = time_window_reducer(
        TimeWindowState(),
        SetScale(AVAILABLE_TIME_SCALES.lookup(settings.default_scale) or TimeWindowState().scale),
    )
if "ttls" not in st.session_state:
    st.session_state.ttls = StorageTTLs(settings.resolution_10s_ttl, settings.resolution_30m_ttl)

state: TimeWindowState = st.session_state.time_window

with st.sidebar:
    st.subheader("Storage retention")
    if st.button("Fetch from cluster"):
        try:
            st.session_state.ttls = asyncio.run(_fetch_ttls(settings.db))
        except (OSError, asyncpg.PostgresError) as e:
            st.error(f"Could not fetch TTLs: {e}")
    ttls: StorageTTLs = st.session_state.ttls
    st.write(f"10s resolution: **{format_duration(ttls.resolution_10s)}**")
    st.write(f"30m resolution: **{format_duration(ttls.resolution_30m)}**")

tab1, tab2 = st.tabs(["📏 Preset Scale", "📅 Custom Range"])

with tab1:
    labels = list(AVAILABLE_TIME_SCALES.labels())
    current = labels.index(state.scale.key) if state.scale.key in labels else None
    label = st.selectbox("Time scale", labels, index=current, placeholder="Custom range")
    if label is not None and label != state.scale.key:
        state = time_window_reducer(state, SetScale(AVAILABLE_TIME_SCALES[label]))

with tab2:
    with st.form("time_range"):
        col1, col2 = st.columns(2)
        with col1:
            start_date = st.date_input(
                "Start Date", value=utcnow().date() - datetime.timedelta(days=1)
            )
            start_time = st.time_input("Start Time", value=datetime.time(0, 0))
        with col2:
            end_date = st.date_input("End Date", value=utcnow().date())
            end_time = st.time_input("End Time", value=datetime.time(0, 0))
        submit = st.form_submit_button("Apply Range", type="primary")

    if submit:
        try:
            window = TimeWindow(
                datetime.datetime.combine(start_date, start_time, tzinfo=datetime.timezone.utc),
                datetime.datetime.combine(end_date, end_time, tzinfo=datetime.timezone.utc),
            )
        except ValueError as e:
            st.error(f"Invalid range: {e}")
        else:
            scale = find_closest_time_scale(
                window.duration.total_seconds(), window.start.timestamp()
            )
            state = time_window_reducer(state, SetScale(scale))
            state = time_window_reducer(state, SetRange(window))

now = utcnow()
state = refresh_window(state, now=now)
st.session_state.time_window = state

adjusted = adjust_time_scale(
    state.scale, state.current_window, ttls.resolution_10s, ttls.resolution_30m, now=now
)
if message := adjustment_message(adjusted.adjustment_reason, ttls):
    st.warning(message)

col1, col2, col3 = st.columns(3)
col1.metric("Scale", state.scale.key or "")
col2.metric("Sample size", format_duration(adjusted.time_scale.sample_size))
expires = window_expires_at(state)
col3.metric("Window expires", expires.strftime("%H:%M:%S") if expires else "never")

if state.current_window is not None:
    fig = px.timeline(
        retention_bands(now, ttls, state.current_window),
        x_start="start",
        x_end="end",
        y="band",
        color="band",
    )
    fig.update_layout(showlegend=False, height=300)
    st.plotly_chart(fig, use_container_width=True)
