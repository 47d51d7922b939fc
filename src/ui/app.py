"""
Power System Dashboard - Streamlit UI
=====================================

Real-time monitoring view of a simulated power distribution system.

Tabs:
1. Overview
2. Power Flow
3. Efficiency
4. Weather
5. Charging

Run with:
    streamlit run src/ui/app.py
"""

import json
import logging
import os
import sys
import time
from pathlib import Path

import numpy as np
import streamlit as st
from pydantic import ValidationError

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from charts import (
    GaugeBand,
    ViewState,
    demand_profile_figure,
    efficiency_gauges,
    gauge_band,
    power_flow_figure,
    stage_losses_figure,
    station_power_figure,
    station_status_figure,
    system_figure,
    trend_figure,
    weather_map_figure,
)
from charts.charging import STATUS_COLORS
from telemetry import (
    ChargingNetwork,
    DashboardConfig,
    RefreshTimer,
    SnapshotGenerator,
    SnapshotHistory,
    StationStatus,
    SystemSnapshot,
    load_config,
)
from telemetry.charging import demand_profile
from telemetry.weather import assess_impact, station_readings

CONFIG_ENV = "POWER_DASHBOARD_CONFIG"

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("power_dashboard.ui")


# Page configuration
st.set_page_config(
    page_title="Power System Dashboard",
    page_icon="⚡",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .stMetric {
        background-color: #f0f2f6;
        padding: 10px;
        border-radius: 5px;
    }
    .alert-badge {
        background-color: #dc3545;
        color: white;
        border-radius: 12px;
        padding: 2px 10px;
        font-size: 0.85rem;
        font-weight: 600;
    }
    .status-badge {
        color: white;
        border-radius: 10px;
        padding: 1px 8px;
        font-size: 0.75rem;
    }
</style>
""", unsafe_allow_html=True)


def load_dashboard_config() -> DashboardConfig:
    """Load the config named by POWER_DASHBOARD_CONFIG, falling back to defaults."""
    path = os.environ.get(CONFIG_ENV)
    try:
        return load_config(path)
    except (FileNotFoundError, json.JSONDecodeError, ValidationError) as e:
        logger.error("Could not load config %s: %s", path, e)
        st.error(f"Could not load config `{path}`, using defaults: {e}")
        return DashboardConfig()


def refresh_snapshot() -> SystemSnapshot:
    """Draw a new snapshot and everything derived from it."""
    state = st.session_state
    snapshot = state["generator"].next()
    state["snapshot"] = snapshot
    state["history"].append(snapshot)
    state["weather_stations"] = station_readings(snapshot.weather, state["rng"])
    state["demand_profile"] = demand_profile(state["rng"])
    state["timer"].mark(time.monotonic())
    return snapshot


def init_state() -> None:
    state = st.session_state
    if "generator" in state:
        return

    config = load_dashboard_config()
    rng = np.random.default_rng(config.seed)
    state["config"] = config
    state["rng"] = rng
    state["generator"] = SnapshotGenerator(config, rng=rng)
    state["history"] = SnapshotHistory(maxlen=config.history_length)
    state["timer"] = RefreshTimer(config.refresh.interval_seconds, paused=not config.refresh.realtime)
    state["network"] = ChargingNetwork.create(config.charging, rng, now=time.monotonic())
    state["view"] = ViewState()
    state["interval_seconds"] = config.refresh.interval_seconds
    refresh_snapshot()
    logger.info("Dashboard session started (seed=%s)", config.seed)


def maybe_refresh() -> SystemSnapshot:
    """Refresh when the timer is due; a paused timer is never due."""
    state = st.session_state
    timer = state["timer"]
    timer.set_interval(state["interval_seconds"])
    if timer.is_due(time.monotonic()):
        return refresh_snapshot()
    return state["snapshot"]


def _progress(label: str, value: float) -> None:
    v = min(max(value, 0.0), 100.0)
    st.progress(v / 100.0, text=f"{label}: {value:.1f}%")


def render_header() -> None:
    """Title, alert badge, last update time and quick stats."""
    snapshot = maybe_refresh()
    flow = snapshot.power_flow

    col1, col2 = st.columns([3, 1])
    with col1:
        badge = ""
        if snapshot.has_alerts:
            n = len(snapshot.alerts)
            badge = f' <span class="alert-badge">⚠ {n} Alert{"s" if n > 1 else ""}</span>'
        st.markdown(f"## ⚡ {st.session_state['config'].name}{badge}", unsafe_allow_html=True)
    with col2:
        st.caption(f"Last updated: {snapshot.timestamp.strftime('%H:%M:%S')}")

    for alert in snapshot.alerts:
        st.warning(alert)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Generation", f"{flow.generation_kw:.1f} kW")
    col2.metric("System Efficiency", f"{flow.overall_efficiency:.1f}%")
    col3.metric("Weather Impact", f"{snapshot.weather.temperature_c:.1f}°C")
    col4.metric("Active Loads", f"{flow.active_loads}")


def tab_overview() -> None:
    snapshot = maybe_refresh()
    state = st.session_state

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Power Flow Overview")
        st.caption("Real-time power generation and distribution")
        st.plotly_chart(power_flow_figure(snapshot.power_flow), key="overview_flow")
    with col2:
        st.subheader("System Efficiency")
        st.caption("Key performance indicators")
        st.plotly_chart(efficiency_gauges(snapshot.efficiency), key="overview_gauge")

    st.divider()

    st.subheader("3D System Visualization")
    st.caption("Drag to rotate, use the controls to zoom. Component intensity shows load.")
    view: ViewState = state["view"]
    c1, c2, c3, c4, c5, c6 = st.columns(6)
    if c1.button("⟲ Left"):
        view.rotate(-30, 0)
    if c2.button("⟳ Right"):
        view.rotate(30, 0)
    if c3.button("Tilt"):
        view.rotate(0, -30)
    if c4.button("🔍 Zoom in"):
        view.zoom_in()
    if c5.button("🔎 Zoom out"):
        view.zoom_out()
    if c6.button("↺ Reset"):
        view.reset()
    st.plotly_chart(system_figure(snapshot.power_flow, view), key="overview_3d")

    st.divider()

    st.subheader("Recent Trend")
    st.plotly_chart(trend_figure(state["history"].to_frame()), key="overview_trend")


def tab_power_flow() -> None:
    snapshot = maybe_refresh()
    flow = snapshot.power_flow

    st.subheader("Detailed Power Flow Analysis")
    st.caption("Comprehensive view of power generation, transmission, and distribution")
    st.plotly_chart(power_flow_figure(flow, detailed=True), key="detail_flow")

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(stage_losses_figure(flow), key="detail_losses")
    with col2:
        st.markdown("**Stage values**")
        st.dataframe(
            {
                "Stage": [stage.label for stage in flow.stage_values()],
                "Power (kW)": [round(v, 2) for v in flow.stage_values().values()],
            },
            hide_index=True
        )
        total_loss = flow.generation_kw - flow.consumption_kw
        st.metric("Total Losses", f"{total_loss:.2f} kW")


def tab_efficiency() -> None:
    snapshot = maybe_refresh()
    eff = snapshot.efficiency

    st.subheader("Efficiency Monitoring")
    st.caption("Real-time efficiency metrics and performance indicators")
    st.plotly_chart(efficiency_gauges(eff, detailed=True), key="detail_gauges")

    _progress("Generation Efficiency", eff.generation_pct)
    _progress("Transmission Efficiency", eff.transmission_pct)
    _progress("Overall System Efficiency", eff.overall_pct)

    band = gauge_band(eff.overall_pct)
    if band is GaugeBand.GOOD:
        st.success(f"✅ Overall efficiency healthy: {eff.overall_pct:.1f}%")
    elif band is GaugeBand.WARNING:
        st.warning(f"⚡ Overall efficiency degraded: {eff.overall_pct:.1f}%")
    else:
        st.error(f"⚠️ Overall efficiency critical: {eff.overall_pct:.1f}%")


def tab_weather() -> None:
    snapshot = maybe_refresh()
    weather = snapshot.weather

    st.subheader("Weather Impact Analysis")
    st.caption("Environmental conditions affecting power system performance")
    st.plotly_chart(
        weather_map_figure(weather, st.session_state["weather_stations"]),
        key="weather_map"
    )

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("🌡️ Temperature", f"{weather.temperature_c:.1f}°C")
    col2.metric("💨 Wind Speed", f"{weather.wind_speed_ms:.1f} m/s")
    col3.metric("☀️ Solar Irradiance", f"{weather.solar_irradiance_wm2:.0f} W/m²")
    col4.metric("💧 Humidity", f"{weather.humidity_pct:.1f}%")

    st.markdown("**Weather Impact Analysis**")
    for entry in assess_impact(weather).entries():
        st.markdown(f"{entry.label}: :{entry.status_color}[{entry.status}]")


def _station_card(station) -> None:
    with st.container(border=True):
        color = STATUS_COLORS[station.status]
        st.markdown(
            f"**{station.name}** "
            f'<span class="status-badge" style="background-color:{color}">{station.status.value}</span>',
            unsafe_allow_html=True
        )
        st.caption(f"ID: {station.id}")
        if station.status is StationStatus.CHARGING:
            st.caption(f"Vehicle: {station.vehicle_type}")
            st.progress(station.charge_level_pct / 100.0, text=f"Charge Level {station.charge_level_pct:.1f}%")
            st.progress(
                min(station.power_utilization_pct, 100.0) / 100.0,
                text=f"Power Output {station.current_power_kw:.1f} kW"
            )
            st.caption(f"Time remaining: {station.time_remaining_label}")
        elif station.status is StationStatus.AVAILABLE:
            st.markdown("🚗 Ready for charging")
        else:
            st.markdown(":red[Station offline]")


def tab_charging() -> None:
    state = st.session_state
    network: ChargingNetwork = state["network"]
    network.advance_to(time.monotonic())
    summary = network.summary()

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("⚡ Total Power", f"{summary.total_power_kw:.1f} kW")
    col2.metric("🔋 Active", summary.active)
    col3.metric("🚗 Available", summary.available)
    col4.metric("🕒 Offline", summary.offline)

    profile_tab, stations_tab, analytics_tab = st.tabs(["Demand Profile", "Station Status", "Analytics"])

    with profile_tab:
        st.caption("24-hour charging demand pattern showing peak and off-peak usage")
        st.plotly_chart(demand_profile_figure(state["demand_profile"]), key="charging_profile")

    with stations_tab:
        cols = st.columns(3)
        for i, station in enumerate(network.stations):
            with cols[i % 3]:
                _station_card(station)
        st.plotly_chart(station_power_figure(network.stations), key="charging_power")

    with analytics_tab:
        col1, col2 = st.columns(2)
        with col1:
            st.markdown("**Utilization Statistics**")
            _progress("Station Utilization", summary.station_utilization_pct)
            _progress("Power Utilization", summary.power_utilization_pct)
            _progress("Average Charge Level", summary.average_charge_level_pct)
            st.plotly_chart(station_status_figure(summary), key="charging_status")
        with col2:
            st.markdown("**Energy Consumption**")
            st.metric("Projected daily consumption", f"{summary.projected_daily_mwh:.1f} MWh")
            st.write(
                {
                    "Peak demand (estimated)": f"{summary.peak_demand_kw:.1f} kW",
                    "Off-peak demand": f"{summary.off_peak_demand_kw:.1f} kW",
                    "Average session time": f"{summary.average_session_hours} hours",
                }
            )
        st.dataframe(network.to_frame(), hide_index=True)


def main():
    """Main application."""
    init_state()
    state = st.session_state

    # Sidebar
    with st.sidebar:
        st.header("Real-time")
        timer: RefreshTimer = state["timer"]
        if st.toggle("Real-time updates", value=timer.realtime):
            timer.resume()
        else:
            timer.pause()
        st.caption("▶ Running" if timer.realtime else "⏸ Paused")

        if st.button("🔄 Refresh"):
            refresh_snapshot()

        if timer.realtime:
            st.divider()
            st.header("Real-time Settings")
            state["interval_seconds"] = st.slider(
                "Update Interval (s)",
                min_value=30,
                max_value=60,
                value=int(state["interval_seconds"]),
                step=5
            )

    run_every = state["interval_seconds"] if timer.realtime else None

    st.fragment(render_header, run_every=run_every)()

    overview, power_flow, efficiency, weather, charging = st.tabs(
        ["Overview", "Power Flow", "Efficiency", "Weather", "Charging"]
    )
    with overview:
        st.fragment(tab_overview, run_every=run_every)()
    with power_flow:
        st.fragment(tab_power_flow, run_every=run_every)()
    with efficiency:
        st.fragment(tab_efficiency, run_every=run_every)()
    with weather:
        st.fragment(tab_weather, run_every=run_every)()
    with charging:
        st.subheader("🚗 EV Charging Profiles")
        st.caption("Electric vehicle charging patterns and energy consumption")
        st.fragment(tab_charging, run_every=state["config"].charging.tick_seconds)()


if __name__ == "__main__":
    main()
