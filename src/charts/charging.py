"""
Charging Charts
===============

Demand profile and station status charts for the EV charging tab.
"""

from typing import Dict, List

import numpy as np
import plotly.graph_objects as go

from telemetry.charging import ChargingStation, ChargingSummary, StationStatus

STATUS_COLORS: Dict[StationStatus, str] = {
    StationStatus.CHARGING: "#10b981",
    StationStatus.AVAILABLE: "#3b82f6",
    StationStatus.OFFLINE: "#ef4444",
}

DEMAND_AXIS_MAX_KW = 2000.0


def demand_profile_figure(profile: np.ndarray) -> go.Figure:
    """24-hour charging demand with peak windows shaded."""
    hours = np.arange(len(profile))

    fig = go.Figure()
    for start, end in [(7, 9), (17, 20)]:
        fig.add_vrect(x0=start, x1=end + 1, fillcolor="#f59e0b", opacity=0.08, line_width=0)

    fig.add_trace(go.Scatter(
        x=hours,
        y=profile,
        mode='lines',
        name='Demand (kW)',
        fill='tozeroy',
        fillcolor='rgba(59, 130, 246, 0.1)',
        line=dict(color='#3b82f6', width=3)
    ))

    ticks = list(range(0, 25, 4))
    fig.update_layout(
        title="24-Hour Charging Demand Profile",
        xaxis=dict(title="Hour", range=[0, 24], tickvals=ticks, ticktext=[f"{h}:00" for h in ticks]),
        yaxis=dict(title="Demand", range=[0, DEMAND_AXIS_MAX_KW], dtick=500, ticksuffix=" kW"),
        height=300
    )
    return fig


def station_status_figure(summary: ChargingSummary) -> go.Figure:
    counts = {
        StationStatus.CHARGING: summary.active,
        StationStatus.AVAILABLE: summary.available,
        StationStatus.OFFLINE: summary.offline,
    }
    fig = go.Figure(data=[
        go.Bar(
            x=[s.value.capitalize() for s in counts],
            y=list(counts.values()),
            marker_color=[STATUS_COLORS[s] for s in counts],
            text=list(counts.values()),
            textposition='outside'
        )
    ])
    fig.update_layout(
        xaxis_title="Status",
        yaxis_title="Stations",
        height=280
    )
    return fig


def station_power_figure(stations: List[ChargingStation]) -> go.Figure:
    """Power draw per station against its charger rating."""
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[s.name for s in stations],
        y=[s.current_power_kw for s in stations],
        marker_color=[STATUS_COLORS[s.status] for s in stations],
        name='Power (kW)'
    ))
    if stations:
        fig.add_hline(y=max(s.max_power_kw for s in stations), line_dash="dash", line_color="gray",
                      annotation_text="Charger rating")
    fig.update_layout(
        xaxis_title="Station",
        yaxis_title="Power (kW)",
        height=300
    )
    return fig
