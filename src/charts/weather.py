"""
Weather Overlay Map
===================

Schematic map of the service area: temperature gradient, wind arrows,
solar overlay and weather station readings.
"""

import math
from typing import List

import numpy as np
import plotly.graph_objects as go

from telemetry.weather import StationReading, WeatherConditions

N_WIND_ARROWS = 10


def temperature_colorscale(weather: WeatherConditions) -> list:
    """Blue (cold side) to red, the red strengthening with temperature."""
    return [
        [0.0, "rgba(59, 130, 246, 0.3)"],
        [1.0, f"rgba(239, 68, 68, {weather.temperature_intensity * 0.5:.3f})"],
    ]


def wind_arrows(weather: WeatherConditions) -> List[dict]:
    """
    Arrow segments (tail -> head) in map coordinates.

    Length and opacity grow with wind speed.
    """
    length = 0.04 + 0.08 * weather.wind_intensity
    arrows = []
    for i in range(N_WIND_ARROWS):
        x = i / N_WIND_ARROWS + 0.03
        y = 0.5 + math.sin(i * 0.5) * 0.12
        arrows.append({"x0": x, "y0": y, "x1": x + length, "y1": y + 0.04})
    return arrows


def weather_map_figure(weather: WeatherConditions, stations: List[StationReading]) -> go.Figure:
    fig = go.Figure()

    # Temperature gradient background
    xs = np.linspace(0.0, 1.0, 50)
    fig.add_trace(go.Heatmap(
        x=xs,
        y=[0.0, 1.0],
        z=[xs, xs],
        colorscale=temperature_colorscale(weather),
        showscale=False,
        hoverinfo='skip'
    ))

    # Solar overlay
    fig.add_trace(go.Scatter(
        x=[0, 1, 1, 0, 0], y=[0, 0, 1, 1, 0],
        mode='lines',
        fill='toself',
        fillcolor=f"rgba(251, 191, 36, {weather.solar_intensity * 0.3:.3f})",
        line=dict(width=0),
        hoverinfo='skip',
        showlegend=False
    ))

    arrow_color = f"rgba(34, 197, 94, {weather.wind_intensity:.3f})"
    for arrow in wind_arrows(weather):
        fig.add_annotation(
            x=arrow["x1"], y=arrow["y1"],
            ax=arrow["x0"], ay=arrow["y0"],
            xref="x", yref="y", axref="x", ayref="y",
            showarrow=True,
            arrowhead=2,
            arrowwidth=2,
            arrowcolor=arrow_color,
            text=""
        )

    # Canvas-style positions (y down) flipped to plot coordinates
    fig.add_trace(go.Scatter(
        x=[s.x for s in stations],
        y=[1.0 - s.y for s in stations],
        mode='markers+text',
        marker=dict(size=12, color="#3b82f6"),
        text=[f"{s.temperature_c:.1f}°C" for s in stations],
        textposition='top center',
        textfont=dict(color="#1e293b", size=11),
        customdata=[s.name for s in stations],
        hovertemplate="%{customdata}: %{text}<extra></extra>",
        showlegend=False
    ))

    fig.add_annotation(
        x=0.02, y=0.98, xanchor="left", yanchor="top",
        text="<b>Weather Overlay</b><br>Real-time environmental conditions",
        showarrow=False,
        align="left",
        bgcolor="rgba(255, 255, 255, 0.9)",
        font=dict(size=11)
    )

    fig.update_layout(
        height=256,
        margin=dict(l=0, r=0, t=0, b=0),
        xaxis=dict(visible=False, range=[0, 1]),
        yaxis=dict(visible=False, range=[0, 1])
    )
    return fig
