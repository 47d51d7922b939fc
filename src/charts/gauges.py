"""
Efficiency Gauges
=================

Semicircular 0-100% gauges with color bands:
red below 75, amber below 90, green from 90.
"""

from enum import Enum
from typing import List, Tuple

import plotly.graph_objects as go

from telemetry.power_flow import EfficiencyReadings


class GaugeBand(Enum):
    """Gauge color bands (value is the bar color)."""
    CRITICAL = "#ef4444"
    WARNING = "#f59e0b"
    GOOD = "#10b981"

    @property
    def color(self) -> str:
        return self.value


WARNING_THRESHOLD = 75.0
GOOD_THRESHOLD = 90.0


def clamp_pct(value: float) -> float:
    return min(max(float(value), 0.0), 100.0)


def gauge_band(value: float) -> GaugeBand:
    v = clamp_pct(value)
    if v >= GOOD_THRESHOLD:
        return GaugeBand.GOOD
    if v >= WARNING_THRESHOLD:
        return GaugeBand.WARNING
    return GaugeBand.CRITICAL


def _indicator(value: float, label: str, domain_x: Tuple[float, float]) -> go.Indicator:
    v = clamp_pct(value)
    return go.Indicator(
        mode="gauge+number",
        value=v,
        number={'suffix': "%", 'valueformat': ".1f", 'font': {'size': 22}},
        title={'text': label, 'font': {'size': 14}},
        domain={'x': list(domain_x), 'y': [0, 1]},
        gauge={
            'axis': {'range': [0, 100], 'tickwidth': 1},
            'bar': {'color': gauge_band(v).color},
            'bgcolor': "white",
            'steps': [
                {'range': [0, WARNING_THRESHOLD], 'color': "#fde8e8"},
                {'range': [WARNING_THRESHOLD, GOOD_THRESHOLD], 'color': "#fef3c7"},
                {'range': [GOOD_THRESHOLD, 100], 'color': "#d1fae5"},
            ],
        },
    )


def efficiency_gauge(value: float, label: str) -> go.Figure:
    fig = go.Figure(_indicator(value, label, (0.0, 1.0)))
    fig.update_layout(height=200, margin=dict(l=20, r=20, t=40, b=10))
    return fig


def efficiency_gauges(readings: EfficiencyReadings, detailed: bool = False) -> go.Figure:
    """
    Overall efficiency gauge, or generation / transmission / overall
    side by side when detailed.
    """
    if not detailed:
        return efficiency_gauge(readings.overall_pct, "System Efficiency")

    panels: List[Tuple[float, str]] = [
        (readings.generation_pct, "Generation"),
        (readings.transmission_pct, "Transmission"),
        (readings.overall_pct, "Overall"),
    ]
    domains = [(0.0, 0.3), (0.35, 0.65), (0.7, 1.0)]

    fig = go.Figure()
    for (value, label), domain in zip(panels, domains):
        fig.add_trace(_indicator(value, label, domain))
    fig.update_layout(height=220, margin=dict(l=20, r=20, t=40, b=10))
    return fig
