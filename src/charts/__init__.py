"""
Charts
======

Plotly figure builders for the dashboard widgets. Nothing here depends
on Streamlit, so figures can be built and inspected in tests.
"""

from .charging import demand_profile_figure, station_power_figure, station_status_figure
from .gauges import GaugeBand, efficiency_gauges, gauge_band
from .power_flow import power_flow_figure, stage_losses_figure
from .system_3d import ViewState, system_figure
from .trends import trend_figure
from .weather import weather_map_figure

__all__ = [
    "demand_profile_figure",
    "station_power_figure",
    "station_status_figure",
    "GaugeBand",
    "efficiency_gauges",
    "gauge_band",
    "power_flow_figure",
    "stage_losses_figure",
    "ViewState",
    "system_figure",
    "trend_figure",
    "weather_map_figure",
]
