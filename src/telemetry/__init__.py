"""
Telemetry
=========

Synthetic telemetry for the power system dashboard:
- power_flow: generation → transmission → distribution → consumption
- weather: ambient conditions and their impact
- charging: EV charging station fleet
- snapshot: timed snapshots, alerts and history
- config: pydantic configuration models
"""

from .charging import ChargingNetwork, ChargingStation, ChargingSummary, StationStatus
from .config import DashboardConfig, load_config
from .power_flow import EfficiencyReadings, PowerFlow, Stage
from .snapshot import RefreshTimer, SnapshotGenerator, SnapshotHistory, SystemSnapshot
from .weather import WeatherConditions, WeatherImpact

__version__ = "1.0.0"

__all__ = [
    "ChargingNetwork",
    "ChargingStation",
    "ChargingSummary",
    "StationStatus",
    "DashboardConfig",
    "load_config",
    "EfficiencyReadings",
    "PowerFlow",
    "Stage",
    "RefreshTimer",
    "SnapshotGenerator",
    "SnapshotHistory",
    "SystemSnapshot",
    "WeatherConditions",
    "WeatherImpact",
]
