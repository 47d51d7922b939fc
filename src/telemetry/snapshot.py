"""
System Snapshots
================

A snapshot bundles one refresh worth of simulated readings: power flow,
efficiency, weather and alerts. Snapshots are produced on a timer and
kept in a bounded history for trend display.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Deque, List, Optional

import numpy as np
import pandas as pd

from .config import DashboardConfig
from .power_flow import EfficiencyReadings, PowerFlow, generate_efficiency, generate_power_flow
from .weather import WeatherConditions, generate_weather

logger = logging.getLogger(__name__)

HIGH_TRANSMISSION_LOAD = "High transmission load detected"

# Timed reruns may land this much before the interval elapses
DEFAULT_TOLERANCE_SECONDS = 1.0


@dataclass(frozen=True)
class SystemSnapshot:
    """
    Readings for one refresh of the dashboard.

    Attributes:
        timestamp: Time the snapshot was generated
        power_flow: Stage power values
        efficiency: Gauge readings
        weather: Ambient conditions
        alerts: Active alert messages
    """
    timestamp: datetime
    power_flow: PowerFlow
    efficiency: EfficiencyReadings
    weather: WeatherConditions
    alerts: List[str] = field(default_factory=list)

    @property
    def has_alerts(self) -> bool:
        return bool(self.alerts)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "power_flow": self.power_flow.to_dict(),
            "efficiency": self.efficiency.to_dict(),
            "weather": self.weather.to_dict(),
            "alerts": list(self.alerts),
        }


class SnapshotGenerator:
    """Produces snapshots from the configured distributions."""

    def __init__(self, config: Optional[DashboardConfig] = None, rng: Optional[np.random.Generator] = None):
        self.config = config or DashboardConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

    def next(self, timestamp: Optional[datetime] = None) -> SystemSnapshot:
        flow = generate_power_flow(self.rng, self.config.power_flow)
        efficiency = generate_efficiency(self.rng, flow)
        weather = generate_weather(self.rng)

        alerts: List[str] = []
        if float(self.rng.random()) < self.config.alert_probability:
            alerts.append(HIGH_TRANSMISSION_LOAD)
            logger.warning("%s (transmission %.1f kW)", HIGH_TRANSMISSION_LOAD, flow.transmission_kw)

        snapshot = SystemSnapshot(
            timestamp=timestamp or datetime.now(),
            power_flow=flow,
            efficiency=efficiency,
            weather=weather,
            alerts=alerts,
        )
        logger.debug("Generated snapshot at %s", snapshot.timestamp.isoformat())
        return snapshot


class SnapshotHistory:
    """Bounded, oldest-first record of recent snapshots."""

    def __init__(self, maxlen: int = 60):
        if maxlen < 1:
            raise ValueError("maxlen must be at least 1")
        self._items: Deque[SystemSnapshot] = deque(maxlen=maxlen)

    def __len__(self) -> int:
        return len(self._items)

    def append(self, snapshot: SystemSnapshot) -> None:
        self._items.append(snapshot)

    def latest(self) -> Optional[SystemSnapshot]:
        return self._items[-1] if self._items else None

    def snapshots(self) -> List[SystemSnapshot]:
        return list(self._items)

    def to_frame(self) -> pd.DataFrame:
        """One row per snapshot with the headline indicators."""
        columns = ["timestamp", "generation_kw", "consumption_kw", "overall_efficiency_pct", "n_alerts"]
        rows = [
            {
                "timestamp": s.timestamp,
                "generation_kw": s.power_flow.generation_kw,
                "consumption_kw": s.power_flow.consumption_kw,
                "overall_efficiency_pct": s.efficiency.overall_pct,
                "n_alerts": len(s.alerts),
            }
            for s in self._items
        ]
        return pd.DataFrame(rows, columns=columns)


class RefreshTimer:
    """
    Decides when the dashboard should draw a new snapshot.

    Times are plain seconds from a monotonic clock. A refresh is due once
    the interval has elapsed, less `tolerance_seconds` so that a timed
    rerun arriving slightly early still counts. While paused the timer is
    never due, but `mark` still records manual refreshes.
    """

    def __init__(
        self,
        interval_seconds: float,
        last_refresh: Optional[float] = None,
        paused: bool = False,
        tolerance_seconds: float = DEFAULT_TOLERANCE_SECONDS,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        if not (0 <= tolerance_seconds < interval_seconds):
            raise ValueError("tolerance_seconds must be in [0, interval_seconds)")
        self.interval_seconds = float(interval_seconds)
        self.last_refresh = last_refresh
        self.paused = paused
        self.tolerance_seconds = float(tolerance_seconds)

    @property
    def realtime(self) -> bool:
        return not self.paused

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def is_due(self, now: float) -> bool:
        if self.paused:
            return False
        if self.last_refresh is None:
            return True
        return now - self.last_refresh >= self.interval_seconds - self.tolerance_seconds

    def seconds_until_due(self, now: float) -> Optional[float]:
        """Seconds until the next automatic refresh, or None while paused."""
        if self.paused:
            return None
        if self.last_refresh is None:
            return 0.0
        return max(0.0, self.last_refresh + self.interval_seconds - self.tolerance_seconds - now)

    def mark(self, now: float) -> None:
        self.last_refresh = now

    def set_interval(self, interval_seconds: float) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        if self.tolerance_seconds >= interval_seconds:
            raise ValueError("interval_seconds must exceed tolerance_seconds")
        self.interval_seconds = float(interval_seconds)

