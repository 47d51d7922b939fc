"""
EV Charging Model
=================

Simulated network of EV charging stations with:
- Per-station status, charge level and power draw
- Fixed-interval session progression
- Network utilization summary
- 24-hour charging demand profile
"""

import logging
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import List, Optional

import numpy as np
import pandas as pd

from .config import ChargingSpec

logger = logging.getLogger(__name__)

# Longest backlog of ticks applied in one catch-up
MAX_CATCHUP_TICKS = 60

AVERAGE_SESSION_HOURS = 2.5


class StationStatus(Enum):
    """Charging station states."""
    CHARGING = "charging"
    AVAILABLE = "available"
    OFFLINE = "offline"


@dataclass(frozen=True)
class ChargingStation:
    """
    EV charging station record.

    Attributes:
        id: Station identifier (CS-001 ...)
        name: Display name
        status: Current station state
        current_power_kw: Power delivered to the vehicle (kW)
        max_power_kw: Charger rating (kW)
        vehicle_type: Vehicle model plugged in
        charge_level_pct: Vehicle battery level (%)
        time_remaining_min: Estimated minutes until the session ends
    """
    id: str
    name: str
    status: StationStatus
    current_power_kw: float
    max_power_kw: float
    vehicle_type: str
    charge_level_pct: float
    time_remaining_min: int

    def __post_init__(self):
        """Validate station fields."""
        if self.max_power_kw <= 0:
            raise ValueError("max_power_kw must be positive")
        if not (0 <= self.current_power_kw <= self.max_power_kw):
            raise ValueError("current_power_kw must be between 0 and max_power_kw")
        if not (0 <= self.charge_level_pct <= 100):
            raise ValueError("charge_level_pct must be between 0 and 100")
        if self.time_remaining_min < 0:
            raise ValueError("time_remaining_min must be non-negative")

    @property
    def power_utilization_pct(self) -> float:
        return self.current_power_kw / self.max_power_kw * 100.0

    @property
    def time_remaining_label(self) -> str:
        hours, minutes = divmod(self.time_remaining_min, 60)
        return f"{hours}h {minutes}m"

    def advance(self, rng: np.random.Generator) -> "ChargingStation":
        """
        Progress the session by one interval.

        Only charging stations change. Power tapers to 80% of itself each
        interval once the battery is at or above 80%; a full battery frees
        the station.
        """
        if self.status is not StationStatus.CHARGING:
            return self

        level = min(self.charge_level_pct + float(rng.uniform(0.0, 2.0)), 100.0)
        remaining = max(self.time_remaining_min - 1, 0)
        power = self.current_power_kw if level < 80.0 else self.current_power_kw * 0.8

        if level >= 100.0:
            logger.info("%s finished charging %s", self.id, self.vehicle_type)
            return replace(
                self,
                status=StationStatus.AVAILABLE,
                charge_level_pct=100.0,
                current_power_kw=0.0,
                time_remaining_min=0,
            )
        return replace(self, charge_level_pct=level, current_power_kw=power, time_remaining_min=remaining)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        return data


def generate_stations(
    rng: np.random.Generator,
    spec: Optional[ChargingSpec] = None,
) -> List[ChargingStation]:
    """
    Create the initial station fleet.

    Charging and offline are drawn independently per station; an offline
    station never draws power.
    """
    spec = spec or ChargingSpec()
    stations: List[ChargingStation] = []
    for i in range(1, spec.n_stations + 1):
        is_charging = float(rng.random()) < spec.charging_probability
        is_offline = float(rng.random()) < spec.offline_probability
        vehicle = spec.vehicle_types[int(rng.integers(len(spec.vehicle_types)))]

        if is_offline:
            status = StationStatus.OFFLINE
        elif is_charging:
            status = StationStatus.CHARGING
        else:
            status = StationStatus.AVAILABLE

        if status is StationStatus.CHARGING:
            low = min(20.0, spec.max_power_kw)
            power = float(rng.uniform(low, spec.max_power_kw))
            level = float(rng.uniform(20.0, 80.0))
            remaining = int(rng.integers(0, 180))
        else:
            power, level, remaining = 0.0, 0.0, 0

        stations.append(
            ChargingStation(
                id=f"CS-{i:03d}",
                name=f"Station {i}",
                status=status,
                current_power_kw=power,
                max_power_kw=spec.max_power_kw,
                vehicle_type=vehicle,
                charge_level_pct=level,
                time_remaining_min=remaining,
            )
        )
    return stations


def step_stations(stations: List[ChargingStation], rng: np.random.Generator) -> List[ChargingStation]:
    return [s.advance(rng) for s in stations]


@dataclass(frozen=True)
class ChargingSummary:
    """Network-level charging indicators."""
    total_power_kw: float
    active: int
    available: int
    offline: int
    station_utilization_pct: float
    power_utilization_pct: float
    average_charge_level_pct: float
    projected_daily_mwh: float
    peak_demand_kw: float
    off_peak_demand_kw: float
    average_session_hours: float = AVERAGE_SESSION_HOURS

    @property
    def n_stations(self) -> int:
        return self.active + self.available + self.offline

    def to_dict(self) -> dict:
        return asdict(self)


def summarize(stations: List[ChargingStation]) -> ChargingSummary:
    """Aggregate station records into network indicators."""
    n = len(stations)
    charging = [s for s in stations if s.status is StationStatus.CHARGING]
    total_power = sum(s.current_power_kw for s in stations)
    capacity = sum(s.max_power_kw for s in stations)

    return ChargingSummary(
        total_power_kw=total_power,
        active=len(charging),
        available=sum(1 for s in stations if s.status is StationStatus.AVAILABLE),
        offline=sum(1 for s in stations if s.status is StationStatus.OFFLINE),
        station_utilization_pct=(len(charging) / n * 100.0) if n else 0.0,
        power_utilization_pct=(total_power / capacity * 100.0) if capacity > 0 else 0.0,
        average_charge_level_pct=(
            sum(s.charge_level_pct for s in charging) / len(charging) if charging else 0.0
        ),
        projected_daily_mwh=total_power * 24.0 / 1000.0,
        peak_demand_kw=total_power * 1.5,
        off_peak_demand_kw=total_power * 0.6,
    )


def is_peak_hour(hour: int) -> bool:
    return 7 <= hour <= 9 or 17 <= hour <= 20


def is_night_hour(hour: int) -> bool:
    return hour >= 22 or hour <= 6


def demand_profile(rng: np.random.Generator) -> np.ndarray:
    """
    Hourly network charging demand over 24 hours (kW).

    Night hours carry the heaviest (cheap tariff) charging, commute peaks
    the next heaviest, and daytime the lightest.
    """
    profile = np.zeros(24, dtype=float)
    for hour in range(24):
        if is_peak_hour(hour):
            profile[hour] = 800.0 + rng.random() * 400.0
        elif is_night_hour(hour):
            profile[hour] = 1200.0 + rng.random() * 600.0
        else:
            profile[hour] = 200.0 + rng.random() * 300.0
    return profile


@dataclass
class ChargingNetwork:
    """
    Station fleet with its own clock.

    Attributes:
        spec: Charging configuration
        rng: Random generator driving session progression
        stations: Current station records
        last_tick: Clock reading (s) of the last applied tick
    """
    spec: ChargingSpec
    rng: np.random.Generator
    stations: List[ChargingStation] = field(default_factory=list)
    last_tick: Optional[float] = None

    @classmethod
    def create(cls, spec: ChargingSpec, rng: np.random.Generator, now: Optional[float] = None) -> "ChargingNetwork":
        return cls(spec=spec, rng=rng, stations=generate_stations(rng, spec), last_tick=now)

    def tick(self) -> None:
        self.stations = step_stations(self.stations, self.rng)

    def advance_to(self, now: float) -> int:
        """
        Apply every whole tick interval elapsed since the last tick.

        Returns:
            Number of ticks applied
        """
        if self.last_tick is None:
            self.last_tick = now
            return 0

        elapsed = now - self.last_tick
        n_ticks = int(elapsed // self.spec.tick_seconds)
        if n_ticks <= 0:
            return 0

        applied = min(n_ticks, MAX_CATCHUP_TICKS)
        if applied < n_ticks:
            logger.debug("Dropping %d backlog ticks", n_ticks - applied)
        for _ in range(applied):
            self.tick()
        self.last_tick += n_ticks * self.spec.tick_seconds
        return applied

    def summary(self) -> ChargingSummary:
        return summarize(self.stations)

    def to_frame(self) -> pd.DataFrame:
        """Station table for display."""
        columns = [
            "id", "name", "status", "vehicle_type", "charge_level_pct",
            "current_power_kw", "max_power_kw", "time_remaining_min",
        ]
        if not self.stations:
            return pd.DataFrame(columns=columns)
        df = pd.DataFrame([s.to_dict() for s in self.stations])
        return df[columns]
