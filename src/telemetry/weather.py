"""
Weather Model
=============

Synthetic environmental conditions affecting the power system and
their qualitative impact on renewables and cooling load.
"""

from dataclasses import dataclass
from typing import List

import numpy as np


# Map positions (fractions of width/height) of the weather stations
STATION_POSITIONS = [(0.2, 0.3), (0.5, 0.6), (0.8, 0.4)]


def _clamp01(v: float) -> float:
    return min(max(v, 0.0), 1.0)


@dataclass(frozen=True)
class WeatherConditions:
    """
    Ambient conditions across the service area.

    Attributes:
        temperature_c: Air temperature (°C)
        wind_speed_ms: Wind speed (m/s)
        solar_irradiance_wm2: Global horizontal irradiance (W/m²)
        humidity_pct: Relative humidity (%)
    """
    temperature_c: float
    wind_speed_ms: float
    solar_irradiance_wm2: float
    humidity_pct: float

    def __post_init__(self):
        if self.wind_speed_ms < 0:
            raise ValueError("wind_speed_ms must be non-negative")
        if self.solar_irradiance_wm2 < 0:
            raise ValueError("solar_irradiance_wm2 must be non-negative")
        if not (0 <= self.humidity_pct <= 100):
            raise ValueError("humidity_pct must be between 0 and 100")

    @property
    def temperature_intensity(self) -> float:
        """Temperature normalized over 15-35 °C."""
        return _clamp01((self.temperature_c - 15.0) / 20.0)

    @property
    def wind_intensity(self) -> float:
        return _clamp01(self.wind_speed_ms / 20.0)

    @property
    def solar_intensity(self) -> float:
        return _clamp01(self.solar_irradiance_wm2 / 1000.0)

    def to_dict(self) -> dict:
        return {
            "temperature": self.temperature_c,
            "wind_speed": self.wind_speed_ms,
            "solar_irradiance": self.solar_irradiance_wm2,
            "humidity": self.humidity_pct,
        }


@dataclass(frozen=True)
class ImpactEntry:
    """
    One line of the weather impact analysis.

    An unfavorable entry is shown as a warning, or as critical when it
    drives load up rather than reducing generation.
    """
    label: str
    status: str
    favorable: bool
    critical: bool = False

    @property
    def status_color(self) -> str:
        if self.favorable:
            return "green"
        return "red" if self.critical else "orange"


@dataclass(frozen=True)
class WeatherImpact:
    solar: ImpactEntry
    wind: ImpactEntry
    cooling: ImpactEntry

    def entries(self) -> List[ImpactEntry]:
        return [self.solar, self.wind, self.cooling]


@dataclass(frozen=True)
class StationReading:
    """Temperature reported by a weather station placed on the map."""
    name: str
    x: float
    y: float
    temperature_c: float


def generate_weather(rng: np.random.Generator) -> WeatherConditions:
    return WeatherConditions(
        temperature_c=float(rng.uniform(22.0, 32.0)),
        wind_speed_ms=float(rng.uniform(5.0, 20.0)),
        solar_irradiance_wm2=float(rng.uniform(600.0, 1000.0)),
        humidity_pct=float(rng.uniform(45.0, 75.0)),
    )


def assess_impact(weather: WeatherConditions) -> WeatherImpact:
    """
    Classify how current conditions affect generation and load.

    - Solar is optimal above 700 W/m²
    - Wind output is high above 10 m/s
    - Cooling load increases above 25 °C
    """
    solar_ok = weather.solar_irradiance_wm2 > 700.0
    wind_ok = weather.wind_speed_ms > 10.0
    hot = weather.temperature_c > 25.0
    return WeatherImpact(
        solar=ImpactEntry("Solar Generation Impact", "Optimal" if solar_ok else "Reduced", solar_ok),
        wind=ImpactEntry("Wind Generation Impact", "High Output" if wind_ok else "Moderate Output", wind_ok),
        cooling=ImpactEntry("Cooling Load", "Increased" if hot else "Normal", not hot, critical=True),
    )


def station_readings(weather: WeatherConditions, rng: np.random.Generator) -> List[StationReading]:
    """Local readings scattered ±2 °C around the ambient temperature."""
    return [
        StationReading(
            name=f"WS-{i + 1}",
            x=x,
            y=y,
            temperature_c=weather.temperature_c + float(rng.uniform(-2.0, 2.0)),
        )
        for i, (x, y) in enumerate(STATION_POSITIONS)
    ]
