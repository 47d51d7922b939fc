"""
Pytest configuration and shared fixtures for dashboard tests.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from telemetry.config import ChargingSpec, DashboardConfig
from telemetry.power_flow import EfficiencyReadings, PowerFlow
from telemetry.weather import WeatherConditions


# ============== Random Source Fixtures ==============

@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so draws are repeatable."""
    return np.random.default_rng(42)


# ============== Model Fixtures ==============

@pytest.fixture
def config() -> DashboardConfig:
    return DashboardConfig(seed=123)


@pytest.fixture
def charging_spec() -> ChargingSpec:
    return ChargingSpec(n_stations=6, max_power_kw=100.0)


@pytest.fixture
def flow() -> PowerFlow:
    """A fixed power flow: 100 → 96 → 90 → 88.2 kW."""
    return PowerFlow(
        generation_kw=100.0,
        transmission_kw=96.0,
        distribution_kw=90.0,
        consumption_kw=88.2,
    )


@pytest.fixture
def efficiency() -> EfficiencyReadings:
    return EfficiencyReadings(generation_pct=95.0, transmission_pct=80.0, overall_pct=70.0)


@pytest.fixture
def weather() -> WeatherConditions:
    return WeatherConditions(
        temperature_c=28.0,
        wind_speed_ms=12.0,
        solar_irradiance_wm2=800.0,
        humidity_pct=60.0,
    )
