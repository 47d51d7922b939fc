from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, PositiveFloat, confloat, field_validator, model_validator


class PowerFlowSpec(BaseModel):
    generation_min_kw: confloat(ge=0) = Field(50.0, description="Lower bound of simulated generation (kW).")
    generation_max_kw: PositiveFloat = Field(150.0, description="Upper bound of simulated generation (kW).")
    transmission_loss: Tuple[float, float] = Field(
        (0.02, 0.05), description="Loss fraction range applied entering transmission."
    )
    distribution_loss: Tuple[float, float] = Field(
        (0.03, 0.07), description="Loss fraction range applied entering distribution."
    )
    consumption_loss: Tuple[float, float] = Field(
        (0.01, 0.02), description="Loss fraction range applied entering consumption."
    )

    @field_validator("transmission_loss", "distribution_loss", "consumption_loss")
    @classmethod
    def _valid_loss_range(cls, v: Tuple[float, float]) -> Tuple[float, float]:
        low, high = float(v[0]), float(v[1])
        if not (0.0 <= low <= high < 1.0):
            raise ValueError("loss range must satisfy 0 <= low <= high < 1")
        return (low, high)

    @model_validator(mode="after")
    def _ordered_generation(self) -> "PowerFlowSpec":
        if self.generation_min_kw > self.generation_max_kw:
            raise ValueError("generation_min_kw must not exceed generation_max_kw")
        return self


class ChargingSpec(BaseModel):
    n_stations: int = Field(12, ge=1, description="Number of simulated charging stations.")
    max_power_kw: PositiveFloat = Field(150.0, description="Per-station charger rating (kW).")
    tick_seconds: PositiveFloat = Field(2.0, description="Fixed interval between station updates (s).")
    charging_probability: confloat(ge=0, le=1) = Field(0.7, description="Chance a station starts charging.")
    offline_probability: confloat(ge=0, le=1) = Field(0.1, description="Chance a station starts offline.")
    vehicle_types: List[str] = Field(
        default_factory=lambda: ["Tesla Model 3", "BMW i3", "Nissan Leaf", "Audi e-tron"],
        min_length=1,
        description="Vehicle models drawn for charging sessions.",
    )


class RefreshSpec(BaseModel):
    realtime: bool = Field(True, description="Refresh snapshots automatically.")
    interval_seconds: int = Field(30, ge=30, le=60, description="Snapshot refresh interval (s).")

    @field_validator("interval_seconds")
    @classmethod
    def _five_second_steps(cls, v: int) -> int:
        if v % 5 != 0:
            raise ValueError("interval_seconds must be a multiple of 5")
        return v


class DashboardConfig(BaseModel):
    name: str = Field("Power System Dashboard", description="Dashboard title.")
    seed: Optional[int] = Field(None, description="Random seed. Leave unset for live randomness.")
    alert_probability: confloat(ge=0, le=1) = Field(
        0.2, description="Chance that a snapshot carries a transmission load alert."
    )
    history_length: int = Field(60, ge=1, description="Snapshots kept for the trend chart.")

    power_flow: PowerFlowSpec = Field(default_factory=PowerFlowSpec)
    charging: ChargingSpec = Field(default_factory=ChargingSpec)
    refresh: RefreshSpec = Field(default_factory=RefreshSpec)


def load_config(path: str | None = None) -> DashboardConfig:
    """
    Load a dashboard configuration from JSON.

    Missing sections fall back to defaults. Raises FileNotFoundError,
    json.JSONDecodeError or pydantic.ValidationError on bad input.
    """
    if not path:
        return DashboardConfig()
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config JSON not found: {path}")
    data = json.loads(p.read_text())
    return DashboardConfig.model_validate(data)
