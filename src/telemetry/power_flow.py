"""
Power Flow Model
================

Simulated energy pipeline from generation to consumption. Each stage
receives the previous stage's power minus a random loss.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

import numpy as np

from .config import PowerFlowSpec

logger = logging.getLogger(__name__)


class Stage(Enum):
    """Power flow stages in pipeline order."""
    GENERATION = "generation"
    TRANSMISSION = "transmission"
    DISTRIBUTION = "distribution"
    CONSUMPTION = "consumption"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class PowerFlow:
    """
    Power at each stage of the distribution pipeline.

    Attributes:
        generation_kw: Power produced at the generators (kW)
        transmission_kw: Power delivered to the transmission network (kW)
        distribution_kw: Power delivered to the distribution network (kW)
        consumption_kw: Power reaching consumers (kW)
    """
    generation_kw: float
    transmission_kw: float
    distribution_kw: float
    consumption_kw: float

    def __post_init__(self):
        """Validate stage values."""
        values = [self.generation_kw, self.transmission_kw, self.distribution_kw, self.consumption_kw]
        if any(v < 0 for v in values):
            raise ValueError("stage power must be non-negative")
        for upstream, downstream in zip(values, values[1:]):
            if downstream > upstream + 1e-9:
                raise ValueError("stage power cannot exceed the previous stage")

    def value(self, stage: Stage) -> float:
        return getattr(self, f"{stage.value}_kw")

    def stage_values(self) -> Dict[Stage, float]:
        """Stage power keyed by stage, in pipeline order."""
        return {stage: self.value(stage) for stage in Stage}

    def losses(self) -> Dict[Stage, float]:
        """
        Power lost entering each downstream stage.

        Returns:
            Dict of {stage: kW lost between the previous stage and this one}
        """
        stages = list(Stage)
        return {
            stage: self.value(prev) - self.value(stage)
            for prev, stage in zip(stages, stages[1:])
        }

    @property
    def overall_efficiency(self) -> float:
        """End-to-end efficiency (%)."""
        if self.generation_kw <= 0:
            return 0.0
        return self.consumption_kw / self.generation_kw * 100.0

    @property
    def active_loads(self) -> int:
        """Number of active loads, one per 10 kW consumed."""
        return int(self.consumption_kw // 10)

    def to_dict(self) -> dict:
        return {stage.value: self.value(stage) for stage in Stage}


@dataclass(frozen=True)
class EfficiencyReadings:
    """
    Efficiency indicators shown on the gauges.

    Attributes:
        generation_pct: Generator efficiency (%)
        transmission_pct: Transmission efficiency (%)
        overall_pct: Actual end-to-end efficiency of the power flow (%)
    """
    generation_pct: float
    transmission_pct: float
    overall_pct: float

    def __post_init__(self):
        for name in ("generation_pct", "transmission_pct", "overall_pct"):
            v = getattr(self, name)
            if not (0.0 <= v <= 100.0):
                raise ValueError(f"{name} must be between 0 and 100")

    def to_dict(self) -> dict:
        return {
            "generation": self.generation_pct,
            "transmission": self.transmission_pct,
            "overall": self.overall_pct,
        }


def _draw_loss(rng: np.random.Generator, bounds) -> float:
    low, high = bounds
    return float(rng.uniform(low, high))


def generate_power_flow(
    rng: np.random.Generator,
    spec: Optional[PowerFlowSpec] = None,
) -> PowerFlow:
    """
    Draw a random power flow.

    Generation is uniform within the configured bounds; every later stage
    keeps (1 - loss) of the previous one.
    """
    spec = spec or PowerFlowSpec()
    generation = float(rng.uniform(spec.generation_min_kw, spec.generation_max_kw))
    transmission = generation * (1.0 - _draw_loss(rng, spec.transmission_loss))
    distribution = transmission * (1.0 - _draw_loss(rng, spec.distribution_loss))
    consumption = distribution * (1.0 - _draw_loss(rng, spec.consumption_loss))

    logger.debug("Power flow: gen=%.1f kW, consumption=%.1f kW", generation, consumption)
    return PowerFlow(
        generation_kw=generation,
        transmission_kw=transmission,
        distribution_kw=distribution,
        consumption_kw=consumption,
    )


def generate_efficiency(rng: np.random.Generator, flow: PowerFlow) -> EfficiencyReadings:
    """Draw equipment efficiencies and attach the flow's actual overall efficiency."""
    return EfficiencyReadings(
        generation_pct=float(rng.uniform(92.0, 98.0)),
        transmission_pct=float(rng.uniform(95.0, 98.0)),
        overall_pct=flow.overall_efficiency,
    )
