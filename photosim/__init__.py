"""
Photosim Simulation Module

A day/night photosynthesis simulator for exploring Liebig's Law of the
Minimum: light, CO2 and temperature each map to an effect score, and the
lowest one sets the rate at which the plant grows.

Modules:
    config: Constants, enums and the immutable simulation state
    clock: Time-of-day and day counter
    environment: Clock-driven light and temperature
    growth: Effect scores, photosynthesis rate, biomass integration
    history: Rolling window of sampled rates for the chart
    controller: Tick pipeline and UI commands
    rollout: Headless multi-tick runs
    sensitivity: Limiting factor analysis
    schema: pydantic schemata for the external interface
"""

from photosim.clock import advance, format_clock
from photosim.config import (
    Channel,
    LimitingFactor,
    SimConfig,
    SimulationState,
)
from photosim.controller import SimulationController
from photosim.environment import (
    derive_environment,
    derive_environment_batch,
    derive_light,
    derive_temperature,
)
from photosim.growth import (
    compute_rate,
    compute_rate_batch,
    effect_score,
    integrate_biomass,
    limiting_label,
    temperature_effect,
)
from photosim.history import RateHistory
from photosim.rollout import Trajectory, run_cycle, ticks_for_days
from photosim.schema import OverrideRequest, SnapshotSchema, apply_override
from photosim.sensitivity import (
    factor_sweep,
    find_limiting_transitions,
    limiting_report,
    rate_gradient,
)

__all__ = [
    # Config
    "Channel",
    "LimitingFactor",
    "SimConfig",
    "SimulationState",
    # Clock
    "advance",
    "format_clock",
    # Environment
    "derive_environment",
    "derive_environment_batch",
    "derive_light",
    "derive_temperature",
    # Growth
    "compute_rate",
    "compute_rate_batch",
    "effect_score",
    "integrate_biomass",
    "limiting_label",
    "temperature_effect",
    # Simulation
    "RateHistory",
    "SimulationController",
    "Trajectory",
    "run_cycle",
    "ticks_for_days",
    # Analysis
    "factor_sweep",
    "find_limiting_transitions",
    "limiting_report",
    "rate_gradient",
    # Interface schemata
    "OverrideRequest",
    "SnapshotSchema",
    "apply_override",
]
