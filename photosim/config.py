"""
Configuration and type definitions for the photosynthesis simulation.

This module defines all constants, state representations, and configuration
for the day/night photosynthesis simulator.

State Vector:
    time_of_day: Simulated hour in [0, 24)
    day_count: Day counter (starts at 1)
    auto_play: Clock running and light/temperature derived from it
    light: Light intensity [0, 100]
    co2: CO2 concentration [0, 100]
    temperature: Air temperature [0, 50]
    growth_rate: Photosynthesis rate [0, 100]
    biomass: Accumulated plant biomass [initial, max]
    limiting_factor: Factor with the lowest effect score
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

import jax

# Scores and the night threshold are evaluated at the precision of the inputs
jax.config.update("jax_enable_x64", True)


class Channel(str, Enum):
    """Environmental inputs that can be set by hand."""

    LIGHT = "light"
    CO2 = "co2"
    TEMPERATURE = "temperature"


class LimitingFactor(str, Enum):
    """Factor currently holding back photosynthesis (Liebig's minimum)."""

    NONE = "none"
    LIGHT = "light"
    CO2 = "co2"
    TEMPERATURE = "temperature"


# Score order used for the argmin; earlier entries win exact ties
FACTOR_ORDER: tuple[LimitingFactor, ...] = (
    LimitingFactor.LIGHT,
    LimitingFactor.CO2,
    LimitingFactor.TEMPERATURE,
)


@dataclass(frozen=True)
class SimConfig:
    """
    Complete simulation configuration.

    Contains all constants for the photosynthesis model. Defaults give a
    24 hour cycle in 1200 ticks and a plant that reaches full size after
    a handful of simulated days of good conditions.
    """

    # Clock
    clock_speed: float = 0.02  # Simulated hours per tick
    hours_per_day: float = 24.0
    initial_time: float = 12.0  # Start at solar noon
    initial_day: int = 1

    # Light (single sine hump between dawn and dusk)
    dawn: float = 6.0
    dusk: float = 18.0
    peak_light: float = 100.0
    night_light_threshold: float = 1.0  # Below this photosynthesis stops

    # Temperature: base + amplitude * sin(2π (t - phase) / 24)
    # Phase of 8h puts the peak at 14:00 and the trough at 02:00
    base_temperature: float = 20.0
    temperature_amplitude: float = 10.0
    temperature_phase: float = 8.0

    # Effect scores
    # Saturation: 100 * x / (x + K), score is 50 at x = K
    half_saturation: float = 20.0
    # Temperature: 100 * exp(-(T - T_opt)² / (2σ²)), σ=10 gives the /200 falloff
    optimal_temperature: float = 25.0
    temperature_sigma: float = 10.0
    effect_cutoff: float = 1.0  # Scores below this snap to exactly 0

    # Biomass
    growth_coefficient: float = 0.0005  # Biomass per unit rate per tick
    initial_biomass: float = 15.0
    max_biomass: float = 200.0

    # Initial factor values
    initial_light: float = 100.0
    initial_co2: float = 40.0
    initial_temperature: float = 25.0

    # Channel bounds (lower bound is always 0)
    max_light: float = 100.0
    max_co2: float = 100.0
    max_temperature: float = 50.0

    # Rate chart sampling
    history_length: int = 20  # Samples kept in the rolling window
    history_interval: int = 60  # Ticks between samples

    # Above this rate nothing is reported as limiting in the label
    saturated_rate: float = 95.0

    def __post_init__(self) -> None:
        if self.clock_speed <= 0:
            raise ValueError("clock_speed must be positive")
        if self.hours_per_day <= 0:
            raise ValueError("hours_per_day must be positive")
        if not 0 <= self.dawn < self.dusk <= self.hours_per_day:
            raise ValueError("Need 0 <= dawn < dusk <= hours_per_day")
        if self.half_saturation <= 0:
            raise ValueError("half_saturation must be positive")
        if self.temperature_sigma <= 0:
            raise ValueError("temperature_sigma must be positive")
        if self.growth_coefficient < 0:
            raise ValueError("growth_coefficient must be nonnegative")
        if self.initial_biomass > self.max_biomass:
            raise ValueError("initial_biomass cannot exceed max_biomass")
        if self.history_length <= 0 or self.history_interval <= 0:
            raise ValueError("history_length and history_interval must be positive")

    def channel_max(self, channel: Channel) -> float:
        """Upper bound of a settable channel."""
        return {
            Channel.LIGHT: self.max_light,
            Channel.CO2: self.max_co2,
            Channel.TEMPERATURE: self.max_temperature,
        }[Channel(channel)]


class SimulationState(NamedTuple):
    """
    Complete simulation state at a given tick.

    Immutable: each pipeline stage returns a new state via `_replace`, so a
    published snapshot never changes underneath its readers.
    """

    time_of_day: float
    day_count: int
    auto_play: bool
    light: float
    co2: float
    temperature: float
    growth_rate: float
    biomass: float
    limiting_factor: LimitingFactor

    @classmethod
    def initial(cls, config: SimConfig | None = None) -> "SimulationState":
        """Create the start-of-process state.

        Args:
            config: Simulation configuration (defaults to SimConfig())
        """
        if config is None:
            config = SimConfig()
        return cls(
            time_of_day=config.initial_time % config.hours_per_day,
            day_count=config.initial_day,
            auto_play=True,
            light=config.initial_light,
            co2=config.initial_co2,
            temperature=config.initial_temperature,
            growth_rate=0.0,
            biomass=config.initial_biomass,
            limiting_factor=LimitingFactor.NONE,
        )

    def is_valid(self, config: SimConfig | None = None) -> bool:
        """Check that every field is inside its documented range."""
        if config is None:
            config = SimConfig()
        return all(
            [
                0.0 <= self.time_of_day < config.hours_per_day,
                self.day_count >= config.initial_day,
                0.0 <= self.light <= config.max_light,
                0.0 <= self.co2 <= config.max_co2,
                0.0 <= self.temperature <= config.max_temperature,
                0.0 <= self.growth_rate <= 100.0,
                config.initial_biomass <= self.biomass <= config.max_biomass,
            ]
        )
