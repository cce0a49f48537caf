"""
Headless simulation rollout.

Drives a SimulationController for a fixed number of ticks, standing in for
the render loop, and records every published snapshot. Scheduled manual
overrides let a run script the same slider moves a user would make.

The result is a trajectory containing the full history of states plus
the controller's sampled rate window.
"""

from collections import Counter
from dataclasses import dataclass

import jax.numpy as jnp
from jax import Array

from photosim.config import Channel, LimitingFactor, SimConfig, SimulationState
from photosim.controller import SimulationController

# Tick index -> commands applied before that tick runs
OverrideSchedule = dict[int, list[tuple[Channel | str, float]]]


@dataclass
class Trajectory:
    """
    Complete record of a simulation run.

    Contains:
    - states: SimulationState at each tick (including initial)
    - rate_history: Sampled rate window at the end of the run
    """

    states: list[SimulationState]
    rate_history: list[float]

    def get_state_arrays(self) -> dict[str, Array]:
        """Convert state history to arrays for plotting."""
        return {
            "time_of_day": jnp.array([s.time_of_day for s in self.states]),
            "day_count": jnp.array([s.day_count for s in self.states]),
            "light": jnp.array([s.light for s in self.states]),
            "co2": jnp.array([s.co2 for s in self.states]),
            "temperature": jnp.array([s.temperature for s in self.states]),
            "growth_rate": jnp.array([s.growth_rate for s in self.states]),
            "biomass": jnp.array([s.biomass for s in self.states]),
        }

    def limiting_counts(self) -> dict[LimitingFactor, int]:
        """Number of ticks each factor was limiting (initial state excluded)."""
        counts = Counter(s.limiting_factor for s in self.states[1:])
        return {factor: counts.get(factor, 0) for factor in LimitingFactor}

    def get_scalar_summary(self) -> dict[str, float]:
        """
        Compute scalar diagnostic summary of the run.

        Returns a dictionary with key metrics for quick evaluation:
        - FinalBiomass / BiomassGain: Growth over the run
        - DaysElapsed: Day counter change
        - MeanRate / PeakRate: Photosynthesis rate statistics
        - DarkTicks: Ticks with the rate forced to 0 by darkness
        - <Factor>Limited: Ticks each factor was limiting
        """
        first, final = self.states[0], self.states[-1]
        rates = self.get_state_arrays()["growth_rate"][1:]
        counts = self.limiting_counts()
        num_ticks = len(self.states) - 1

        return {
            "Ticks": num_ticks,
            "FinalBiomass": final.biomass,
            "BiomassGain": final.biomass - first.biomass,
            "DaysElapsed": final.day_count - first.day_count,
            "MeanRate": float(jnp.mean(rates)) if num_ticks else 0.0,
            "PeakRate": float(jnp.max(rates)) if num_ticks else 0.0,
            "DarkTicks": counts[LimitingFactor.NONE],
            "LightLimited": counts[LimitingFactor.LIGHT],
            "CO2Limited": counts[LimitingFactor.CO2],
            "TemperatureLimited": counts[LimitingFactor.TEMPERATURE],
        }

    def print_summary(self) -> None:
        """Print a formatted summary table to stdout."""
        summary = self.get_scalar_summary()
        print("\n" + "=" * 40)
        print("SIMULATION SUMMARY")
        print("=" * 40)
        for key, value in summary.items():
            if isinstance(value, int):
                print(f"{key:20s}: {value:>10d}")
            else:
                print(f"{key:20s}: {value:>10.3f}")
        print("=" * 40)


def ticks_for_days(days: float, config: SimConfig) -> int:
    """Number of auto-play ticks spanning `days` simulated days."""
    return round(days * config.hours_per_day / config.clock_speed)


def run_cycle(
    config: SimConfig,
    num_ticks: int,
    dt: float = 1.0,
    controller: SimulationController | None = None,
    overrides: OverrideSchedule | None = None,
) -> Trajectory:
    """
    Run the simulation for a fixed number of ticks.

    Args:
        config: Simulation configuration (ignored if a controller is given)
        num_ticks: Number of ticks to run
        dt: Tick length passed to every tick
        controller: Optional controller to continue from
        overrides: Optional schedule of manual overrides keyed by tick index

    Returns:
        Trajectory containing full simulation history
    """
    if controller is None:
        controller = SimulationController(config)
    if overrides is None:
        overrides = {}

    states: list[SimulationState] = [controller.snapshot]

    for tick in range(num_ticks):
        for channel, value in overrides.get(tick, []):
            controller.set_manual_override(channel, value)
        states.append(controller.tick(dt))

    return Trajectory(states=states, rate_history=controller.history.samples())
