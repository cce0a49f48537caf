"""
Clock-driven environmental signals.

Light and temperature follow the time of day:

    light(t) = peak * sin(π (t - dawn) / (dusk - dawn))   for dawn <= t <= dusk
             = 0                                           otherwise

    temperature(t) = base + amplitude * sin(2π (t - phase) / 24)

CO2 is never derived from the clock; it is always set by hand.
All functions accept scalars or arrays.
"""

import jax.numpy as jnp
from jax import Array

from photosim.config import SimConfig


def derive_light(time_of_day: float | Array, config: SimConfig) -> Array:
    """
    Light intensity at a given hour.

    Single hump peaking at solar noon, zero at dawn, dusk and all night.
    The result is clamped to >= 0 so float error in sin(π) cannot go
    negative at dusk.

    Args:
        time_of_day: Hour in [0, 24)
        config: Simulation configuration

    Returns:
        Light in [0, peak_light]
    """
    t = jnp.asarray(time_of_day, dtype=jnp.float64)
    in_daylight = (t >= config.dawn) & (t <= config.dusk)
    angle = (t - config.dawn) / (config.dusk - config.dawn) * jnp.pi
    light = jnp.where(in_daylight, config.peak_light * jnp.sin(angle), 0.0)
    return jnp.maximum(light, 0.0)


def derive_temperature(time_of_day: float | Array, config: SimConfig) -> Array:
    """
    Ambient temperature at a given hour.

    Full sine period over the day, shifted by `temperature_phase` so the
    peak falls mid-afternoon and the trough before dawn.

    Args:
        time_of_day: Hour in [0, 24)
        config: Simulation configuration

    Returns:
        Temperature in [base - amplitude, base + amplitude]
    """
    t = jnp.asarray(time_of_day, dtype=jnp.float64)
    angle = (t - config.temperature_phase) / config.hours_per_day * 2 * jnp.pi
    return config.base_temperature + config.temperature_amplitude * jnp.sin(angle)


def derive_environment(
    time_of_day: float | Array, config: SimConfig
) -> tuple[Array, Array]:
    """
    Compute both clock-driven factors at one time.

    Returns:
        Tuple of (light, temperature)
    """
    return derive_light(time_of_day, config), derive_temperature(time_of_day, config)


def derive_environment_batch(
    config: SimConfig, num_points: int = 96
) -> tuple[Array, Array, Array]:
    """
    Sample one full day of light and temperature on an even grid.

    Args:
        config: Simulation configuration
        num_points: Number of samples across [0, hours_per_day)

    Returns:
        Tuple of (times, light, temperature), each of shape (num_points,)
    """
    times = jnp.arange(num_points, dtype=jnp.float64) * (
        config.hours_per_day / num_points
    )
    light, temperature = derive_environment(times, config)
    return times, light, temperature
