"""
Photosynthesis rate, limiting factor and biomass integration.

Each factor is mapped to a 0-100 effect score:
- Light and CO2 use Michaelis-Menten saturation: 100 * x / (x + K)
- Temperature uses a Gaussian around the optimum with a hard cutoff

The rate is the minimum of the three scores (Liebig's Law of the Minimum),
and the factor holding the minimum is the limiting factor. At night the
rate is forced to 0 and nothing is reported as limiting.
"""

import jax.numpy as jnp
from jax import Array

from photosim.config import FACTOR_ORDER, LimitingFactor, SimConfig

# Type alias for values that can be either JAX arrays or Python floats
Scalar = Array | float

# Index returned by compute_rate_batch when it is too dark to photosynthesize
DARK_INDEX = -1

LIMITING_LABELS = {
    LimitingFactor.LIGHT: "Light Intensity",
    LimitingFactor.CO2: "CO₂ Concentration",
    LimitingFactor.TEMPERATURE: "Temperature",
}


def saturation(x: Scalar, k: float) -> Array:
    """
    Michaelis-Menten saturation function.

    f(x) = x / (x + K)

    Properties:
    - f(0) = 0
    - f(K) = 0.5 (half-saturation)
    - f(∞) → 1

    Args:
        x: Input value (nonnegative)
        k: Half-saturation constant (positive)

    Returns:
        Value in [0, 1)
    """
    x = jnp.asarray(x, dtype=jnp.float64)
    return x / (x + k)


def temperature_gaussian(temp: Scalar, t_opt: float, sigma: float) -> Array:
    """
    Gaussian temperature efficiency function.

    f(T) = exp(-(T - T_opt)² / (2σ²))

    Returns:
        Efficiency in (0, 1]
    """
    temp = jnp.asarray(temp, dtype=jnp.float64)
    return jnp.exp(-((temp - t_opt) ** 2) / (2 * sigma**2))


def effect_score(value: Scalar, half_saturation: float = 20.0) -> Array:
    """Saturating 0-100 score used for both light and CO2."""
    return 100.0 * saturation(value, half_saturation)


def temperature_effect(
    temp: Scalar,
    optimal: float = 25.0,
    sigma: float = 10.0,
    cutoff: float = 1.0,
) -> Array:
    """
    0-100 temperature score, peaking at the optimum.

    Scores below `cutoff` are snapped to exactly 0 so extreme temperatures
    stop photosynthesis outright instead of leaving a long tail.

    Args:
        temp: Temperature
        optimal: Temperature giving a score of 100
        sigma: Width of the Gaussian (10 gives the /200 falloff)
        cutoff: Scores below this become 0

    Returns:
        Score in {0} ∪ [cutoff, 100]
    """
    score = 100.0 * temperature_gaussian(temp, optimal, sigma)
    return jnp.where(score < cutoff, 0.0, score)


def effect_scores(
    light: Scalar, co2: Scalar, temperature: Scalar, config: SimConfig
) -> Array:
    """
    Stack the three effect scores.

    Returns:
        Array of shape (3, ...) in FACTOR_ORDER (light, co2, temperature)
    """
    light_score = effect_score(light, config.half_saturation)
    co2_score = effect_score(co2, config.half_saturation)
    temp_score = temperature_effect(
        temperature,
        optimal=config.optimal_temperature,
        sigma=config.temperature_sigma,
        cutoff=config.effect_cutoff,
    )
    light_score, co2_score, temp_score = jnp.broadcast_arrays(
        light_score, co2_score, temp_score
    )
    return jnp.stack([light_score, co2_score, temp_score])


def compute_rate_batch(
    light: Scalar, co2: Scalar, temperature: Scalar, config: SimConfig
) -> tuple[Array, Array]:
    """
    Vectorized photosynthesis rate and limiting factor index.

    rate = min(light_score, co2_score, temp_score), or 0 when light is
    below the night threshold. argmin returns the first minimum, so exact
    ties resolve light > co2 > temperature.

    Returns:
        Tuple of (rate, limiting_index); the index points into FACTOR_ORDER
        and is DARK_INDEX where it is night
    """
    scores = effect_scores(light, co2, temperature, config)
    rate = jnp.min(scores, axis=0)
    index = jnp.argmin(scores, axis=0)

    dark = jnp.asarray(light, dtype=jnp.float64) < config.night_light_threshold
    rate = jnp.where(dark, 0.0, rate)
    index = jnp.where(dark, DARK_INDEX, index)
    return rate, index


def compute_rate(
    light: Scalar, co2: Scalar, temperature: Scalar, config: SimConfig
) -> tuple[float, LimitingFactor]:
    """
    Photosynthesis rate and limiting factor for a single set of inputs.

    Args:
        light: Light intensity [0, 100]
        co2: CO2 concentration [0, 100]
        temperature: Temperature
        config: Simulation configuration

    Returns:
        Tuple of (rate in [0, 100], limiting factor)
    """
    rate, index = compute_rate_batch(light, co2, temperature, config)
    index = int(index)
    if index == DARK_INDEX:
        return 0.0, LimitingFactor.NONE
    return float(rate), FACTOR_ORDER[index]


def integrate_biomass(
    biomass: float, rate: float, dt: float, config: SimConfig
) -> float:
    """
    Accumulate biomass for one tick.

    biomass += rate * growth_coefficient * dt, capped at max_biomass.
    Unchanged when the rate is not positive or the plant is already full size.

    Args:
        biomass: Current biomass
        rate: Photosynthesis rate [0, 100]
        dt: Tick length (1.0 at the reference tick rate)
        config: Simulation configuration

    Returns:
        New biomass, never below the input and never above max_biomass
    """
    if rate <= 0 or biomass >= config.max_biomass:
        return biomass
    gain = max(rate * config.growth_coefficient * dt, 0.0)
    return min(biomass + gain, config.max_biomass)


def limiting_label(
    growth_rate: float, limiting: LimitingFactor, config: SimConfig
) -> str:
    """Human-readable limiting factor, 'None' when growth is near saturation."""
    if growth_rate >= config.saturated_rate or limiting == LimitingFactor.NONE:
        return "None"
    return LIMITING_LABELS[LimitingFactor(limiting)]
