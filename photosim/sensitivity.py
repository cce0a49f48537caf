"""
Law of the Minimum analysis for the photosynthesis model.

Tools to see which factor holds growth back and what it would take to
relieve it:

- Rate gradients: ∂rate/∂factor via JAX grad. Under a minimum law only
  the limiting factor has a non-zero gradient.
- Factor sweeps: rate across one factor with the other two held fixed
- Limiting transitions: where along a sweep the limiting factor changes
- Limiting report: scores, headroom and gradients at a single point
"""

import jax
import jax.numpy as jnp
import numpy as np
from jax import Array

from photosim import growth
from photosim.config import FACTOR_ORDER, Channel, LimitingFactor, SimConfig

CHANNEL_INDEX = {
    Channel.LIGHT: 0,
    Channel.CO2: 1,
    Channel.TEMPERATURE: 2,
}


def _rate_from_inputs(inputs: Array, config: SimConfig) -> Array:
    rate, _ = growth.compute_rate_batch(inputs[0], inputs[1], inputs[2], config)
    return rate


def rate_gradient(
    light: float, co2: float, temperature: float, config: SimConfig
) -> dict[str, float]:
    """
    Gradient of the photosynthesis rate w.r.t. each factor.

    Args:
        light: Light intensity
        co2: CO2 concentration
        temperature: Temperature
        config: Simulation configuration

    Returns:
        Dictionary mapping 'light', 'co2', 'temperature' to ∂rate/∂factor
    """
    inputs = jnp.array([light, co2, temperature], dtype=jnp.float64)
    grads = jax.grad(lambda x: _rate_from_inputs(x, config))(inputs)
    return {
        channel.value: float(grads[index]) for channel, index in CHANNEL_INDEX.items()
    }


def factor_sweep(
    channel: Channel | str,
    value_range: tuple[float, float],
    light: float,
    co2: float,
    temperature: float,
    config: SimConfig,
    resolution: int = 50,
) -> dict[str, np.ndarray]:
    """
    Photosynthesis rate across a range of one factor.

    The swept factor replaces its fixed value; the other two stay put.

    Args:
        channel: Factor to sweep
        value_range: (min, max) range for the factor
        light: Fixed light (ignored when sweeping light)
        co2: Fixed CO2 (ignored when sweeping co2)
        temperature: Fixed temperature (ignored when sweeping temperature)
        config: Simulation configuration
        resolution: Number of points to evaluate

    Returns:
        Dictionary with:
        - param_values: 1D array of factor values
        - rate_values: 1D array of rates at each point
        - limiting_index: 1D array of FACTOR_ORDER indices (-1 in darkness)
        - gradient_values: 1D array of ∂rate/∂factor (finite difference)
    """
    channel = Channel(channel)
    param_values = np.linspace(value_range[0], value_range[1], resolution)
    values = jnp.asarray(param_values, dtype=jnp.float64)

    inputs = {
        Channel.LIGHT: light,
        Channel.CO2: co2,
        Channel.TEMPERATURE: temperature,
    }
    inputs[channel] = values

    rates, index = growth.compute_rate_batch(
        inputs[Channel.LIGHT], inputs[Channel.CO2], inputs[Channel.TEMPERATURE], config
    )
    rate_values = np.asarray(rates, dtype=np.float64)

    if resolution > 1:
        gradient_values = np.gradient(rate_values, param_values)
    else:
        gradient_values = np.zeros(resolution)

    return {
        "param_values": param_values,
        "rate_values": rate_values,
        "limiting_index": np.asarray(index),
        "gradient_values": gradient_values,
    }


def _factor_for_index(index: int) -> LimitingFactor:
    if index == growth.DARK_INDEX:
        return LimitingFactor.NONE
    return FACTOR_ORDER[index]


def find_limiting_transitions(sweep_result: dict[str, np.ndarray]) -> list[dict]:
    """
    Identify where the limiting factor changes along a sweep.

    Args:
        sweep_result: Output from factor_sweep

    Returns:
        List of transition dictionaries, each with:
        - param_value: First factor value under the new limiting factor
        - rate: Rate at that point
        - from: Limiting factor before the transition
        - to: Limiting factor after the transition
    """
    param_values = sweep_result["param_values"]
    rate_values = sweep_result["rate_values"]
    limiting_index = sweep_result["limiting_index"]

    transitions = []
    for i in range(1, len(param_values)):
        if limiting_index[i] != limiting_index[i - 1]:
            transitions.append(
                {
                    "param_value": float(param_values[i]),
                    "rate": float(rate_values[i]),
                    "from": _factor_for_index(int(limiting_index[i - 1])),
                    "to": _factor_for_index(int(limiting_index[i])),
                }
            )
    return transitions


def limiting_report(
    light: float, co2: float, temperature: float, config: SimConfig
) -> dict:
    """
    Explain the growth limitation at one set of conditions.

    This is the main entry point for the analysis - it gathers the scores,
    rate, limiting factor and gradients in one place.

    Returns:
        Dictionary with:
        - scores: Effect score per factor
        - rate: Photosynthesis rate
        - limiting_factor: LimitingFactor at these conditions
        - headroom: Rate gain if the limiting factor were fully relieved
          (second-lowest score minus lowest; 0 in darkness)
        - gradients: ∂rate/∂factor per factor
    """
    scores = np.asarray(growth.effect_scores(light, co2, temperature, config))
    rate, limiting = growth.compute_rate(light, co2, temperature, config)

    if limiting == LimitingFactor.NONE:
        headroom = 0.0
    else:
        ordered = np.sort(scores)
        headroom = float(ordered[1] - ordered[0])

    return {
        "scores": {
            channel.value: float(scores[index])
            for channel, index in CHANNEL_INDEX.items()
        },
        "rate": rate,
        "limiting_factor": limiting,
        "headroom": headroom,
        "gradients": rate_gradient(light, co2, temperature, config),
    }
