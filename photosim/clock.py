"""
Simulated time-of-day and day counter.

The clock only moves while auto-play is on. Each tick adds `clock_speed`
hours; crossing midnight wraps the hour and starts a new day.
"""

from photosim.config import SimConfig, SimulationState

# Float accumulation slack so that 1200 steps of 0.02h land on midnight
WRAP_TOLERANCE = 1e-9


def advance(
    state: SimulationState,
    config: SimConfig,
    speed: float | None = None,
) -> SimulationState:
    """
    Advance the clock by one tick.

    No-op when auto-play is off. Otherwise adds `speed` hours and wraps
    past `hours_per_day`, incrementing the day counter once per day crossed.

    Args:
        state: Current simulation state
        config: Simulation configuration
        speed: Hours per tick (defaults to config.clock_speed)

    Returns:
        State with updated time_of_day and day_count
    """
    if not state.auto_play:
        return state

    if speed is None:
        speed = config.clock_speed

    time_of_day = state.time_of_day + speed
    day_count = state.day_count
    while time_of_day >= config.hours_per_day - WRAP_TOLERANCE:
        time_of_day = max(time_of_day - config.hours_per_day, 0.0)
        day_count += 1

    return state._replace(time_of_day=time_of_day, day_count=day_count)


def format_clock(time_of_day: float, day_count: int) -> str:
    """Status line in the form 'Day 3 | 14:05'."""
    hours = int(time_of_day)
    minutes = int((time_of_day - hours) * 60)
    return f"Day {day_count} | {hours}:{minutes:02d}"
