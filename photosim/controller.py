"""
Simulation controller - the single owner of simulation state.

One tick runs the pipeline in a fixed order, each stage consuming the
previous stage's output for the same tick:

1. Clock advance (only while auto-play is on)
2. Light and temperature derived from the new time (only while auto-play is on)
3. Photosynthesis rate and limiting factor
4. Biomass integration
5. Rate history sampling

Every stage returns a new immutable SimulationState; the controller
publishes it in a single assignment at the end, so readers only ever see
complete snapshots. UI code changes state only through
`set_manual_override` and `toggle_pause`.
"""

from photosim import clock, environment, growth
from photosim.config import Channel, LimitingFactor, SimConfig, SimulationState
from photosim.history import RateHistory


class SimulationController:
    """Owns the SimulationState and advances it one tick at a time."""

    def __init__(
        self,
        config: SimConfig | None = None,
        initial_state: SimulationState | None = None,
    ) -> None:
        self.config = config if config is not None else SimConfig()
        self._state = (
            initial_state
            if initial_state is not None
            else SimulationState.initial(self.config)
        )
        self._tick_count = 0
        self.history = RateHistory(
            length=self.config.history_length,
            interval=self.config.history_interval,
        )

    # =========================================================================
    # Driver entry point
    # =========================================================================

    def tick(self, dt: float = 1.0) -> SimulationState:
        """
        Advance the simulation by one tick.

        Args:
            dt: Tick length relative to the reference tick rate (scales
                biomass growth only; the clock moves clock_speed per tick)

        Returns:
            The new published snapshot
        """
        if dt < 0:
            raise ValueError(f"dt must be nonnegative, got {dt}")

        config = self.config
        state = clock.advance(self._state, config)

        if state.auto_play:
            light, temperature = environment.derive_environment(
                state.time_of_day, config
            )
            state = state._replace(light=float(light), temperature=float(temperature))

        rate, limiting = growth.compute_rate(
            state.light, state.co2, state.temperature, config
        )
        biomass = growth.integrate_biomass(state.biomass, rate, dt, config)
        state = state._replace(
            growth_rate=rate, limiting_factor=limiting, biomass=biomass
        )

        self._tick_count += 1
        self.history.observe(self._tick_count, rate)
        self._state = state
        return state

    # =========================================================================
    # Commands
    # =========================================================================

    def set_manual_override(self, channel: Channel | str, value: float) -> None:
        """
        Set a factor by hand.

        Light and temperature overrides switch auto-play off, which also
        freezes the clock. CO2 can be set at any time without affecting
        auto-play. Values are clamped into the channel range. Rate and
        limiting factor are refreshed for the new inputs; time and biomass
        only move on the next tick.

        Args:
            channel: Which factor to set
            value: New value

        Raises:
            ValueError: If channel is not a known Channel
        """
        channel = Channel(channel)
        value = min(max(float(value), 0.0), self.config.channel_max(channel))

        state = self._state
        if channel == Channel.CO2:
            state = state._replace(co2=value)
        elif channel == Channel.LIGHT:
            state = state._replace(light=value, auto_play=False)
        else:
            state = state._replace(temperature=value, auto_play=False)

        rate, limiting = growth.compute_rate(
            state.light, state.co2, state.temperature, self.config
        )
        self._state = state._replace(growth_rate=rate, limiting_factor=limiting)

    def toggle_pause(self) -> bool:
        """Flip auto-play and return the new value."""
        self._state = self._state._replace(auto_play=not self._state.auto_play)
        return self._state.auto_play

    def reset(self) -> None:
        """Return to the start-of-process state."""
        self._state = SimulationState.initial(self.config)
        self._tick_count = 0
        self.history.clear()

    # =========================================================================
    # Read accessors
    # =========================================================================

    @property
    def snapshot(self) -> SimulationState:
        return self._state

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def time_of_day(self) -> float:
        return self._state.time_of_day

    @property
    def day_count(self) -> int:
        return self._state.day_count

    @property
    def auto_play(self) -> bool:
        return self._state.auto_play

    @property
    def light(self) -> float:
        return self._state.light

    @property
    def co2(self) -> float:
        return self._state.co2

    @property
    def temperature(self) -> float:
        return self._state.temperature

    @property
    def growth_rate(self) -> float:
        return self._state.growth_rate

    @property
    def biomass(self) -> float:
        return self._state.biomass

    @property
    def limiting_factor(self) -> LimitingFactor:
        return self._state.limiting_factor

    @property
    def limiting_label(self) -> str:
        return growth.limiting_label(
            self._state.growth_rate, self._state.limiting_factor, self.config
        )

    @property
    def clock_label(self) -> str:
        return clock.format_clock(self._state.time_of_day, self._state.day_count)
