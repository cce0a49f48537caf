"""
Tests for headless multi-tick runs.

These tests verify that a rollout produces a complete trajectory,
applies scheduled overrides, and summarises the run sensibly.
"""

from photosim import rollout
from photosim.config import Channel, LimitingFactor, SimConfig
from photosim.controller import SimulationController


class TestTicksForDays:
    """Tests for day-to-tick conversion."""

    def test_one_day(self) -> None:
        """One day at 0.02h per tick is 1200 ticks."""
        assert rollout.ticks_for_days(1, SimConfig()) == 1200

    def test_fractional_days(self) -> None:
        """Quarter days round to whole ticks."""
        assert rollout.ticks_for_days(0.25, SimConfig()) == 300


class TestRunCycle:
    """Tests for a single run."""

    def test_produces_trajectory(self) -> None:
        """Trajectory has num_ticks + 1 states (including initial)."""
        config = SimConfig()
        trajectory = rollout.run_cycle(config, num_ticks=100)
        assert len(trajectory.states) == 101

    def test_all_states_valid(self) -> None:
        """Every recorded state is valid."""
        config = SimConfig()
        trajectory = rollout.run_cycle(config, num_ticks=1200)
        for state in trajectory.states:
            assert state.is_valid(config)

    def test_full_day_elapses(self) -> None:
        """A day of ticks moves the day counter once."""
        config = SimConfig()
        trajectory = rollout.run_cycle(config, num_ticks=1200)
        assert trajectory.states[-1].day_count == 2

    def test_biomass_grows_over_day(self) -> None:
        """Plant gains biomass over a day/night cycle."""
        config = SimConfig()
        trajectory = rollout.run_cycle(config, num_ticks=1200)
        assert trajectory.states[-1].biomass > trajectory.states[0].biomass

    def test_overrides_applied(self) -> None:
        """Scheduled overrides take effect at their tick."""
        config = SimConfig()
        trajectory = rollout.run_cycle(
            config,
            num_ticks=50,
            overrides={10: [(Channel.LIGHT, 10.0)]},
        )
        assert trajectory.states[10].auto_play is True
        for state in trajectory.states[11:]:
            assert state.light == 10.0
            assert state.auto_play is False
            assert state.limiting_factor == LimitingFactor.LIGHT

    def test_continues_existing_controller(self) -> None:
        """A given controller is driven from its current state."""
        config = SimConfig()
        controller = SimulationController(config)
        for _ in range(10):
            controller.tick()
        before = controller.snapshot
        trajectory = rollout.run_cycle(config, num_ticks=5, controller=controller)
        assert trajectory.states[0] is before
        assert trajectory.states[-1] is controller.snapshot
        assert controller.tick_count == 15


class TestTrajectory:
    """Tests for trajectory data structure."""

    def test_state_arrays(self) -> None:
        """State arrays have one entry per state."""
        trajectory = rollout.run_cycle(SimConfig(), num_ticks=30)
        arrays = trajectory.get_state_arrays()
        assert arrays["biomass"].shape == (31,)
        assert arrays["growth_rate"].shape == (31,)
        assert arrays["light"].shape == (31,)

    def test_limiting_counts_cover_all_ticks(self) -> None:
        """Every tick is counted under exactly one factor."""
        trajectory = rollout.run_cycle(SimConfig(), num_ticks=1200)
        counts = trajectory.limiting_counts()
        assert sum(counts.values()) == 1200
        assert counts[LimitingFactor.NONE] > 0
        assert counts[LimitingFactor.CO2] > 0

    def test_scalar_summary(self) -> None:
        """Summary reports the key metrics."""
        trajectory = rollout.run_cycle(SimConfig(), num_ticks=1200)
        summary = trajectory.get_scalar_summary()
        assert summary["Ticks"] == 1200
        assert summary["DaysElapsed"] == 1
        assert summary["BiomassGain"] > 0
        assert 0.0 < summary["MeanRate"] < summary["PeakRate"] <= 100.0
        assert summary["DarkTicks"] > 0

    def test_rate_history_recorded(self) -> None:
        """The sampled rate window comes back with the trajectory."""
        config = SimConfig()
        trajectory = rollout.run_cycle(config, num_ticks=120)
        assert len(trajectory.rate_history) == config.history_length
        assert trajectory.rate_history[-1] > 0.0

    def test_print_summary(self, capsys) -> None:
        """Summary table is printed to stdout."""
        trajectory = rollout.run_cycle(SimConfig(), num_ticks=10)
        trajectory.print_summary()
        out = capsys.readouterr().out
        assert "SIMULATION SUMMARY" in out
        assert "FinalBiomass" in out
