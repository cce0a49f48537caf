"""
Photosim - Day/Night Photosynthesis Demo

Runs the simulation headless, the way a render loop would drive it:
1. Two simulated days in auto-play (light and temperature follow the clock)
2. A manual phase: freeze the clock at bright light and starve the plant of CO2
3. A Liebig report explaining what limits growth at the manual settings

This demonstrates the full tick pipeline:
- Clock advance -> light/temperature -> rate and limiting factor -> biomass
- Manual overrides pausing the clock
- Rate sampling for the chart window
"""

from photosim import (
    Channel,
    SimConfig,
    SimulationController,
    limiting_report,
    run_cycle,
    ticks_for_days,
)


def run_auto_phase(controller: SimulationController, days: float) -> None:
    """Let the day/night cycle run, reporting every simulated three hours."""
    config = controller.config
    num_ticks = ticks_for_days(days, config)
    report_every = ticks_for_days(3 / config.hours_per_day, config)

    print(f"Running {days:g} simulated days ({num_ticks} ticks)...")
    for tick in range(1, num_ticks + 1):
        controller.tick()
        if tick % report_every == 0:
            print(
                f"  {controller.clock_label:>14s}: light={controller.light:6.1f}, "
                f"temp={controller.temperature:5.1f}, "
                f"rate={controller.growth_rate:5.1f}, "
                f"biomass={controller.biomass:6.2f}, "
                f"limit={controller.limiting_label}"
            )


def main() -> None:
    print("\n" + "=" * 60)
    print("  PHOTOSIM: Day/Night Photosynthesis Simulation")
    print("=" * 60)

    config = SimConfig()
    controller = SimulationController(config)

    print("\n" + "=" * 60)
    print("PHASE 1: Auto-play day/night cycle")
    print("=" * 60)
    run_auto_phase(controller, days=2)

    print("\n" + "=" * 60)
    print("PHASE 2: Manual overrides (bright light, low CO2)")
    print("=" * 60)
    trajectory = run_cycle(
        config,
        num_ticks=600,
        controller=controller,
        overrides={
            0: [
                (Channel.LIGHT, 90.0),
                (Channel.TEMPERATURE, 25.0),
                (Channel.CO2, 10.0),
            ],
            300: [(Channel.CO2, 80.0)],
        },
    )
    print(
        f"Clock frozen at {controller.clock_label} "
        f"(auto-play={controller.auto_play})"
    )
    trajectory.print_summary()

    print("\nSampled rate window (oldest first):")
    print("  " + " ".join(f"{r:.0f}" for r in trajectory.rate_history))

    print("\n" + "=" * 60)
    print("PHASE 3: Law of the Minimum report")
    print("=" * 60)
    report = limiting_report(
        controller.light, controller.co2, controller.temperature, config
    )
    for name, score in report["scores"].items():
        grad = report["gradients"][name]
        print(f"  {name:12s}: score={score:6.2f}, d(rate)/d({name})={grad:.4f}")
    print(f"  Rate: {report['rate']:.2f}")
    print(f"  Limiting factor: {report['limiting_factor'].value}")
    print(f"  Headroom if relieved: {report['headroom']:.2f}")

    print("\n" + "=" * 60)
    print("Demo complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
