"""
Tests for the external interface schemata.

These tests verify that snapshots serialize cleanly and that override
requests are validated before they reach the controller.
"""

import pytest
from pydantic import ValidationError

from photosim.config import Channel, LimitingFactor, SimConfig, SimulationState
from photosim.controller import SimulationController
from photosim.schema import OverrideRequest, SnapshotSchema, apply_override


class TestSnapshotSchema:
    """Tests for snapshot serialization."""

    def test_from_initial_state(self) -> None:
        """All fields carry over from the state."""
        schema = SnapshotSchema.from_state(SimulationState.initial())
        assert schema.time_of_day == 12.0
        assert schema.day_count == 1
        assert schema.biomass == 15.0
        assert schema.limiting_factor == LimitingFactor.NONE

    def test_dump_uses_plain_values(self) -> None:
        """Limiting factor serializes as its string value."""
        controller = SimulationController()
        controller.tick()
        dumped = SnapshotSchema.from_state(controller.snapshot).model_dump(mode="json")
        assert dumped["limiting_factor"] == "co2"
        assert dumped["auto_play"] is True

    def test_rejects_out_of_range_state(self) -> None:
        """A state breaking the invariants does not validate."""
        state = SimulationState.initial()._replace(light=150.0)
        with pytest.raises(ValidationError):
            SnapshotSchema.from_state(state)


class TestOverrideRequest:
    """Tests for override validation."""

    def test_valid_request(self) -> None:
        """In-range values are accepted."""
        request = OverrideRequest(channel="co2", value=70.0)
        assert request.channel == Channel.CO2

    def test_negative_rejected(self) -> None:
        """Negative values fail validation."""
        with pytest.raises(ValidationError):
            OverrideRequest(channel="light", value=-1.0)

    def test_temperature_upper_bound(self) -> None:
        """Temperature is bounded at 50."""
        OverrideRequest(channel="temperature", value=50.0)
        with pytest.raises(ValidationError):
            OverrideRequest(channel="temperature", value=60.0)

    def test_light_upper_bound(self) -> None:
        """Light is bounded at 100."""
        with pytest.raises(ValidationError):
            OverrideRequest(channel="light", value=101.0)

    def test_unknown_channel(self) -> None:
        """Unknown channels fail validation."""
        with pytest.raises(ValidationError):
            OverrideRequest(channel="humidity", value=10.0)

    def test_bounds_from_context_config(self) -> None:
        """A config in the validation context sets the upper bound."""
        config = SimConfig(max_co2=60.0)
        OverrideRequest.model_validate(
            {"channel": "co2", "value": 60.0}, context={"config": config}
        )
        with pytest.raises(ValidationError):
            OverrideRequest.model_validate(
                {"channel": "co2", "value": 70.0}, context={"config": config}
            )


class TestApplyOverride:
    """Tests for routing requests to the controller."""

    def test_apply_co2(self) -> None:
        """A CO2 request updates CO2 without pausing."""
        controller = SimulationController()
        state = apply_override(controller, OverrideRequest(channel="co2", value=70.0))
        assert state.co2 == 70.0
        assert state.auto_play is True

    def test_apply_light(self) -> None:
        """A light request updates light and pauses."""
        controller = SimulationController()
        state = apply_override(controller, OverrideRequest(channel="light", value=30.0))
        assert state.light == 30.0
        assert state.auto_play is False
        assert state is controller.snapshot

    def test_controller_bounds_enforced(self) -> None:
        """A request valid for the defaults is rejected by a narrower controller."""
        controller = SimulationController(SimConfig(max_temperature=40.0))
        request = OverrideRequest(channel="temperature", value=45.0)
        with pytest.raises(ValidationError):
            apply_override(controller, request)
        assert controller.temperature == 25.0
        assert controller.auto_play is True
