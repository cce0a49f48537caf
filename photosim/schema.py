# Schemata for the simulation's external interface
# Snapshots published to rendering/UI and override commands coming back

from pydantic import BaseModel, Field, ValidationInfo, model_validator

from photosim.config import Channel, LimitingFactor, SimConfig, SimulationState
from photosim.controller import SimulationController

#
# Schemata
#


class SnapshotSchema(BaseModel):
    """Read-only view of one published simulation state."""

    time_of_day: float = Field(ge=0.0, lt=24.0, description="Simulated hour")
    day_count: int = Field(ge=1, description="Day counter")
    auto_play: bool = Field(description="Clock running and light/temp derived")
    light: float = Field(ge=0.0, le=100.0, description="Light intensity")
    co2: float = Field(ge=0.0, le=100.0, description="CO2 concentration")
    temperature: float = Field(description="Air temperature")
    growth_rate: float = Field(ge=0.0, le=100.0, description="Photosynthesis rate")
    biomass: float = Field(ge=0.0, description="Accumulated biomass")
    limiting_factor: LimitingFactor = Field(description="Factor holding growth back")

    @classmethod
    def from_state(cls, state: SimulationState) -> "SnapshotSchema":
        """Build a schema from a SimulationState."""
        return cls(**state._asdict())


class OverrideRequest(BaseModel):
    """
    A user setting one factor by hand.

    The upper bound comes from the `config` entry of the validation context,
    falling back to the default SimConfig.
    """

    channel: Channel = Field(description="Factor to set")
    value: float = Field(ge=0.0, description="New value for the factor")

    @model_validator(mode="after")
    def check_channel_range(self, info: ValidationInfo) -> "OverrideRequest":
        config = (info.context or {}).get("config") or SimConfig()
        upper = config.channel_max(self.channel)
        if self.value > upper:
            raise ValueError(
                f"{self.channel.value} must be <= {upper}, got {self.value}"
            )
        return self


#
# Command application
#


def apply_override(
    controller: SimulationController, request: OverrideRequest
) -> SimulationState:
    """
    Apply an override and return the resulting snapshot.

    The request is checked again against the controller's own channel
    bounds.

    Raises:
        ValidationError: If the value is outside the controller's range
    """
    request = OverrideRequest.model_validate(
        request.model_dump(), context={"config": controller.config}
    )
    controller.set_manual_override(request.channel, request.value)
    return controller.snapshot
