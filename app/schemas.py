"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, NonNegativeInt

from models.snapshot import GasKind, GasTank, Position, Snapshot


class PositionPayload(BaseModel):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class GasTankPayload(BaseModel):
    current: int = Field(0, ge=0)
    capacity: int = Field(0, ge=0)


class SnapshotPayload(BaseModel):
    """Telemetry readout for one refresh cycle, as supplied by the host."""

    quantities: Dict[str, NonNegativeInt] = Field(
        default_factory=dict, description="Inventory amounts keyed by resource id."
    )
    total_mass_kg: int = Field(0, ge=0)
    power_raw: int = Field(0, description="Power output in pre-scaled units.")
    position: PositionPayload = Field(default_factory=PositionPayload)
    gas: Dict[GasKind, GasTankPayload] = Field(default_factory=dict)

    def to_snapshot(self) -> Snapshot:
        return Snapshot(
            quantities=dict(self.quantities),
            total_mass_kg=self.total_mass_kg,
            power_raw=self.power_raw,
            position=Position(x=self.position.x, y=self.position.y, z=self.position.z),
            gas={
                kind: GasTank(current=tank.current, capacity=tank.capacity)
                for kind, tank in self.gas.items()
            },
        )


class RenderRequest(BaseModel):
    markup: str = Field(..., description="Template body without the marker line.")
    snapshot: SnapshotPayload = Field(default_factory=SnapshotPayload)


class RenderResponse(BaseModel):
    valid: bool
    text: str
    error: Optional[str] = Field(
        default=None, description="Error kind when the markup failed to compile."
    )


class PanelState(BaseModel):
    """Custom data and last written text of one display panel."""

    device_id: str
    custom_data: str = ""
    text: str = ""


class PanelUpdate(BaseModel):
    custom_data: str


class PanelView(PanelState):
    bound: bool = False


class RefreshResponse(BaseModel):
    bound: int = Field(..., ge=0)
    panels: List[PanelView] = Field(default_factory=list)
