"""Telemetry snapshot consumed by the template engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class GasKind(str, Enum):
    """Gas resources tracked in tanks."""

    O2 = "O2"
    H2 = "H2"


@dataclass(frozen=True, slots=True)
class GasTank:
    """Aggregated fill level of every tank holding one gas kind."""

    current: int
    capacity: int


@dataclass(frozen=True, slots=True)
class Position:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


def _freeze(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True, slots=True)
class Snapshot:
    """One refresh cycle's telemetry readout.

    Built once per cycle by the telemetry collaborator and shared by every
    template rendered during that cycle.
    """

    quantities: Mapping[str, int] = field(default_factory=dict)
    total_mass_kg: int = 0
    power_raw: int = 0
    position: Position = field(default_factory=Position)
    gas: Mapping[GasKind, GasTank] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "quantities", _freeze(self.quantities))
        object.__setattr__(self, "gas", _freeze(self.gas))
