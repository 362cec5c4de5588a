"""Compiled template elements.

Each placeholder tag compiles into exactly one of the frozen value objects
below; literal text between tags becomes a :class:`Literal`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, TypeAlias

from models.snapshot import GasKind


class ScaleMode(str, Enum):
    none = "n"
    thousands = "k"
    millions = "m"


class GasDisplay(str, Enum):
    absolute = "absolute"
    percentage = "percentage"


class Axis(str, Enum):
    X = "X"
    Y = "Y"
    Z = "Z"


@dataclass(frozen=True, slots=True)
class Literal:
    text: str


@dataclass(frozen=True, slots=True)
class Mass:
    """Total ship mass in tonnes."""

    pad_width: Optional[int] = None
    dry: bool = False


@dataclass(frozen=True, slots=True)
class ItemCount:
    """Inventory amount of a single resource key."""

    resource_key: str
    pad_width: Optional[int] = None
    scale: ScaleMode = ScaleMode.thousands


@dataclass(frozen=True, slots=True)
class Gas:
    kind: GasKind
    pad_width: Optional[int] = None
    display: GasDisplay = GasDisplay.absolute


@dataclass(frozen=True, slots=True)
class GpsCoordinate:
    axis: Axis
    pad_width: Optional[int] = None
    decimals: int = 2


@dataclass(frozen=True, slots=True)
class Power:
    divisor: int = 1
    pad_width: Optional[int] = None


TemplateElement: TypeAlias = Literal | Mass | ItemCount | Gas | GpsCoordinate | Power
