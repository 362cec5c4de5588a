"""Per-element rendering against a telemetry snapshot."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional, assert_never

from models.elements import (
    Axis,
    Gas,
    GasDisplay,
    GpsCoordinate,
    ItemCount,
    Literal,
    Mass,
    Power,
    ScaleMode,
    TemplateElement,
)
from models.snapshot import Snapshot

MISSING = "-"

# Suffix thresholds stay fixed per mode, independent of the divisor.
_THOUSANDS_THRESHOLD = 1_000
_MILLIONS_THRESHOLD = 1_000_000


def pad(text: str, width: Optional[int]) -> str:
    """Left-pad ``text`` with spaces up to ``width``; never truncates."""
    if width is None:
        return text
    return text.rjust(width)


def _truncating_div(value: int, divisor: int) -> int:
    quotient = abs(value) // abs(divisor)
    return quotient if (value < 0) == (divisor < 0) else -quotient


def _scaled(value: int, width: Optional[int], scale: ScaleMode) -> str:
    if scale is ScaleMode.thousands and value > _THOUSANDS_THRESHOLD:
        return pad(str(_truncating_div(value, 1_000)), width) + "K"
    if scale is ScaleMode.millions and value > _MILLIONS_THRESHOLD:
        return pad(str(_truncating_div(value, 1_000_000)), width) + "M"
    return pad(str(value), width)


def _currency(value: float, decimals: int) -> str:
    """Format like an en-US currency amount: ``$1,234.50`` / ``($1,234.50)``."""
    raw = Decimal(repr(value))
    with localcontext() as ctx:
        # Room for every integer digit plus the requested fraction.
        ctx.prec = max(ctx.prec, raw.adjusted() + decimals + 2)
        amount = raw.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
        body = f"${abs(amount):,.{decimals}f}"
    return f"({body})" if amount < 0 else body


def _render_mass(element: Mass, snapshot: Snapshot) -> str:
    return pad(str(_truncating_div(snapshot.total_mass_kg, 1_000)), element.pad_width)


def _render_item(element: ItemCount, snapshot: Snapshot) -> str:
    value = snapshot.quantities.get(element.resource_key)
    if value is None:
        return pad(MISSING, element.pad_width)
    return _scaled(value, element.pad_width, element.scale)


def _render_gas(element: Gas, snapshot: Snapshot) -> str:
    tank = snapshot.gas.get(element.kind)
    if element.display is GasDisplay.percentage:
        if tank is None:
            return pad("0", element.pad_width)
        capacity = tank.capacity or 1
        return pad(str(tank.current * 100 // capacity), element.pad_width)
    if tank is None:
        return pad(MISSING, element.pad_width)
    return _scaled(tank.current, element.pad_width, ScaleMode.thousands)


def _render_gps(element: GpsCoordinate, snapshot: Snapshot) -> str:
    position = snapshot.position
    match element.axis:
        case Axis.X:
            value = position.x
        case Axis.Y:
            value = position.y
        case Axis.Z:
            value = position.z
        case _:
            assert_never(element.axis)
    return pad(_currency(value, element.decimals), element.pad_width)


def _render_power(element: Power, snapshot: Snapshot) -> str:
    return pad(str(_truncating_div(snapshot.power_raw, element.divisor)), element.pad_width)


def render_element(element: TemplateElement, snapshot: Snapshot) -> str:
    match element:
        case Literal():
            return element.text
        case Mass():
            return _render_mass(element, snapshot)
        case ItemCount():
            return _render_item(element, snapshot)
        case Gas():
            return _render_gas(element, snapshot)
        case GpsCoordinate():
            return _render_gps(element, snapshot)
        case Power():
            return _render_power(element, snapshot)
        case _:
            assert_never(element)
