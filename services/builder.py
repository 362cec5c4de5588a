"""Compile a single tag body into a template element."""

from __future__ import annotations

import re
from typing import Callable, Dict, List, Optional

from models.elements import (
    Axis,
    Gas,
    GasDisplay,
    GpsCoordinate,
    ItemCount,
    Mass,
    Power,
    ScaleMode,
    TemplateElement,
)
from models.errors import InvalidOption, UnknownElementKind
from models.snapshot import GasKind

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _split_args(raw: Optional[str], limit: int) -> List[str]:
    if raw is None:
        return []
    # Options past the variant's schema are ignored.
    return [part.strip() for part in raw.split(",")][:limit]


def _arg(args: List[str], index: int) -> Optional[str]:
    """Return the positional argument or ``None`` when omitted or blank."""
    if index >= len(args):
        return None
    return args[index] or None


def _parse_int(kind: str, name: str, value: str) -> int:
    if _INTEGER.fullmatch(value) is None:
        raise InvalidOption(kind, f"{name} must be an integer, got {value!r}")
    return int(value)


def _parse_pad(kind: str, value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    width = _parse_int(kind, "pad width", value)
    if width < 0:
        raise InvalidOption(kind, f"pad width must not be negative, got {width}")
    return width


def _build_mass(args: List[str]) -> Mass:
    flag = _arg(args, 0)
    return Mass(
        pad_width=_parse_pad("mass", _arg(args, 1)),
        dry=flag is not None and flag.lower() == "dry",
    )


def _build_item(args: List[str]) -> ItemCount:
    resource_key = _arg(args, 0)
    if resource_key is None:
        raise InvalidOption("item", "resource key is required")

    scale = ScaleMode.thousands
    scale_raw = _arg(args, 2)
    if scale_raw is not None:
        try:
            scale = ScaleMode(scale_raw[0].lower())
        except ValueError as exc:
            raise InvalidOption("item", f"unknown scale mode {scale_raw!r}") from exc

    return ItemCount(
        resource_key=resource_key,
        pad_width=_parse_pad("item", _arg(args, 1)),
        scale=scale,
    )


def _build_gas(args: List[str]) -> Gas:
    kind_raw = _arg(args, 0)
    if kind_raw is None:
        raise InvalidOption("gas", "gas kind is required")
    try:
        kind = GasKind(kind_raw.upper())
    except ValueError as exc:
        raise InvalidOption("gas", f"unknown gas kind {kind_raw!r}") from exc

    display = GasDisplay.percentage if _arg(args, 2) == "%" else GasDisplay.absolute
    return Gas(kind=kind, pad_width=_parse_pad("gas", _arg(args, 1)), display=display)


def _build_gps(args: List[str]) -> GpsCoordinate:
    axis_raw = _arg(args, 0)
    if axis_raw is None:
        raise InvalidOption("gps", "axis is required")
    try:
        axis = Axis(axis_raw.upper())
    except ValueError as exc:
        raise InvalidOption("gps", f"unknown axis {axis_raw!r}") from exc

    decimals = 2
    decimals_raw = _arg(args, 2)
    if decimals_raw is not None:
        decimals = _parse_int("gps", "decimals", decimals_raw)
        if decimals < 0:
            raise InvalidOption("gps", f"decimals must not be negative, got {decimals}")

    return GpsCoordinate(axis=axis, pad_width=_parse_pad("gps", _arg(args, 1)), decimals=decimals)


def _build_power(args: List[str]) -> Power:
    divisor_raw = _arg(args, 0)
    if divisor_raw is None:
        raise InvalidOption("power", "scale divisor is required")
    divisor = _parse_int("power", "scale divisor", divisor_raw)
    return Power(divisor=max(divisor, 1), pad_width=_parse_pad("power", _arg(args, 1)))


_BUILDERS: Dict[str, tuple[Callable[[List[str]], TemplateElement], int]] = {
    "mass": (_build_mass, 2),
    "item": (_build_item, 3),
    "gas": (_build_gas, 3),
    "gps": (_build_gps, 3),
    "power": (_build_power, 2),
}


def build_element(tag_body: str) -> TemplateElement:
    """Compile the text between ``<`` and ``>`` into an element.

    Raises :class:`UnknownElementKind` for an unsupported kind and
    :class:`InvalidOption` when an argument fails validation.
    """
    kind, sep, raw_args = tag_body.partition(":")
    entry = _BUILDERS.get(kind)
    if entry is None:
        raise UnknownElementKind(kind)
    builder, limit = entry
    return builder(_split_args(raw_args if sep else None, limit))
