"""End-to-end template evaluation scenarios."""

from __future__ import annotations

import pytest

from models.elements import Literal, Mass
from models.snapshot import GasKind, GasTank, Position, Snapshot
from services.parser import parse
from services.template import InvalidTemplate, ValidTemplate


def _render(markup: str, snapshot: Snapshot) -> str:
    template = parse(markup)
    assert isinstance(template, ValidTemplate)
    return template.evaluate(snapshot)


def test_mass_scenario() -> None:
    assert _render("Mass: <mass:,7>", Snapshot(total_mass_kg=9_872_000)) == "Mass:    9872"


def test_item_scenario_with_default_thousands() -> None:
    snapshot = Snapshot(quantities={"Ore_Iron": 1500})

    assert _render("<item:Ore_Iron,7>", snapshot) == "      1K"


def test_missing_item_scenario() -> None:
    assert _render("<item:Ore_Gold,7>", Snapshot(quantities={"Ore_Iron": 1})) == "      -"


def test_gas_percentage_scenario() -> None:
    snapshot = Snapshot(gas={GasKind.O2: GasTank(current=50, capacity=200)})

    assert _render("<gas:o2,5,%>", snapshot) == "   25"


def test_power_scenario() -> None:
    assert _render("<power:1000,6>", Snapshot(power_raw=4_500_000)) == "  4500"


def test_unterminated_scenario_keeps_no_partial_output() -> None:
    template = parse("Val: <mass")

    assert isinstance(template, InvalidTemplate)
    assert template.error == "UnterminatedTag"
    assert "Val:" not in template.message


def test_multiline_dashboard() -> None:
    snapshot = Snapshot(
        quantities={"Ore_Iron": 12_000, "Ingot_Iron": 800},
        total_mass_kg=1_250_500,
        power_raw=3_000,
        gas={GasKind.H2: GasTank(current=300, capacity=1200)},
    )
    markup = "Mass <mass:,5> t\nOre  <item:Ore_Iron,5>\nIron <item:Ingot_Iron,5,n>\nH2   <gas:h2,4,%>%\nPwr  <power:1000,5> MW"

    assert _render(markup, snapshot) == (
        "Mass  1250 t\nOre     12K\nIron   800\nH2     25%\nPwr      3 MW"
    )


def test_evaluate_is_repeatable_with_same_snapshot() -> None:
    template = parse("<mass> / <power:2>")
    snapshot = Snapshot(total_mass_kg=4000, power_raw=9)

    assert isinstance(template, ValidTemplate)
    assert template.evaluate(snapshot) == template.evaluate(snapshot) == "4 / 4"


def test_gps_with_many_decimals_renders_in_template() -> None:
    template = parse("<gps:x,,30>")

    assert isinstance(template, ValidTemplate)
    rendered = template.evaluate(Snapshot(position=Position(x=1234.5)))
    assert rendered.startswith("$1,234.50")
    assert len(rendered.split(".")[1]) == 30


def test_render_failure_degrades_to_diagnostic(monkeypatch: pytest.MonkeyPatch) -> None:
    def explode(element, snapshot):  # noqa: ANN001
        if isinstance(element, Mass):
            raise RuntimeError("sensor offline")
        return "ok"

    monkeypatch.setattr("services.template.render_element", explode)
    template = ValidTemplate(elements=(Literal("Mass: "), Mass()))

    assert template.evaluate(Snapshot()) == "Template error: sensor offline"
