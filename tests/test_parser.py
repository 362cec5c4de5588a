"""Unit tests for markup scanning and template compilation."""

from __future__ import annotations

import pytest

from models.elements import ItemCount, Literal, Mass, Power
from models.errors import UnterminatedTag
from services.parser import Token, parse, tokenize
from services.template import InvalidTemplate, ValidTemplate


def test_tokenize_splits_literals_and_tags() -> None:
    tokens = list(tokenize("Mass: <mass:,7> T"))

    assert tokens == [
        Token("literal", "Mass: ", 0),
        Token("tag", "mass:,7", 7),
        Token("literal", " T", 15),
    ]


def test_tokenize_adjacent_tags_emit_no_empty_literals() -> None:
    tokens = list(tokenize("<mass><power:10>"))

    assert [token.kind for token in tokens] == ["tag", "tag"]


def test_tokenize_raises_for_open_tag() -> None:
    with pytest.raises(UnterminatedTag) as excinfo:
        list(tokenize("abc <mass"))

    assert excinfo.value.offset == 4


def test_closing_bracket_outside_tag_is_literal() -> None:
    template = parse("a > b")

    assert template == ValidTemplate(elements=(Literal("a > b"),))


def test_parse_builds_elements_in_order() -> None:
    template = parse("Ore: <item:Ore_Iron,7>\nPower: <power:1000>")

    assert isinstance(template, ValidTemplate)
    assert template.elements == (
        Literal("Ore: "),
        ItemCount(resource_key="Ore_Iron", pad_width=7),
        Literal("\nPower: "),
        Power(divisor=1000),
    )


def test_parse_empty_markup_is_valid() -> None:
    assert parse("") == ValidTemplate(elements=())


@pytest.mark.parametrize("markup", ["plain", "<mass>", "x<mass>y<power:5>z", "<gas:h2,3,%>\n\n"])
def test_balanced_markup_is_valid(markup: str) -> None:
    assert isinstance(parse(markup), ValidTemplate)


@pytest.mark.parametrize("markup", ["<", "Val: <mass", "<mass> and <power:10", "<<mass"])
def test_unterminated_markup_is_invalid(markup: str) -> None:
    template = parse(markup)

    assert isinstance(template, InvalidTemplate)
    assert template.error == "UnterminatedTag"


def test_unknown_kind_invalidates_whole_template() -> None:
    template = parse("Mass: <mass> Speed: <speed>")

    assert isinstance(template, InvalidTemplate)
    assert template.error == "UnknownElementKind"
    assert "speed" in template.message


def test_invalid_option_invalidates_whole_template() -> None:
    template = parse("<gas:N2>")

    assert isinstance(template, InvalidTemplate)
    assert template.error == "InvalidOption"


def test_nested_open_bracket_becomes_part_of_tag_body() -> None:
    template = parse("<<mass>")

    assert isinstance(template, InvalidTemplate)
    assert template.error == "UnknownElementKind"


def test_parse_result_elements_are_immutable() -> None:
    template = parse("<mass:dry>")

    assert isinstance(template, ValidTemplate)
    assert template.elements == (Mass(dry=True),)
    with pytest.raises(AttributeError):
        template.elements[0].dry = False  # type: ignore[misc]
