"""Markup scanning and template compilation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Literal as LiteralType

from models.elements import Literal, TemplateElement
from models.errors import TemplateError, UnterminatedTag
from services.builder import build_element
from services.template import InvalidTemplate, Template, ValidTemplate

logger = logging.getLogger(__name__)

TAG_OPEN = "<"
TAG_CLOSE = ">"


@dataclass(frozen=True, slots=True)
class Token:
    kind: LiteralType["literal", "tag"]
    text: str
    offset: int


def tokenize(markup: str) -> Iterator[Token]:
    """Split markup into literal runs and tag bodies, left to right.

    Raises :class:`UnterminatedTag` when input ends inside a tag.
    """
    start = 0
    in_tag = False
    for cursor, char in enumerate(markup):
        if not in_tag and char == TAG_OPEN:
            if cursor > start:
                yield Token("literal", markup[start:cursor], start)
            start = cursor + 1
            in_tag = True
        elif in_tag and char == TAG_CLOSE:
            yield Token("tag", markup[start:cursor], start)
            start = cursor + 1
            in_tag = False

    if in_tag:
        raise UnterminatedTag(start - 1)
    if start < len(markup):
        yield Token("literal", markup[start:], start)


def parse(markup: str) -> Template:
    """Compile markup into a :class:`ValidTemplate` or :class:`InvalidTemplate`."""
    elements: list[TemplateElement] = []
    try:
        for token in tokenize(markup):
            if token.kind == "literal":
                elements.append(Literal(token.text))
            else:
                elements.append(build_element(token.text))
    except TemplateError as exc:
        logger.debug(
            "Template rejected",
            extra={
                "error": type(exc).__name__,
                "reason": str(exc),
                "offset": getattr(exc, "offset", None),
            },
        )
        return InvalidTemplate(message=str(exc), error=type(exc).__name__)
    return ValidTemplate(elements=tuple(elements))
