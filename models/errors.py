"""Errors raised while compiling template markup."""

from __future__ import annotations


class TemplateError(ValueError):
    """Base class for parse-time template failures."""


class UnterminatedTag(TemplateError):
    """The markup ended while a ``<`` tag was still open."""

    def __init__(self, offset: int) -> None:
        super().__init__(f"Unterminated tag starting at offset {offset}.")
        self.offset = offset


class UnknownElementKind(TemplateError):
    """The tag kind is not one of the supported placeholders."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"Unknown element kind {kind!r}.")
        self.kind = kind


class InvalidOption(TemplateError):
    """A tag argument failed to parse or is outside its allowed values."""

    def __init__(self, kind: str, reason: str) -> None:
        super().__init__(f"Invalid option for {kind!r}: {reason}")
        self.kind = kind
        self.reason = reason
