"""Compiled templates and their evaluation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple, TypeAlias

from models.elements import TemplateElement
from models.snapshot import Snapshot
from services.renderer import render_element

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ValidTemplate:
    """An ordered sequence of elements ready to render."""

    elements: Tuple[TemplateElement, ...]

    def evaluate(self, snapshot: Snapshot) -> str:
        """Render every element against ``snapshot`` and join the results.

        A failing element turns the whole output into a diagnostic line
        instead of leaving partial text on the display.
        """
        parts: list[str] = []
        for element in self.elements:
            try:
                parts.append(render_element(element, snapshot))
            except Exception as exc:  # noqa: BLE001 - never crash the refresh cycle
                logger.exception(
                    "Element failed to render",
                    extra={"element_kind": type(element).__name__, "reason": str(exc)},
                )
                return f"Template error: {exc}"
        return "".join(parts)


@dataclass(frozen=True, slots=True)
class InvalidTemplate:
    """Outcome of a failed parse; ``message`` is shown in place of output."""

    message: str
    error: str


Template: TypeAlias = ValidTemplate | InvalidTemplate
