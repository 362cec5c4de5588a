"""Per-device template bindings with change detection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Mapping, Optional

from models.snapshot import Snapshot
from services.parser import parse
from services.template import InvalidTemplate, Template, ValidTemplate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PanelBinding:
    """A display device bound to the template compiled from its field."""

    device_id: str
    raw_text: str
    template: Template


class BindingRegistry:
    """Tracks which devices carry markup and keeps their compiled templates.

    Templates are recompiled only when a device's field text changes by
    value; otherwise the stored template is reused across cycles.
    """

    def __init__(self, marker: str, parser: Callable[[str], Template] = parse) -> None:
        self.marker = marker
        self._parser = parser
        self._bindings: Dict[str, PanelBinding] = {}

    def __len__(self) -> int:
        return len(self._bindings)

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._bindings

    @property
    def device_ids(self) -> list[str]:
        return list(self._bindings)

    def get(self, device_id: str) -> Optional[PanelBinding]:
        return self._bindings.get(device_id)

    def forget(self, device_id: str) -> None:
        if self._bindings.pop(device_id, None) is not None:
            logger.info("Binding removed", extra={"device_id": device_id})

    def observe(self, device_id: str, field_text: str) -> Optional[PanelBinding]:
        """Reconcile one device's binding with its current field text."""
        if not field_text.startswith(self.marker):
            self.forget(device_id)
            return None

        current = self._bindings.get(device_id)
        if current is not None and current.raw_text == field_text:
            return current

        template = self._parser(self.strip_marker(field_text))
        binding = PanelBinding(device_id=device_id, raw_text=field_text, template=template)
        self._bindings[device_id] = binding

        if isinstance(template, InvalidTemplate):
            logger.warning(
                "Template failed to compile",
                extra={"device_id": device_id, "error": template.error, "reason": template.message},
            )
        else:
            logger.info(
                "Template compiled" if current is None else "Template recompiled",
                extra={"device_id": device_id},
            )
        return binding

    def sync(self, fields: Mapping[str, str]) -> None:
        """Observe every device and drop bindings for devices no longer present."""
        for device_id, field_text in fields.items():
            self.observe(device_id, field_text)
        self._forget_missing(fields.keys())

    def render_all(self, snapshot: Snapshot) -> Dict[str, str]:
        """Render every bound device against the same snapshot."""
        outputs: Dict[str, str] = {}
        for device_id, binding in self._bindings.items():
            template = binding.template
            if isinstance(template, ValidTemplate):
                outputs[device_id] = template.evaluate(snapshot)
            else:
                outputs[device_id] = template.message
        return outputs

    def strip_marker(self, field_text: str) -> str:
        """Drop the marker line, returning the template body."""
        _, newline, body = field_text.partition("\n")
        return body if newline else ""

    def _forget_missing(self, present: Iterable[str]) -> None:
        keep = set(present)
        for device_id in [device for device in self._bindings if device not in keep]:
            self.forget(device_id)
