from __future__ import annotations
import json
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Dict, Optional

from app.schemas import PanelState
from settings import get_settings


class MockPanelBoard:
    """Stand-in for the host's text panels: custom data in, rendered text out."""

    def __init__(self, persistence_path: Optional[Path] = None) -> None:
        self._panels: Dict[str, PanelState] = {}
        self.persistence_path = persistence_path
        self._lock = Lock()
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def set_custom_data(self, device_id: str, custom_data: str) -> PanelState:
        with self._lock:
            existing = self._panels.get(device_id)
            text = existing.text if existing is not None else ""
            panel = PanelState(device_id=device_id, custom_data=custom_data, text=text)
            self._panels[device_id] = panel
            self._persist()
            return panel.model_copy()

    def write_text(self, device_id: str, text: str) -> None:
        with self._lock:
            panel = self._panels.get(device_id)
            if panel is None:
                raise KeyError(f"Panel {device_id!r} not found.")
            self._panels[device_id] = panel.model_copy(update={"text": text})
            self._persist()

    def get_panel(self, device_id: str) -> Optional[PanelState]:
        with self._lock:
            panel = self._panels.get(device_id)
            return panel.model_copy() if panel is not None else None

    def remove_panel(self, device_id: str) -> None:
        with self._lock:
            if self._panels.pop(device_id, None) is None:
                raise KeyError(f"Panel {device_id!r} not found.")
            self._persist()

    def custom_data(self) -> Dict[str, str]:
        """Snapshot of every panel's custom data field, keyed by device id."""
        with self._lock:
            return {device_id: panel.custom_data for device_id, panel in self._panels.items()}

    def scan(self) -> list[PanelState]:
        with self._lock:
            return [panel.model_copy() for panel in self._panels.values()]

    def _persist(self) -> None:
        if not self.persistence_path:
            return
        payload = {
            device_id: panel.model_dump(mode="json") for device_id, panel in self._panels.items()
        }
        self.persistence_path.write_text(json.dumps(payload, indent=2, sort_keys=True))

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "{}"
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            data = {}

        for device_id, payload in data.items():
            self._panels[device_id] = PanelState.model_validate(payload)


@lru_cache
def build_default_board(path: Optional[str] = None) -> MockPanelBoard:
    settings = get_settings()
    board_path = settings.board_persistence_path if path is None else path
    return MockPanelBoard(persistence_path=Path(board_path) if board_path else None)
