"""Refresh cycle orchestration for bound display panels."""

from __future__ import annotations

import logging
import time
from functools import lru_cache
from threading import Lock
from typing import Dict, Optional

from datastore.panel_board import MockPanelBoard, build_default_board
from models.snapshot import Snapshot
from services.registry import BindingRegistry
from settings import get_settings

logger = logging.getLogger(__name__)


class ScreenRefresher:
    """Owns the binding registry and drives one cycle at a time.

    Each cycle reads every panel's custom data, reconciles bindings, renders
    all bound templates against one shared snapshot and writes the results
    back to the board.
    """

    def __init__(self, board: MockPanelBoard, registry: BindingRegistry) -> None:
        self.board = board
        self.registry = registry
        self._cycle_lock = Lock()

    def run_cycle(self, snapshot: Snapshot) -> Dict[str, str]:
        with self._cycle_lock:
            start_time = time.perf_counter()
            self.registry.sync(self.board.custom_data())
            outputs = self.registry.render_all(snapshot)
            for device_id, text in outputs.items():
                try:
                    self.board.write_text(device_id, text)
                except KeyError:
                    logger.warning(
                        "Panel disappeared before write",
                        extra={"device_id": device_id},
                    )
                    self.registry.forget(device_id)
            render_ms = int((time.perf_counter() - start_time) * 1000)
            logger.debug(
                "Refresh cycle complete",
                extra={"bound_count": len(outputs), "render_ms": render_ms},
            )
            return outputs

    def observe_panel(self, device_id: str, custom_data: str) -> bool:
        """Reconcile one panel's binding right away; returns whether it is bound."""
        with self._cycle_lock:
            return self.registry.observe(device_id, custom_data) is not None

    def is_bound(self, device_id: str) -> bool:
        return device_id in self.registry


@lru_cache
def build_default_refresher(marker: Optional[str] = None) -> ScreenRefresher:
    """Factory that wires the refresher with the default panel board."""
    settings = get_settings()
    registry = BindingRegistry(marker=settings.marker if marker is None else marker)
    return ScreenRefresher(board=build_default_board(), registry=registry)
