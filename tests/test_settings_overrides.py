from __future__ import annotations

from typing import Iterable

from datastore.panel_board import build_default_board
from services.refresher import build_default_refresher
from settings import get_settings


def _clear_caches(caches: Iterable) -> None:
    for cache in caches:
        cache.cache_clear()


def test_environment_overrides_apply(monkeypatch, tmp_path) -> None:
    board_path = tmp_path / "panels.json"

    monkeypatch.setenv("INFOSCREENS_MARKER", "[LCD]")
    monkeypatch.setenv("INFOSCREENS_BOARD_PATH", str(board_path))
    monkeypatch.setenv("LOG_LEVEL", "debug")

    caches = (get_settings, build_default_board, build_default_refresher)
    _clear_caches(caches)

    try:
        settings = get_settings()
        refresher = build_default_refresher()

        assert settings.log_level == "DEBUG"
        assert refresher.registry.marker == "[LCD]"
        assert refresher.board.persistence_path == board_path
    finally:
        _clear_caches(caches)


def test_blank_values_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("INFOSCREENS_MARKER", "   ")
    monkeypatch.setenv("INFOSCREENS_BOARD_PATH", "")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    get_settings.cache_clear()

    try:
        settings = get_settings()

        assert settings.marker == "#infoscreen"
        assert settings.board_persistence_path is None
        assert settings.log_level == "INFO"
    finally:
        get_settings.cache_clear()
