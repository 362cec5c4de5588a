"""Unit tests for the mock panel board."""

from __future__ import annotations

import json

import pytest

from datastore.panel_board import MockPanelBoard


def test_set_custom_data_creates_panel() -> None:
    board = MockPanelBoard()

    panel = board.set_custom_data("lcd-1", "#infoscreen\n<mass>")

    assert panel.device_id == "lcd-1"
    assert panel.text == ""
    assert board.custom_data() == {"lcd-1": "#infoscreen\n<mass>"}


def test_updating_custom_data_keeps_text() -> None:
    board = MockPanelBoard()
    board.set_custom_data("lcd-1", "first")
    board.write_text("lcd-1", "rendered")

    panel = board.set_custom_data("lcd-1", "second")

    assert panel.custom_data == "second"
    assert panel.text == "rendered"


def test_write_text_to_unknown_panel_raises() -> None:
    board = MockPanelBoard()

    with pytest.raises(KeyError, match="ghost"):
        board.write_text("ghost", "text")


def test_returned_panels_are_copies() -> None:
    board = MockPanelBoard()
    board.set_custom_data("lcd-1", "data")

    fetched = board.get_panel("lcd-1")
    assert fetched is not None
    fetched.text = "changed"

    assert board.get_panel("lcd-1").text == ""  # type: ignore[union-attr]


def test_remove_panel() -> None:
    board = MockPanelBoard()
    board.set_custom_data("lcd-1", "data")

    board.remove_panel("lcd-1")

    assert board.get_panel("lcd-1") is None
    with pytest.raises(KeyError):
        board.remove_panel("lcd-1")


def test_persists_to_disk_and_reloads(tmp_path) -> None:
    path = tmp_path / "panels.json"
    board = MockPanelBoard(persistence_path=path)
    board.set_custom_data("lcd-1", "#infoscreen\n<mass>")
    board.write_text("lcd-1", "42")

    payload = json.loads(path.read_text())
    assert payload["lcd-1"]["text"] == "42"

    reloaded = MockPanelBoard(persistence_path=path)
    assert reloaded.get_panel("lcd-1") == board.get_panel("lcd-1")


def test_corrupt_persistence_file_starts_empty(tmp_path) -> None:
    path = tmp_path / "panels.json"
    path.write_text("{not json")

    board = MockPanelBoard(persistence_path=path)

    assert board.scan() == []
