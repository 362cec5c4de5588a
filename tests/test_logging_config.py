from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("services.registry", logging.INFO, __file__, 1, "Template compiled", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_extras() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    line = formatter.format(_record(device_id="bridge", error="InvalidOption", ignored="x"))

    assert line == "Template compiled | device_id=bridge error=InvalidOption"


def test_formatter_skips_missing_and_none_values() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    assert formatter.format(_record(offset=None)) == "Template compiled"
