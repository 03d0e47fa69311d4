"""Structured Logging — JSON lines and idempotent setup."""

import json
import logging

from stockroom.infrastructure.observability import (
    HANDLER_NAME, JSONFormatter, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "stockroom.services.stock_ledger", logging.INFO, __file__, 1,
        "Stock adjusted", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_line_has_core_fields():
    entry = json.loads(JSONFormatter().format(_record()))
    assert entry["level"] == "INFO"
    assert entry["logger"] == "stockroom.services.stock_ledger"
    assert entry["msg"] == "Stock adjusted"
    assert "ts" in entry


def test_json_line_includes_domain_fields_only():
    line = JSONFormatter().format(
        _record(product_id=3, delta=-2, stock=4, password="123", sku=None),
    )
    entry = json.loads(line)
    assert (entry["product_id"], entry["delta"], entry["stock"]) == (3, -2, 4)
    assert "password" not in entry
    assert "sku" not in entry


def test_setup_logging_does_not_stack_handlers():
    root = logging.getLogger()
    original_level = root.level
    try:
        setup_logging("DEBUG", "json")
        setup_logging("WARNING", "text")
        ours = [h for h in root.handlers if h.get_name() == HANDLER_NAME]
        assert len(ours) == 1
        assert not isinstance(ours[0].formatter, JSONFormatter)
        assert root.level == logging.WARNING
    finally:
        for handler in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
            root.removeHandler(handler)
        root.setLevel(original_level)
