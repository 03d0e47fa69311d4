"""Structured Logging — one root handler, JSON in production, text in development.

Invariants:
    - Every JSON line carries ts, level, logger and msg; the known domain
      fields (user_id, product_id, sku, delta, ...) are added only when set
    - The event time is the record's creation time, not the format time
    - Plaintext passwords and tokens are never passed as extra fields
    - setup_logging replaces its own handler instead of stacking a second one

Design Decisions:
    - stdlib logging with a small formatter: services only ever call
      logger.info(msg, extra={...})
    - Uvicorn keeps its own access log handlers; only the root is touched
"""

import json
import logging
from datetime import datetime, timezone

HANDLER_NAME = "stockroom"

DOMAIN_FIELDS = frozenset({
    "error_code", "path",
    "user_id", "login", "actor",
    "product_id", "sku", "delta", "stock", "attempt",
})

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update(
            (key, value) for key, value in vars(record).items()
            if key in DOMAIN_FIELDS and value is not None
        )
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _build_handler(fmt: str) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    formatter = JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT)
    handler.setFormatter(formatter)
    return handler


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the stockroom handler on the root logger."""
    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(handler)
    root.addHandler(_build_handler(fmt))
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))
