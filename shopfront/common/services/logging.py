import json
import logging
import sys
from datetime import datetime, timezone

EVENT_LOGGER_NAME = "shopfront.events"

_event_logger = logging.getLogger(EVENT_LOGGER_NAME)


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger("shopfront")
    root.setLevel(level.upper())
    if not any(getattr(h, "_shopfront_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        handler._shopfront_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)


def log_event(level: str, event: str, **fields) -> None:
    payload = {
        "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "level": level.lower(),
        "event": event,
    }
    payload.update(fields or {})
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    _event_logger.log(numeric_level, json.dumps(payload, ensure_ascii=False, default=str))
