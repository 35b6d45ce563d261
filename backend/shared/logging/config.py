"""
Structured logging configuration.

Price refresh summaries go to the "backend.events" logger as one JSON
object per line, separate from the pipe-formatted application log
configured in main.py.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

EVENTS_LOGGER = "backend.events"


class StructuredFormatter(logging.Formatter):
    """
    Formats records as JSON lines.

    A record carrying a `refresh_event` dict (passed through `extra=`) has
    its event name, state summary and details written as top-level fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        refresh_event = getattr(record, "refresh_event", None)
        if isinstance(refresh_event, dict):
            log_entry.update(refresh_event)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    logger_name: str = EVENTS_LOGGER,
) -> logging.Logger:
    """
    Route a logger's records to JSON-line handlers.

    The logger stops propagating so its events are not repeated by the
    root handler in the pipe format.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional path to a file that also receives the events.
        logger_name: Name of the logger to configure.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = StructuredFormatter()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def log_refresh_event(
    event: str,
    state: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a price refresh event with a summary of the pipeline state.

    Args:
        event: Name of the event (e.g., "price_refresh_complete")
        state: Current refresh state dictionary (key fields are extracted)
        extra: Event details such as the trip total and fallback records
        logger: Logger instance to use. Defaults to the events logger.
    """
    if logger is None:
        logger = logging.getLogger(EVENTS_LOGGER)

    fallbacks = state.get("fallbacks") or []
    refresh_event = {
        "event": event,
        "state_summary": {
            "session_id": state.get("session_id"),
            "days": len((state.get("itinerary") or {}).get("days") or []),
            "traveler_count": state.get("traveler_count"),
            "fallback_count": len(fallbacks),
        },
        "details": extra or {},
    }

    logger.info(f"Price refresh event: {event}", extra={"refresh_event": refresh_event})
