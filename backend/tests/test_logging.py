"""
Tests for structured refresh logging.
"""

import json
import logging

import pytest

from backend.shared.logging.config import StructuredFormatter, log_refresh_event, setup_logging


def _make_state():
    return {
        "session_id": "test-session",
        "itinerary": {"days": [{"day": 1}, {"day": 2}]},
        "traveler_count": 2,
        "fallbacks": [{"source": "hotel", "status": "fallback", "day": 1}],
    }


def _read_last_entry(log_file):
    return json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])


class TestStructuredLogging:
    """Tests for the JSON formatter and refresh event summaries."""

    def test_formatter_outputs_json(self):
        record = logging.LogRecord("backend.test", logging.INFO, "", 0, "hello %s", ("world",), None)
        entry = json.loads(StructuredFormatter().format(record))

        assert entry["message"] == "hello world"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "backend.test"
        assert entry["timestamp"].endswith("Z")
        assert "event" not in entry

    def test_refresh_event_fields_are_top_level(self, tmp_path):
        log_file = tmp_path / "events.log"
        logger = setup_logging(log_file=str(log_file), logger_name="backend.test_events")

        log_refresh_event(
            "price_refresh_complete",
            _make_state(),
            extra={"estimated_total_budget": 465},
            logger=logger,
        )

        entry = _read_last_entry(log_file)
        assert entry["event"] == "price_refresh_complete"
        assert entry["state_summary"] == {
            "session_id": "test-session",
            "days": 2,
            "traveler_count": 2,
            "fallback_count": 1,
        }
        assert entry["details"] == {"estimated_total_budget": 465}

    def test_setup_replaces_handlers_and_stops_propagation(self, tmp_path):
        setup_logging(log_file=str(tmp_path / "a.log"), logger_name="backend.test_reconfigure")
        logger = setup_logging(logger_name="backend.test_reconfigure")

        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_app_routes_refresh_events_to_json(self):
        import backend.main  # noqa: F401

        logger = logging.getLogger("backend.events")
        assert logger.propagate is False
        assert all(isinstance(h.formatter, StructuredFormatter) for h in logger.handlers)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
