import logging
from typing import Any

import pytest
import structlog
from structlog.testing import capture_logs

from src.core.analytics.aggregate import calculate_aggregate_stats
from src.core.observability import (
    analysis_trace_wrapper,
    configure_logging,
    summarize_value,
    trace_performance,
)


def test_trace_wrapper_logs_entry_and_completion() -> None:
    @analysis_trace_wrapper(log_level="INFO")
    def _score(matches: list[int], puuid: str) -> int:
        return len(matches)

    with capture_logs() as cap:
        assert _score([1, 2, 3], "abc") == 3

    assert [e["log_level"] for e in cap] == ["info", "info"]
    entry, done = cap
    assert entry["event"].startswith("Executing function:")
    assert entry["inputs"] == [{"type": "list", "len": 3}, "abc"]
    assert done["event"].startswith("Successfully executed:")
    assert done["duration_ms"] >= 0
    assert done["result"] == 3
    assert entry["execution_id"] == done["execution_id"]


def test_trace_wrapper_logs_and_reraises_errors() -> None:
    @trace_performance
    def _boom() -> None:
        raise ValueError("bad payload")

    with capture_logs() as cap, pytest.raises(ValueError):
        _boom()

    errors = [e for e in cap if e["log_level"] == "error"]
    assert len(errors) == 1
    assert errors[0]["error_type"] == "ValueError"
    assert errors[0]["error_message"] == "bad payload"


def test_execution_id_is_unbound_after_call() -> None:
    @trace_performance
    def _noop() -> None:
        return None

    _noop()
    assert "execution_id" not in structlog.contextvars.get_contextvars()


def test_engine_entry_points_are_traced() -> None:
    with capture_logs() as cap:
        calculate_aggregate_stats([], "puuid")

    events: list[dict[str, Any]] = [e for e in cap if "calculate_aggregate_stats" in e["event"]]
    assert len(events) == 2
    assert all(e["log_level"] == "debug" for e in events)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        (3, 3),
        ("short", "short"),
        ({"a": 1}, {"type": "dict", "len": 1}),
        ((1, 2), {"type": "tuple", "len": 2}),
    ],
)
def test_summarize_value(value: Any, expected: Any) -> None:
    assert summarize_value(value) == expected


def test_summarize_value_truncates() -> None:
    assert summarize_value("x" * 500, max_length=10) == "x" * 10 + "..."


def test_configure_logging_leaves_root_logger_alone() -> None:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level

    configure_logging()

    assert root.handlers == handlers
    assert root.level == level
