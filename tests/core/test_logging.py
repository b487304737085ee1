from __future__ import annotations

import logging

from coursehub.core.logging import (
    _ContainerFormatter,
    _RequestContextFilter,
    request_id_var,
    setup_logging,
)


def _record(level: int = logging.INFO, msg: str = "hello", lineno: int = 1):
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="test.py",
        lineno=lineno,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_setup_logging_sets_root_level() -> None:
    setup_logging("debug")
    assert logging.getLogger().level == logging.DEBUG

    setup_logging("warning")
    assert logging.getLogger().level == logging.WARNING


def test_setup_logging_defaults_to_info_for_unknown_level() -> None:
    setup_logging("nonexistent")
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_quiets_noisy_libraries_at_debug() -> None:
    setup_logging("debug")
    assert logging.getLogger("uvicorn").level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_setup_logging_allows_uvicorn_at_error() -> None:
    setup_logging("error")
    assert logging.getLogger("uvicorn").level == logging.ERROR


def test_setup_logging_installs_single_handler_with_request_filter() -> None:
    setup_logging("info")
    setup_logging("info")
    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert any(isinstance(f, _RequestContextFilter) for f in handlers[0].filters)


def test_request_filter_copies_context_var() -> None:
    token = request_id_var.set("req-42")
    try:
        record = _record()
        assert _RequestContextFilter().filter(record) is True
        assert record.request_id == "req-42"  # type: ignore[attr-defined]
    finally:
        request_id_var.reset(token)


def test_request_filter_defaults_outside_a_request() -> None:
    record = _record()
    _RequestContextFilter().filter(record)
    assert record.request_id == "-"  # type: ignore[attr-defined]


def test_formatter_excludes_location_for_info() -> None:
    output = _ContainerFormatter().format(_record())
    assert "hello" in output
    assert "[test.py:" not in output


def test_formatter_includes_location_for_warning() -> None:
    output = _ContainerFormatter().format(
        _record(logging.WARNING, "bad thing", lineno=42)
    )
    assert "bad thing" in output
    assert "[test.py:42]" in output
