import logging

from fastapi import FastAPI

from optica.core.config import Settings
from optica.core.observability import (
    NullEventLogger,
    RecordingEventLogger,
    StdlibEventLogger,
    setup_tracer,
)


def test_stdlib_event_logger_puts_fields_in_context(caplog):
    caplog.set_level(logging.INFO, logger="optica.test")
    StdlibEventLogger("optica.test").info("Service: op started", operation="op", input={"id": 1})

    record = caplog.records[-1]
    assert record.getMessage() == "Service: op started"
    assert record.context == {"operation": "op", "input": {"id": 1}}


def test_recording_event_logger_filters_by_level():
    logger = RecordingEventLogger()
    logger.info("a")
    logger.error("b", error="boom")
    logger.debug("c")

    assert logger.messages() == ["a", "b", "c"]
    assert logger.messages(logging.ERROR) == ["b"]
    assert logger.events[1] == (logging.ERROR, "b", {"error": "boom"})


def test_null_event_logger_discards():
    NullEventLogger().warning("ignored", anything=True)


def test_tracer_is_not_attached_unless_enabled(monkeypatch):
    monkeypatch.setenv("ENABLE_TRACING", "false")
    app = FastAPI()
    setup_tracer(app, Settings(_env_file=None))
    assert not getattr(app, "_is_instrumented_by_opentelemetry", False)
