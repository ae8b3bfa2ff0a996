"""Observability helpers for logging and tracing.

Environment knobs (see ``Settings``):

- LOG_LEVEL (default: INFO): root logger level
- ENABLE_TRACING (default: 0): attach an OpenTelemetry tracer to the app
- OTEL_TRACES_SAMPLER_RATIO (default: 1.0): trace sampling ratio, 0.0 to 1.0

Services do not talk to ``logging`` directly. They receive an
``EventLogger`` and emit structured ``message + key/value`` events, so tests
can swap in ``NullEventLogger`` or ``RecordingEventLogger``.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Any

from pythonjsonlogger import jsonlogger
from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

from .config import Settings


def _parse_bool(value: str | bool | None, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def setup_logging(settings: Settings) -> None:
    """Configure structured JSON logging."""
    handler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers = [handler]
    level_name = (os.getenv("LOG_LEVEL") or settings.LOG_LEVEL or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    root.setLevel(level)
    # Quiet Uvicorn's access logger (HTTP request lines) when not debugging
    access_logger = logging.getLogger("uvicorn.access")
    disable_access = _parse_bool(os.getenv("DISABLE_ACCESS_LOG"), level >= logging.WARNING)
    if disable_access:
        access_logger.handlers = []
        access_logger.propagate = False
        access_logger.disabled = True
    else:
        access_logger.setLevel(level)


def setup_tracer(app, settings: Settings) -> None:
    """Attach an OpenTelemetry tracer to the FastAPI app."""
    if not settings.ENABLE_TRACING:
        return
    resource = Resource(attributes={"service.name": "optica-api"})
    provider = TracerProvider(
        resource=resource,
        sampler=ParentBased(TraceIdRatioBased(settings.OTEL_TRACES_SAMPLER_RATIO)),
    )
    provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)
    FastAPIInstrumentor.instrument_app(app, excluded_urls="/health")


class EventLogger(ABC):
    """Structured event sink injected into services and repositories."""

    @abstractmethod
    def log(self, level: int, message: str, **fields: Any) -> None: ...

    def debug(self, message: str, **fields: Any) -> None:
        self.log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self.log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self.log(logging.WARNING, message, **fields)

    def error(self, message: str, **fields: Any) -> None:
        self.log(logging.ERROR, message, **fields)


class StdlibEventLogger(EventLogger):
    """Forward events to a ``logging.Logger``; fields land under ``context``."""

    def __init__(self, name: str = "optica") -> None:
        self._logger = logging.getLogger(name)

    def log(self, level: int, message: str, **fields: Any) -> None:
        self._logger.log(level, message, extra={"context": fields})


class NullEventLogger(EventLogger):
    def log(self, level: int, message: str, **fields: Any) -> None:
        return None


class RecordingEventLogger(EventLogger):
    """Keep every event in memory; used by the test-suite."""

    def __init__(self) -> None:
        self.events: list[tuple[int, str, dict[str, Any]]] = []

    def log(self, level: int, message: str, **fields: Any) -> None:
        self.events.append((level, message, fields))

    def messages(self, level: int | None = None) -> list[str]:
        return [m for lvl, m, _ in self.events if level is None or lvl == level]
