"""Shared telemetry: logging setup, OpenTelemetry tracing and span helpers."""

from app.shared.telemetry.logging import setup_logging
from app.shared.telemetry.telemetry import Telemetry
from app.shared.telemetry.tracing import add_span_attributes, traced

__all__ = [
    "Telemetry",
    "add_span_attributes",
    "setup_logging",
    "traced",
]
