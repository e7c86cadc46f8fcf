r"""Tracing shim: start, tag and finish spans with OpenTelemetry."""

from __future__ import annotations

__all__ = [
    "Tracer",
    "finish_span",
    "get_tracer",
    "load",
    "set_span_error",
    "set_span_tag",
    "start_span",
    "stop",
]

from svckit.tracing.tracer import (
    Tracer,
    finish_span,
    get_tracer,
    load,
    set_span_error,
    set_span_tag,
    start_span,
    stop,
)
