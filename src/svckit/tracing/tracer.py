r"""Thin tracing layer on top of OpenTelemetry.

A ``Tracer`` owns its own ``TracerProvider`` so several services (or
tests) can coexist in one process. ``load`` additionally registers a
default tracer as the global OpenTelemetry provider.
"""

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

import logging
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from collections.abc import Mapping

    from opentelemetry.context import Context
    from opentelemetry.sdk.trace.export import SpanExporter
    from opentelemetry.trace import Span

logger: logging.Logger = logging.getLogger(__name__)

_default_tracer: Tracer | None = None


class Tracer:
    r"""Start spans on behalf of a service.

    Args:
        service: The service name, exported as ``service.name``.
        env: Optional deployment environment, exported as
            ``deployment.environment``.
        version: Optional service version, exported as
            ``service.version``.
        provider: Optional provider to use instead of a new one. Its
            resource is left untouched.

    Example:
        ```pycon
        >>> from svckit.tracing import Tracer, finish_span
        >>> tracer = Tracer("orders", env="dev", version="1.2.0")
        >>> span, ctx = tracer.start_span("load-order")
        >>> finish_span(span)

        ```
    """

    def __init__(
        self,
        service: str,
        env: str | None = None,
        version: str | None = None,
        *,
        provider: TracerProvider | None = None,
    ) -> None:
        self.service = service
        self.env = env
        self.version = version
        if provider is None:
            attributes: dict[str, str] = {"service.name": service}
            if env is not None:
                attributes["deployment.environment"] = env
            if version is not None:
                attributes["service.version"] = version
            provider = TracerProvider(resource=Resource.create(attributes))
        self.provider = provider
        self._tracer = provider.get_tracer(service, version)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(service={self.service!r}, env={self.env!r}, "
            f"version={self.version!r})"
        )

    def start_span(
        self,
        name: str,
        context: Context | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> tuple[Span, Context]:
        """Start a span, child of the span active in ``context``.

        Args:
            name: The span name.
            context: Optional parent context. The current context is used
                when omitted.
            attributes: Optional initial tags.

        Returns:
            The started span and a context in which it is the active span,
            to pass to child spans.
        """
        span = self._tracer.start_span(name, context=context)
        for key, value in (attributes or {}).items():
            set_span_tag(span, key, value)
        return span, trace.set_span_in_context(span, context)

    def shutdown(self) -> None:
        """Flush pending spans and release the exporters."""
        self.provider.shutdown()


def load(
    service: str,
    env: str | None = None,
    version: str | None = None,
    exporter: SpanExporter | None = None,
) -> Tracer:
    """Create the default tracer and register it globally.

    Args:
        service: The service name.
        env: Optional deployment environment.
        version: Optional service version.
        exporter: Optional exporter receiving the finished spans through a
            ``BatchSpanProcessor``.

    Returns:
        The default tracer.
    """
    global _default_tracer  # noqa: PLW0603
    if _default_tracer is not None:
        logger.warning(f"Tracer already loaded for service {_default_tracer.service!r}")
        return _default_tracer

    tracer = Tracer(service, env=env, version=version)
    if exporter is not None:
        tracer.provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(tracer.provider)
    _default_tracer = tracer
    logger.info(f"Tracing enabled for service {service!r} (env={env}, version={version})")
    return tracer


def stop() -> None:
    """Flush and shut down the default tracer, if loaded."""
    global _default_tracer  # noqa: PLW0603
    if _default_tracer is None:
        return
    _default_tracer.shutdown()
    _default_tracer = None


def get_tracer() -> Tracer:
    """Return the default tracer.

    Raises:
        RuntimeError: If ``load`` has not been called.
    """
    if _default_tracer is None:
        msg = "No tracer loaded, call svckit.tracing.load() first"
        raise RuntimeError(msg)
    return _default_tracer


def start_span(
    name: str,
    context: Context | None = None,
    attributes: Mapping[str, Any] | None = None,
) -> tuple[Span, Context]:
    """Start a span with the default tracer (see ``Tracer.start_span``)."""
    return get_tracer().start_span(name, context=context, attributes=attributes)


def finish_span(span: Span | None) -> None:
    if span is not None:
        span.end()


def set_span_error(span: Span | None, error: BaseException | None) -> None:
    """Mark the span as failed with ``error``.

    Nothing happens if either argument is ``None``.
    """
    if span is None or error is None:
        return
    span.record_exception(error)
    span.set_status(Status(StatusCode.ERROR, str(error)))
    span.set_attribute("error", True)


def set_span_tag(span: Span | None, key: str, value: Any) -> None:
    """Set a tag on the span.

    Values OpenTelemetry cannot store as attributes (``None``, mappings,
    arbitrary objects) are rendered with ``str``.
    """
    if span is None:
        return
    if not isinstance(value, (str, bool, int, float)):
        value = str(value)
    span.set_attribute(key, value)
