"""
Tracing utilities for throughput benchmarking.

Wraps each candidate measurement in an OpenTelemetry span so long
comparison runs can be inspected alongside other traced tooling.
"""

import os
from contextlib import contextmanager
from typing import Any, Iterator, Optional

# OpenTelemetry imports - optional dependency
try:
    from opentelemetry import trace
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import (
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.trace import Status, StatusCode
    OTEL_AVAILABLE = True
except ImportError:
    OTEL_AVAILABLE = False
    trace = None


class TracingConfig:
    """Configuration for tracing setup."""

    def __init__(
        self,
        service_name: str = "opstimer",
        enabled: Optional[bool] = None,
        enable_console_export: bool = True,
    ):
        self.service_name = service_name
        if enabled is None:
            enabled = os.getenv("OPSTIMER_TRACING", "").lower() in ("1", "true", "yes")
        self.enabled = enabled
        self.enable_console_export = enable_console_export


class Tracer:
    """OpenTelemetry tracer that degrades to a no-op when disabled."""

    def __init__(self, config: Optional[TracingConfig] = None):
        self.config = config or TracingConfig()
        self._otel_tracer = None
        self._provider = None
        self._initialized = False

    @property
    def active(self) -> bool:
        """True when spans are actually being recorded."""
        return self._otel_tracer is not None

    def initialize(self) -> "Tracer":
        """Initialize the tracing backend."""
        if self._initialized:
            return self

        if OTEL_AVAILABLE and self.config.enabled:
            resource = Resource.create({"service.name": self.config.service_name})
            provider = TracerProvider(resource=resource)

            if self.config.enable_console_export:
                processor = SimpleSpanProcessor(ConsoleSpanExporter())
                provider.add_span_processor(processor)

            self._provider = provider
            self._otel_tracer = provider.get_tracer(self.config.service_name)

        self._initialized = True
        return self

    def shutdown(self) -> None:
        """Flush and shut down the tracing backend."""
        if self._provider is not None:
            self._provider.shutdown()
            self._provider = None
            self._otel_tracer = None

    @contextmanager
    def span(
        self,
        name: str,
        attributes: Optional[dict] = None,
    ) -> Iterator[Any]:
        """Create a traced span; yields None when tracing is off.

        Usage:
            with tracer.span("opstimer.measure", {"candidate": "f"}) as span:
                # do work
                if span:
                    span.set_attribute("iterations", n)
        """
        if not self._initialized:
            self.initialize()

        span_obj = None
        if self._otel_tracer:
            span_obj = self._otel_tracer.start_span(name)
            if attributes:
                for key, value in attributes.items():
                    span_obj.set_attribute(key, value)

        try:
            yield span_obj
        except Exception as e:
            if span_obj and OTEL_AVAILABLE:
                span_obj.set_status(Status(StatusCode.ERROR, str(e)))
                span_obj.record_exception(e)
            raise
        finally:
            if span_obj:
                span_obj.end()
