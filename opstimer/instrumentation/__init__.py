"""
Instrumentation module for throughput benchmarking.

Provides the clock, timing utilities and tracing integration.
"""

from .timing import (
    Clock,
    Timer,
    default_clock,
    format_duration,
    timed,
)

from .traces import (
    Tracer,
    TracingConfig,
    OTEL_AVAILABLE,
)

__all__ = [
    # Timing
    "Clock",
    "Timer",
    "default_clock",
    "format_duration",
    "timed",
    # Tracing
    "Tracer",
    "TracingConfig",
    "OTEL_AVAILABLE",
]
