"""
Telemetry module for remote structured logging.
Implements Strategy Pattern for flexible delivery backends.
"""

from .models import TelemetryEvent, Origin, Severity, is_valid_category
from .strategies import TelemetryStrategy, HttpTelemetryClient, InMemoryTelemetry, NullTelemetry
from .factory import TelemetryFactory, TelemetryBackend

__all__ = [
    "TelemetryEvent",
    "Origin",
    "Severity",
    "is_valid_category",
    "TelemetryStrategy",
    "HttpTelemetryClient",
    "InMemoryTelemetry",
    "NullTelemetry",
    "TelemetryFactory",
    "TelemetryBackend",
]
