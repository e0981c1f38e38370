"""
FastAPI dependencies for dependency injection.

This module provides the process-wide registry and telemetry client
that are injected into services and routes.

Pattern: Dependency Injection
- Tests swap in their own registry/telemetry via app.dependency_overrides
- Backends are chosen from settings, not hard-coded
"""

from functools import lru_cache

from fastapi import Depends

from shortlink_app.config import settings
from shortlink_app.services.link_service import LinkService
from shortlink_app.services.registry import LinkRegistry
from shortlink_app.telemetry.factory import TelemetryBackend, TelemetryFactory
from shortlink_app.telemetry.strategies import TelemetryStrategy


@lru_cache()
def get_registry() -> LinkRegistry:
    """
    Get the link registry (singleton).
    
    Created empty on first use, lives as long as the process.
    """
    return LinkRegistry(
        default_validity_minutes=settings.default_validity_minutes,
        max_validity_minutes=settings.max_validity_minutes,
        max_retries=settings.max_retries,
    )


def get_telemetry() -> TelemetryStrategy:
    """
    Get telemetry instance (singleton held by the factory).
    
    Not lru_cached: the factory drops its instance on shutdown.
    """
    backend = TelemetryBackend(settings.telemetry_backend)
    return TelemetryFactory.create(backend)


def get_link_service(
    registry: LinkRegistry = Depends(get_registry),
    telemetry: TelemetryStrategy = Depends(get_telemetry)
) -> LinkService:
    """Get LinkService with all dependencies injected."""
    return LinkService(registry=registry, telemetry=telemetry)
