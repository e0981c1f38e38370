"""
Test configuration and fixtures for the short link service.
This centralizes all test setup, making individual tests clean.
"""

import os

# Never talk to the real collector from tests
os.environ.setdefault("TELEMETRY_BACKEND", "null")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from main import app
from shortlink_app.dependencies import get_registry, get_telemetry
from shortlink_app.services.link_service import LinkService
from shortlink_app.services.registry import LinkRegistry
from shortlink_app.telemetry.strategies import InMemoryTelemetry


class FakeClock:
    """Manually advanced clock so expiry tests are deterministic"""
    
    def __init__(self, start: datetime):
        self.current = start
    
    def __call__(self) -> datetime:
        return self.current
    
    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def registry(clock):
    """Fresh, empty registry for each test"""
    return LinkRegistry(clock=clock, default_validity_minutes=30, max_retries=5)


@pytest.fixture
def telemetry():
    return InMemoryTelemetry()


@pytest.fixture
def link_service(registry, telemetry):
    return LinkService(registry=registry, telemetry=telemetry, max_batch_size=5)


@pytest.fixture
def client(registry, telemetry):
    """
    Create a test client with registry and telemetry overridden.
    This is the main fixture that API tests will use.
    """
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_telemetry] = lambda: telemetry
    
    with TestClient(app) as test_client:
        yield test_client
    
    # Clean up overrides
    app.dependency_overrides.clear()
