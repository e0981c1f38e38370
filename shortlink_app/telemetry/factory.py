"""
Factory for creating telemetry instances.
Simple, clean factory with singleton caching.
"""

import logging
from enum import Enum

from .strategies import TelemetryStrategy, HttpTelemetryClient, InMemoryTelemetry, NullTelemetry
from shortlink_app.config import settings

logger = logging.getLogger(__name__)


class TelemetryBackend(Enum):
    """Available telemetry backends"""
    HTTP = "http"
    MEMORY = "memory"
    NULL = "null"


class TelemetryFactory:
    """
    Simple factory for creating telemetry instances.
    
    Uses Singleton Pattern - creates instance once, reuses it.
    Gets configuration from settings (not passed as parameters).
    """
    
    _instance: TelemetryStrategy = None  # Single cached instance
    
    @classmethod
    def create(cls, backend: TelemetryBackend) -> TelemetryStrategy:
        """
        Create or return cached telemetry instance.
        
        Args:
            backend: Type of telemetry backend (from enum)
            
        Returns:
            Singleton telemetry instance
        """
        if cls._instance is not None:
            return cls._instance
        
        if backend == TelemetryBackend.HTTP:
            cls._instance = HttpTelemetryClient(
                base_url=settings.telemetry_endpoint,
                auth_token=settings.telemetry_auth_token,
                timeout=settings.telemetry_timeout,
            )
            logger.info("HTTP telemetry initialized (%s)", settings.telemetry_endpoint)
            
        elif backend == TelemetryBackend.MEMORY:
            cls._instance = InMemoryTelemetry()
            logger.info("In-memory telemetry initialized")
            
        elif backend == TelemetryBackend.NULL:
            cls._instance = NullTelemetry()
            logger.info("Null telemetry initialized")
            
        else:
            raise ValueError(f"Unknown telemetry backend: {backend}")
        
        return cls._instance
    
    @classmethod
    def clear_instance(cls):
        """Close and clear cached instance (for testing and shutdown)"""
        if cls._instance is not None:
            cls._instance.close()
        cls._instance = None
