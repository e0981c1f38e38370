"""
Data models for telemetry events.
"""

from enum import Enum
from typing import Dict, FrozenSet

from pydantic import BaseModel, Field


class Origin(str, Enum):
    """Which side of the application emitted the event"""
    FRONTEND = "frontend"
    BACKEND = "backend"


class Severity(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


FRONTEND_CATEGORIES = frozenset({"api", "component", "hook", "page", "state", "style"})
BACKEND_CATEGORIES = frozenset({
    "cache", "controller", "cron_job", "db", "domain",
    "handler", "repository", "route", "service",
})
SHARED_CATEGORIES = frozenset({"auth", "config", "middleware", "utils"})

ALLOWED_CATEGORIES: Dict[Origin, FrozenSet[str]] = {
    Origin.FRONTEND: FRONTEND_CATEGORIES | SHARED_CATEGORIES,
    Origin.BACKEND: BACKEND_CATEGORIES | SHARED_CATEGORIES,
}


def is_valid_category(origin: Origin, category: str) -> bool:
    return category in ALLOWED_CATEGORIES[Origin(origin)]


class TelemetryEvent(BaseModel):
    """
    One structured log event.
    
    Serialized with the collector's field names (stack, level, package)
    by to_payload().
    """
    
    origin: Origin = Field(..., description="frontend or backend")
    severity: Severity = Field(..., description="Log level")
    category: str = Field(..., description="Package name from the origin's allow-list")
    message: str = Field(..., description="Free-form message")
    
    def to_payload(self) -> Dict[str, str]:
        return {
            "stack": self.origin.value,
            "level": self.severity.value,
            "package": self.category,
            "message": self.message,
        }
