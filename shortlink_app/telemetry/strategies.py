"""
Telemetry strategies using Strategy Pattern.
Allows switching between delivery backends (HTTP collector, In-Memory, Null).

Every backend honours the same contract: emit() never raises and never
waits on the network.
"""

import logging
import queue
import threading
from abc import ABC, abstractmethod
from typing import List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from shortlink_app.exceptions import TransportError
from .models import TelemetryEvent, Origin, Severity, is_valid_category


class TelemetryStrategy(ABC):
    """
    Abstract base class for telemetry strategies.

    emit() validates the event (origin, severity, category allow-list)
    and hands valid events to _dispatch(). Invalid events are dropped
    locally and never reach a backend.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def emit(self, origin, severity, category: str, message: str) -> bool:
        """
        Emit one event.

        Args:
            origin: "frontend" or "backend" (or Origin)
            severity: debug/info/warn/error/fatal (or Severity)
            category: Package name from the origin's allow-list
            message: Free-form text

        Returns:
            True if the event was accepted for delivery, False if dropped
        """
        try:
            event = TelemetryEvent(
                origin=origin,
                severity=severity,
                category=category,
                message=message
            )
        except PydanticValidationError as e:
            self.logger.error("Dropping malformed telemetry event: %s", e)
            return False

        if not is_valid_category(event.origin, event.category):
            self.logger.error(
                "Invalid package name for %s: %s", event.origin.value, event.category
            )
            return False

        return self._dispatch(event)

    @abstractmethod
    def _dispatch(self, event: TelemetryEvent) -> bool:
        """Deliver (or schedule delivery of) a validated event"""
        pass

    def flush(self) -> None:
        """Block until queued events are handled (for shutdown and tests)"""

    def close(self) -> None:
        """Release backend resources"""

    # Convenience methods for the backend
    def log_service(self, severity, message: str) -> bool:
        return self.emit(Origin.BACKEND, severity, "service", message)

    def log_route(self, severity, message: str) -> bool:
        return self.emit(Origin.BACKEND, severity, "route", message)

    def log_repository(self, severity, message: str) -> bool:
        return self.emit(Origin.BACKEND, severity, "repository", message)

    # Convenience methods for the frontend
    def log_api(self, severity, message: str) -> bool:
        return self.emit(Origin.FRONTEND, severity, "api", message)

    def log_component(self, severity, message: str) -> bool:
        return self.emit(Origin.FRONTEND, severity, "component", message)

    def log_page(self, severity, message: str) -> bool:
        return self.emit(Origin.FRONTEND, severity, "page", message)

    def log_hook(self, severity, message: str) -> bool:
        return self.emit(Origin.FRONTEND, severity, "hook", message)

    def log_state(self, severity, message: str) -> bool:
        return self.emit(Origin.FRONTEND, severity, "state", message)

    def log_style(self, severity, message: str) -> bool:
        return self.emit(Origin.FRONTEND, severity, "style", message)


class HttpTelemetryClient(TelemetryStrategy):
    """
    Ships events to the remote log collector over HTTP.

    emit() only enqueues. A daemon worker thread posts events one by one;
    transmission failures are logged here and go no further.
    """

    def __init__(
        self,
        base_url: str,
        auth_token: str = "",
        timeout: float = 5.0,
        client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            base_url: Collector base URL; events go to {base_url}/logs
            auth_token: Bearer token sent with every event
            timeout: Per-request timeout in seconds
            client: Optional preconfigured httpx.Client (tests pass a MockTransport)
            logger: Optional logger
        """
        super().__init__(logger)
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self.client = client or httpx.Client(timeout=timeout)
        self._queue: "queue.Queue[Optional[TelemetryEvent]]" = queue.Queue()
        self._worker: Optional[threading.Thread] = None
        self._worker_lock = threading.Lock()
        self._closed = False

    def set_auth_token(self, token: str) -> None:
        self.auth_token = token

    def _dispatch(self, event: TelemetryEvent) -> bool:
        if self._closed:
            self.logger.warning("Telemetry client closed, dropping event: %s", event.message)
            return False
        self._ensure_worker()
        self._queue.put(event)
        return True

    def _ensure_worker(self) -> None:
        with self._worker_lock:
            if self._worker is None or not self._worker.is_alive():
                self._worker = threading.Thread(
                    target=self._run, name="telemetry-sender", daemon=True
                )
                self._worker.start()

    def _run(self) -> None:
        while True:
            event = self._queue.get()
            try:
                if event is None:
                    return
                self._send(event)
            except TransportError as e:
                self.logger.warning("Failed to send log to server: %s", e)
            except Exception:
                # Keep the sender alive for the events still queued
                self.logger.exception("Unexpected error while sending telemetry event")
            finally:
                self._queue.task_done()

    def _send(self, event: TelemetryEvent) -> None:
        """
        POST one event to the collector.

        Raises:
            TransportError: On connection errors, timeouts, malformed URLs
                or non-2xx replies
        """
        try:
            response = self.client.post(
                f"{self.base_url}/logs",
                json=event.to_payload(),
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.auth_token}",
                },
            )
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(str(e)) from e

        self.logger.debug("Log sent successfully: %s", response.status_code)

    def flush(self) -> None:
        if self._worker is not None and self._worker.is_alive():
            self._queue.join()

    def close(self) -> None:
        """Drain pending events, stop the worker and close the HTTP client"""
        self._closed = True
        if self._worker is not None and self._worker.is_alive():
            self._queue.put(None)
            self._worker.join()
        self.client.close()


class InMemoryTelemetry(TelemetryStrategy):
    """
    Keeps accepted events in a list.

    Used in development/testing environments.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self.events: List[TelemetryEvent] = []
        self._lock = threading.Lock()

    def _dispatch(self, event: TelemetryEvent) -> bool:
        with self._lock:
            self.events.append(event)
        return True

    def messages(self, severity: Optional[Severity] = None) -> List[str]:
        """Messages of recorded events, optionally filtered by severity"""
        with self._lock:
            return [
                event.message for event in self.events
                if severity is None or event.severity == Severity(severity)
            ]


class NullTelemetry(TelemetryStrategy):
    """
    Null Object Pattern - telemetry that does nothing.

    Validation still runs, so invalid categories are reported the same way.
    """

    def _dispatch(self, event: TelemetryEvent) -> bool:
        return True
