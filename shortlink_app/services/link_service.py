import logging
from typing import List, Optional, Sequence

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from shortlink_app.config import settings
from shortlink_app.exceptions import NotFoundError, ValidationError, ValidationErrorKind
from shortlink_app.models.link import Click, Link
from shortlink_app.schemas.link import (
    BatchCreateResponse,
    ErrorDetail,
    LinkCreate,
    LinkOutcome,
    LinkResponse,
)
from shortlink_app.services.registry import LinkRegistry
from shortlink_app.services.statistics import LinkStats, compute_stats
from shortlink_app.telemetry.strategies import NullTelemetry, TelemetryStrategy

_http_url = TypeAdapter(HttpUrl)


def validate_url(url: str) -> None:
    """Reject anything that is not an absolute http(s) URL"""
    try:
        _http_url.validate_python(url)
    except PydanticValidationError:
        raise ValidationError(ValidationErrorKind.INVALID_URL, f"Invalid URL format: {url}") from None


def normalize_validity_minutes(value):
    """30.0 -> 30; anything else is left for the registry to judge"""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class LinkService:
    """
    Link service with the registry and telemetry injected.

    Validation errors never leave this class as exceptions: batch creation
    reports them per request, and a click on an unknown code returns None.
    """

    def __init__(
        self,
        registry: LinkRegistry,
        telemetry: Optional[TelemetryStrategy] = None,
        max_batch_size: int = settings.max_batch_size,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            registry: Link registry (source of truth)
            telemetry: Remote log client (optional, fire-and-forget)
            max_batch_size: Largest accepted creation batch
            logger: Optional logger
        """
        self.registry = registry
        self.telemetry = telemetry or NullTelemetry()
        self.max_batch_size = max_batch_size
        self.logger = logger or logging.getLogger(__name__)

    def now(self):
        return self.registry.clock()

    def create_links(self, requests: Sequence[LinkCreate]) -> BatchCreateResponse:
        """
        Create a batch of short links.

        Best-effort: every request is handled on its own and the result
        lists one outcome per request, in order. A failed request never
        undoes links created before it. Only an empty or oversize batch is
        rejected as a whole.
        """
        self.telemetry.log_service("info", f"Processing {len(requests)} URL shortening requests")

        if not requests or len(requests) > self.max_batch_size:
            message = f"A batch must contain between 1 and {self.max_batch_size} URLs, got {len(requests)}"
            self.logger.warning(message)
            self.telemetry.log_service("warn", message)
            return BatchCreateResponse(
                error=ErrorDetail(kind=ValidationErrorKind.INVALID_BATCH, message=message)
            )

        now = self.now()
        results: List[LinkOutcome] = []
        for index, request in enumerate(requests):
            try:
                link = self._create_one(request)
            except ValidationError as e:
                self.logger.info("Request %d rejected: %s", index, e.message)
                self.telemetry.log_service("error", e.message)
                results.append(LinkOutcome(
                    index=index,
                    error=ErrorDetail(kind=e.kind, message=e.message)
                ))
                continue
            results.append(LinkOutcome(index=index, link=LinkResponse.from_link(link, now)))

        created = sum(1 for outcome in results if outcome.error is None)
        self.telemetry.log_service("info", f"Successfully created {created} shortened URLs")
        return BatchCreateResponse(
            created=created,
            failed=len(results) - created,
            results=results
        )

    def _create_one(self, request: LinkCreate) -> Link:
        validate_url(request.url)
        return self.registry.create(
            original_url=request.url,
            custom_code=request.custom_code or None,
            validity_minutes=normalize_validity_minutes(request.validity_minutes),
        )

    def list_links(self) -> List[LinkResponse]:
        """All links, newest first"""
        self.telemetry.log_service("info", "Fetching all URLs for statistics")
        now = self.now()
        return [LinkResponse.from_link(link, now) for link in self.registry.list_all()]

    def get_link(self, short_code: str) -> Optional[LinkResponse]:
        try:
            link = self.registry.get(short_code)
        except NotFoundError:
            return None
        return LinkResponse.from_link(link, self.now())

    def record_click(self, short_code: str, source: str = "", location: str = "") -> Optional[Click]:
        """
        Record one activation of a link.

        Best-effort: an unknown code is logged and reported as None, the
        registry is left untouched.
        """
        try:
            click = self.registry.record_click(short_code, source or "", location or "")
        except NotFoundError as e:
            self.logger.warning("Click ignored: %s", e)
            self.telemetry.log_service("warn", f"Click for unknown short code {short_code}")
            return None

        self.telemetry.log_service("info", f"Recorded click for {short_code}")
        return click

    def recent_clicks(self, short_code: str, limit: int = settings.recent_clicks_limit) -> Optional[List[Click]]:
        try:
            return self.registry.recent_clicks(short_code, limit)
        except NotFoundError:
            return None

    def get_stats(self) -> LinkStats:
        return compute_stats(self.registry.snapshot(), self.now())
