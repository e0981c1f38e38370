"""
In-memory link registry.

The registry is the single source of truth for short links. It is created
empty, grows for the lifetime of the process and is never persisted.
All mutations (create, record_click) run under one re-entrant lock, and
readers get deep copies, so click_count always equals len(clicks) when
observed from outside.
"""

import itertools
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from shortlink_app.exceptions import NotFoundError, ValidationError, ValidationErrorKind
from shortlink_app.models.link import Click, Link
from shortlink_app.services.short_code_factory import ShortCodeFactory
from shortlink_app.services.short_code_strategies import ShortCodeStrategy


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_validity_minutes(validity_minutes, max_validity_minutes: Optional[int] = None) -> None:
    """Validity windows are positive whole minutes, up to an optional ceiling"""
    # bool is an int subclass, but True is not a window
    if isinstance(validity_minutes, bool) or not isinstance(validity_minutes, int) or validity_minutes < 1:
        raise ValidationError(
            ValidationErrorKind.INVALID_VALIDITY_WINDOW,
            f"Invalid validity period: {validity_minutes}. Must be a positive integer number of minutes."
        )
    if max_validity_minutes is not None and validity_minutes > max_validity_minutes:
        raise ValidationError(
            ValidationErrorKind.INVALID_VALIDITY_WINDOW,
            f"Invalid validity period: {validity_minutes}. Must be at most {max_validity_minutes} minutes."
        )


class LinkRegistry:
    """
    Authoritative mapping from short code to Link.

    Inject one instance into whatever needs it (see dependencies.get_registry);
    tests build their own with a fake clock.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utcnow,
        strategy_factory: Callable[[Optional[str]], ShortCodeStrategy] = ShortCodeFactory.create_strategy,
        default_validity_minutes: int = 30,
        max_validity_minutes: Optional[int] = 5256000,
        max_retries: int = 5,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            clock: Returns the current (timezone-aware) time
            strategy_factory: Maps an optional custom code to a code strategy
            default_validity_minutes: Window used when a request gives none
            max_validity_minutes: Longest accepted window (None for no ceiling)
            max_retries: Attempts at a unique generated code before giving up
            logger: Optional logger
        """
        self.clock = clock
        self.strategy_factory = strategy_factory
        self.default_validity_minutes = default_validity_minutes
        self.max_validity_minutes = max_validity_minutes
        self.max_retries = max_retries
        self.logger = logger or logging.getLogger(__name__)
        self._links: Dict[str, Link] = {}
        self._ids = itertools.count(1)
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._links)

    def __contains__(self, short_code: str) -> bool:
        with self._lock:
            return short_code in self._links

    def create(
        self,
        original_url: str,
        custom_code: Optional[str] = None,
        validity_minutes: Optional[int] = None
    ) -> Link:
        """
        Register a new link.

        The URL is stored as given; callers validate it first.

        Returns:
            A copy of the stored Link

        Raises:
            ValidationError: INVALID_VALIDITY_WINDOW, INVALID_CUSTOM_CODE
                             or CODE_COLLISION
        """
        if validity_minutes is None:
            validity_minutes = self.default_validity_minutes
        validate_validity_minutes(validity_minutes, self.max_validity_minutes)

        strategy = self.strategy_factory(custom_code)
        attempts = max(1, self.max_retries) if strategy.retryable else 1

        # Uniqueness check and insert happen under one lock
        with self._lock:
            for attempt in range(attempts):
                short_code = strategy.generate()
                if short_code not in self._links:
                    break
                self.logger.debug(
                    "Short code %s already taken (attempt %d/%d)",
                    short_code, attempt + 1, attempts
                )
            else:
                if strategy.retryable:
                    message = f"Could not generate unique short code after {attempts} attempts"
                else:
                    message = f"Short code '{short_code}' already exists"
                raise ValidationError(ValidationErrorKind.CODE_COLLISION, message)

            created_at = self.clock()
            try:
                expires_at = created_at + timedelta(minutes=validity_minutes)
            except OverflowError:
                raise ValidationError(
                    ValidationErrorKind.INVALID_VALIDITY_WINDOW,
                    f"Invalid validity period: {validity_minutes}. Expiry is past the latest representable date."
                ) from None

            link = Link(
                id=str(next(self._ids)),
                short_code=short_code,
                original_url=original_url,
                is_custom=not strategy.retryable,
                created_at=created_at,
                expires_at=expires_at,
            )
            self._links[short_code] = link
            self.logger.info("Created short link %s -> %s", short_code, original_url)
            return link.model_copy(deep=True)

    def get(self, short_code: str) -> Link:
        """
        Raises:
            NotFoundError: If no link has this code
        """
        with self._lock:
            link = self._links.get(short_code)
            if link is None:
                raise NotFoundError(short_code)
            return link.model_copy(deep=True)

    def list_all(self) -> List[Link]:
        """Snapshot of every link, newest first (later insertion wins ties)"""
        with self._lock:
            links = [link.model_copy(deep=True) for link in reversed(self._links.values())]
        # sorted() is stable with reverse=True, so equal timestamps keep newest-insert-first
        return sorted(links, key=lambda link: link.created_at, reverse=True)

    snapshot = list_all

    def record_click(self, short_code: str, source: str = "", location: str = "") -> Click:
        """
        Append a click and bump the counter as one step.

        Raises:
            NotFoundError: If no link has this code (registry unchanged)
        """
        with self._lock:
            link = self._links.get(short_code)
            if link is None:
                raise NotFoundError(short_code)

            click = Click(
                id=str(len(link.clicks) + 1),
                timestamp=self.clock(),
                source=source,
                location=location,
            )
            link.clicks.append(click)
            link.click_count += 1
            self.logger.debug("Recorded click %s for %s", click.id, short_code)
            return click.model_copy()

    def recent_clicks(self, short_code: str, limit: int = 10) -> List[Click]:
        """
        Last `limit` clicks for a link, newest first.

        Raises:
            NotFoundError: If no link has this code
        """
        with self._lock:
            link = self._links.get(short_code)
            if link is None:
                raise NotFoundError(short_code)
            clicks = [click.model_copy() for click in link.clicks[-limit:]] if limit > 0 else []
        return list(reversed(clicks))
