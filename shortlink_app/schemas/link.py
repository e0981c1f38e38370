from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from shortlink_app.config import settings
from shortlink_app.exceptions import ValidationErrorKind
from shortlink_app.models.link import Link
from shortlink_app.services.expiry import is_expired, time_remaining


class LinkCreate(BaseModel):
    """One entry of a batch creation request.

    Fields are loosely typed; LinkService validates each entry on its own
    and reports failures per entry.
    """
    url: str = Field(..., description="Absolute http(s) URL to shorten")
    custom_code: Optional[str] = Field(None, description="3-20 alphanumeric characters")
    # Raw JSON value; the registry rejects booleans, strings and fractions
    validity_minutes: Optional[Any] = Field(
        None, description="Minutes until expiry (default 30)"
    )


class LinkBatchCreate(BaseModel):
    requests: List[LinkCreate]


class ClickCreate(BaseModel):
    source: Optional[str] = Field(None, description="Referring page; defaults to the Referer header")
    location: Optional[str] = Field(None, description="Client descriptor; defaults to the User-Agent header")


class ClickResponse(BaseModel):
    id: str
    timestamp: datetime
    source: str
    location: str

    model_config = ConfigDict(from_attributes=True)


class LinkResponse(BaseModel):
    """Link as shown to callers, with expiry derived at response time"""
    id: str
    short_code: str
    original_url: str
    is_custom: bool
    created_at: datetime
    expires_at: datetime
    click_count: int
    clicks: List[ClickResponse]
    is_expired: bool
    time_remaining: str

    @computed_field
    @property
    def short_url(self) -> str:
        return f"{settings.base_url}/{self.short_code}"

    @classmethod
    def from_link(cls, link: Link, now: datetime) -> "LinkResponse":
        return cls(
            **link.model_dump(),
            is_expired=is_expired(link, now),
            time_remaining=time_remaining(link, now),
        )


class ErrorDetail(BaseModel):
    kind: ValidationErrorKind
    message: str


class LinkOutcome(BaseModel):
    """Result for one entry of a batch, in request order"""
    index: int
    link: Optional[LinkResponse] = None
    error: Optional[ErrorDetail] = None

    @computed_field
    @property
    def success(self) -> bool:
        return self.error is None


class BatchCreateResponse(BaseModel):
    created: int = 0
    failed: int = 0
    results: List[LinkOutcome] = Field(default_factory=list)
    # Set when the batch as a whole was rejected; results is then empty
    error: Optional[ErrorDetail] = None
