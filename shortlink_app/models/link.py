from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class Click(BaseModel):
    """A single recorded activation of a link."""
    
    id: str = Field(..., description="Sequential id, unique within its link")
    timestamp: datetime = Field(..., description="When the click was recorded")
    source: str = Field("", description="Referring page or URL")
    location: str = Field("", description="Client descriptor, e.g. user agent")


class Link(BaseModel):
    """
    Short link record.
    
    Owned by the registry. Only click recording mutates it after creation,
    and only by appending to clicks and incrementing click_count together.
    Expiry is never stored: see services.expiry.
    """
    
    id: str
    short_code: str
    original_url: str
    is_custom: bool = False
    created_at: datetime
    expires_at: datetime
    click_count: int = 0
    clicks: List[Click] = Field(default_factory=list)
