from datetime import datetime
from typing import Iterable

from pydantic import BaseModel

from shortlink_app.models.link import Link
from shortlink_app.services.expiry import is_expired


class LinkStats(BaseModel):
    total_links: int
    active_links: int
    expired_links: int
    total_clicks: int


def compute_stats(links: Iterable[Link], now: datetime) -> LinkStats:
    """Aggregate counts over a registry snapshot. Nothing is cached."""
    total = 0
    active = 0
    clicks = 0
    for link in links:
        total += 1
        clicks += link.click_count
        if not is_expired(link, now):
            active += 1
    
    return LinkStats(
        total_links=total,
        active_links=active,
        expired_links=total - active,
        total_clicks=clicks,
    )
