"""
Expiry is derived, never stored: every answer is recomputed from
expires_at and the caller's notion of "now".
"""

from datetime import datetime

from shortlink_app.models.link import Link

EXPIRED = "Expired"


def is_expired(link: Link, now: datetime) -> bool:
    """A link is still active at the exact instant it expires"""
    return now > link.expires_at


def status(link: Link, now: datetime) -> str:
    return "expired" if is_expired(link, now) else "active"


def time_remaining(link: Link, now: datetime) -> str:
    """
    Human-readable time left, floored to whole minutes.
    
    Examples: "2d 3h remaining", "5h 12m remaining", "0m remaining", "Expired"
    """
    if is_expired(link, now):
        return EXPIRED
    
    minutes = int((link.expires_at - now).total_seconds() // 60)
    hours = minutes // 60
    days = hours // 24
    
    if days > 0:
        return f"{days}d {hours % 24}h remaining"
    if hours > 0:
        return f"{hours}h {minutes % 60}m remaining"
    return f"{minutes}m remaining"
