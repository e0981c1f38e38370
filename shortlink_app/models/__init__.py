"""
Domain models for the short link registry.

Links live in memory only; the registry is discarded when the process ends.
"""

from .link import Link, Click

__all__ = ["Link", "Click"]
