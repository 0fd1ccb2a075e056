"""
Navigation simulation: the current location and href resolution.
"""

from .location import Location, origin_of
from .links import Internal, External, ResolvedLink, resolve_href

__all__ = [
    "Location",
    "origin_of",
    "Internal",
    "External",
    "ResolvedLink",
    "resolve_href",
]
