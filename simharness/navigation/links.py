"""
Link resolution for simulated navigation.

A link is Internal when it stays on the current origin (relative paths,
fragments, same-origin absolute URLs) and External otherwise.
"""

from dataclasses import dataclass
from typing import Optional, Union

from ..core.errors import NavigationError
from .location import Location, origin_of


@dataclass(frozen=True)
class Internal:
    url: str


@dataclass(frozen=True)
class External:
    url: str


ResolvedLink = Union[Internal, External]


def is_absolute(href: str) -> bool:
    return origin_of(href) != "" or ":" in href.split("/", 1)[0]


def resolve_href(location: Optional[Location], href: str) -> ResolvedLink:
    """
    Resolve and classify an href.

    Args:
        location: Current simulated location (None if the program has none)
        href: Raw href attribute value

    Returns:
        Internal(url) or External(url) with url fully resolved

    Raises:
        NavigationError: If href is relative and there is no location to resolve against
    """
    if location is None:
        if not is_absolute(href):
            raise NavigationError(
                f"cannot resolve relative href {href!r}: the program has no base URL"
            )
        return External(href)

    url = location.resolve(href)
    if origin_of(url) == location.origin:
        return Internal(url)
    return External(url)
