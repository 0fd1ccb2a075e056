"""
Simulated browser location.
"""

from dataclasses import dataclass
from urllib.parse import urljoin, urlsplit

from ..core.errors import ConstructionError


@dataclass(frozen=True)
class Location:
    """
    Immutable simulated URL.

    Fields:
        origin: scheme://host[:port]
        path: Path including query and fragment as written (at least "/")
        full: origin + path
    """
    origin: str
    path: str
    full: str

    @staticmethod
    def parse(url: str) -> "Location":
        """
        Parse an absolute URL.

        Raises:
            ConstructionError: If url has no scheme or no host
        """
        parts = urlsplit(url or "")
        if not parts.scheme or not parts.netloc:
            raise ConstructionError(f"not an absolute URL: {url!r}")
        origin = f"{parts.scheme}://{parts.netloc}"
        path = parts.path or "/"
        if parts.query:
            path += "?" + parts.query
        if parts.fragment:
            path += "#" + parts.fragment
        return Location(origin=origin, path=path, full=origin + path)

    def resolve(self, href: str) -> str:
        """Resolve href (absolute, root-relative, relative or fragment) against this location."""
        return urljoin(self.full, href)

    def navigate(self, href: str) -> "Location":
        """Return the location reached by following href from here."""
        return Location.parse(self.resolve(href))


def origin_of(url: str) -> str:
    """scheme://host of an absolute URL; empty string for relative references."""
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return ""
    return f"{parts.scheme}://{parts.netloc}"
