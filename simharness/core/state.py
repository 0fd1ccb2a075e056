"""
Harness state model.

A harness is always exactly one of Running or Failed. Failed is terminal.
"""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Optional, Union

if TYPE_CHECKING:
    from ..navigation.location import Location


@dataclass(frozen=True)
class Running:
    """
    Live program state.

    Fields:
        model: Current application model
        last_effect: Effect produced by the most recent init/update
        location: Simulated current URL (None when the program has no URL)
        page_change: Resolved URL the page navigated away to, if any

    State is immutable. Use with_update() / with_location() / with_page_change().
    """
    model: Any
    last_effect: Any = None
    location: Optional["Location"] = None
    page_change: Optional[str] = None

    def with_update(self, model: Any, effect: Any) -> "Running":
        return replace(self, model=model, last_effect=effect)

    def with_location(self, location: "Location") -> "Running":
        return replace(self, location=location)

    def with_page_change(self, url: str) -> "Running":
        return replace(self, page_change=url)


@dataclass(frozen=True)
class Failed:
    """
    Terminal failure.

    Fields:
        reason: One-line "<category>: <message>"
        origin: Name of the harness operation that failed
    """
    reason: str
    origin: str


HarnessState = Union[Running, Failed]
