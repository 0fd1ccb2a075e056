"""
Exception types for the simulation harness.

Every harness error carries a category. The harness boundary converts raised
errors into a terminal Failed state whose reason is "<category>: <message>".
"""

from typing import Optional


class HarnessError(Exception):
    """Base class for errors raised inside a simulate or assert step."""
    category = "HarnessError"

    @property
    def reason(self) -> str:
        return f"{self.category}: {self}"


class ConstructionError(HarnessError):
    """Raised when flags fail to decode or the starting URL cannot be parsed."""
    category = "ConstructionError"


class QueryError(HarnessError):
    """Raised when a selector does not resolve to exactly one node."""
    category = "QueryError"


class NotFound(QueryError):
    def __init__(self, description: str, searched: str):
        self.description = description
        self.searched = searched
        super().__init__(f"no element matches {description} in {searched}")


class Ambiguous(QueryError):
    def __init__(self, count: int, description: str, candidates: Optional[str] = None):
        self.count = count
        self.description = description
        message = f"expected one element matching {description}, but found {count}"
        if candidates:
            message += f": {candidates}"
        super().__init__(message)


class DispatchError(HarnessError):
    """Raised when an event cannot be turned into a message."""
    category = "DispatchError"


class NoHandler(DispatchError):
    def __init__(self, event_name: str, target: Optional[str] = None):
        self.event_name = event_name
        self.target = target
        where = f" on {target}" if target else ""
        super().__init__(f"no handler registered for event '{event_name}'{where}")


class DecodeFailure(DispatchError):
    def __init__(self, event_name: str, detail: str):
        self.event_name = event_name
        self.detail = detail
        super().__init__(f"handler for event '{event_name}' failed to decode: {detail}")


class NavigationError(HarnessError):
    """Raised for href mismatches, missing interception, and page change mismatches."""
    category = "NavigationError"


class ExpectationError(HarnessError):
    """Raised when an assertion predicate does not hold."""
    category = "AssertionError"


class ExplicitFailure(HarnessError):
    """Raised when the test author fails the chain on purpose."""
    category = "ExplicitFailure"

    def __init__(self, message: str, label: Optional[str] = None):
        if label:
            self.category = label
        super().__init__(message)


class DecodeError(Exception):
    """Raised by a decoder when a payload does not have the expected shape."""
    pass
