"""
Replay runner: drive a harness through a scripted step sequence.

Replay is pure: the same starting harness and the same steps always reach
the same terminal state, which snapshot()/fingerprint() make comparable.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable

from ..core.canonical import canonicalize, fingerprint
from ..core.state import Failed
from ..program_test import ProgramTest


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        test: Harness after the last step
        applied: Number of steps applied before the first failure
    """
    test: ProgramTest
    applied: int

    @property
    def passed(self) -> bool:
        return self.test.failure is None


def replay(test: ProgramTest, steps: Iterable[Any]) -> ReplayResult:
    """
    Apply steps in order.

    Args:
        test: Starting harness
        steps: Objects with apply(test) -> test (see replay.script)

    Returns:
        ReplayResult with final harness and count
    """
    count = 0
    for step in steps:
        if test.failure is not None:
            break
        test = step.apply(test)
        if test.failure is None:
            count += 1
    return ReplayResult(test=test, applied=count)


def snapshot(test: ProgramTest) -> Dict[str, Any]:
    """Canonical, JSON-compatible view of the harness state."""
    state = test.state
    if isinstance(state, Failed):
        return canonicalize({"status": "failed", "reason": state.reason, "origin": state.origin})
    return canonicalize({
        "status": "running",
        "model": state.model,
        "last_effect": state.last_effect,
        "location": state.location.full if state.location else None,
        "page_change": state.page_change,
    })


def state_fingerprint(test: ProgramTest) -> str:
    return fingerprint(snapshot(test))
