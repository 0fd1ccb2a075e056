"""
Program state machine: the only place model/effect state changes.

Transitions must be:
- Pure (update is called, nothing else is touched)
- Deterministic (same state + message -> same state)
- Absorbing on failure (Failed never changes; first failure wins)
"""

from typing import Any

from .errors import HarnessError
from .program import ProgramDefinition
from .state import Failed, HarnessState, Running


def apply(program: ProgramDefinition, state: HarnessState, msg: Any) -> HarnessState:
    """
    Fold a message into the state using the program's update.

    Args:
        program: Program whose update is applied
        state: Current harness state
        msg: Message to apply

    Returns:
        New Running state with model and last effect replaced, or the
        unchanged Failed state
    """
    if isinstance(state, Failed):
        return state
    model, effect = program.update(msg, state.model)
    return state.with_update(model, effect)


def fail(state: HarnessState, category: str, message: str, origin: str) -> HarnessState:
    """
    Transition to Failed unless already failed.

    Returns:
        Failed(reason="<category>: <message>", origin), or the original
        Failed state if one already exists
    """
    if isinstance(state, Failed):
        return state
    return Failed(reason=f"{category}: {message}", origin=origin)


def fail_with(state: HarnessState, error: HarnessError, origin: str) -> HarnessState:
    """Transition to Failed using the error's category and message."""
    return fail(state, error.category, str(error), origin)


def initial(program: ProgramDefinition, flags: Any = None, location: Any = None) -> Running:
    """
    Evaluate init and wrap the result as the initial Running state.

    Raises:
        Whatever init raises, unchanged
    """
    model, effect = program.init(flags, location)
    return Running(model=model, last_effect=effect, location=location)
