"""
Scripted replay of harness interactions.

Replay applies a step list to a harness. Must be 100% deterministic:
same harness + same steps -> same terminal state.
"""

from .runner import ReplayResult, replay, snapshot, state_fingerprint
from .script import Script, SelectorSpec, load_script, parse_script

__all__ = [
    "ReplayResult",
    "replay",
    "snapshot",
    "state_fingerprint",
    "Script",
    "SelectorSpec",
    "load_script",
    "parse_script",
]
