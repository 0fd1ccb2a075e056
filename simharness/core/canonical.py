"""
Canonical serialization for comparing harness runs.

Models and effects are arbitrary Python values. Everything that is recorded
or compared across runs goes through canonicalize() so that two replays of
the same interaction sequence produce byte-identical snapshots.
"""

import dataclasses
import enum
import hashlib
import json
from typing import Any


def canonicalize(obj: Any) -> Any:
    """
    Convert an arbitrary value to a JSON-compatible canonical form.

    Rules:
    - dict keys stringified and sorted
    - tuples converted to lists
    - sets and frozensets converted to sorted lists
    - dataclasses converted to {"__type__": name, fields...}
    - enums converted to "Class.MEMBER"
    - anything else non-JSON falls back to repr()
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, enum.Enum):
        return f"{type(obj).__name__}.{obj.name}"
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        out = {"__type__": type(obj).__name__}
        for f in dataclasses.fields(obj):
            out[f.name] = canonicalize(getattr(obj, f.name))
        return {k: out[k] for k in sorted(out)}
    if isinstance(obj, dict):
        items = {str(k): canonicalize(v) for k, v in obj.items()}
        return {k: items[k] for k in sorted(items)}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    if isinstance(obj, (set, frozenset)):
        return sorted((canonicalize(x) for x in obj), key=canonical_json_str)
    return repr(obj)


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Deterministic JSON bytes.

    Guarantees:
    - sort_keys=True (secondary safety)
    - separators remove whitespace
    - ensure_ascii=False keeps UTF-8 stable
    - canonical preprocessing via canonicalize()
    """
    canon = canonicalize(obj)
    s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    """Same guarantees as canonical_json_bytes but returns string."""
    return canonical_json_bytes(obj).decode("utf-8")


def fingerprint(obj: Any) -> str:
    """SHA-256 hex digest of the canonical JSON bytes of obj."""
    return hashlib.sha256(canonical_json_bytes(obj)).hexdigest()
