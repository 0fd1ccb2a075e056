"""
Core harness primitives.

- ProgramDefinition: the init/update/view triple under test
- Running / Failed: the two harness states
- machine: the pure apply/fail transitions
- canonical: deterministic snapshots and fingerprints
- errors: the harness error taxonomy
"""

from .program import ProgramDefinition
from .state import Running, Failed, HarnessState
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str, fingerprint
from .errors import (
    HarnessError,
    ConstructionError,
    QueryError,
    NotFound,
    Ambiguous,
    DispatchError,
    NoHandler,
    DecodeFailure,
    NavigationError,
    ExpectationError,
    ExplicitFailure,
    DecodeError,
)

__all__ = [
    "ProgramDefinition",
    "Running",
    "Failed",
    "HarnessState",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "fingerprint",
    "HarnessError",
    "ConstructionError",
    "QueryError",
    "NotFound",
    "Ambiguous",
    "DispatchError",
    "NoHandler",
    "DecodeFailure",
    "NavigationError",
    "ExpectationError",
    "ExplicitFailure",
    "DecodeError",
]
