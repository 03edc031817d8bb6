"""Domain enumerations."""

from enum import Enum, auto


class MatchMode(Enum):
    """How a matcher is evaluated against an argument."""

    PROBE = auto()  # failures captured as text, never raised
    COMMIT = auto()  # failures propagate to the caller


class LengthPolicy(Enum):
    """Exact-order policy when actual and expected lengths differ.

    Fewer actual calls than specifications always fails.
    """

    PREFIX = "prefix"  # surplus actual calls after the last specification ignored
    STRICT = "strict"  # surplus actual calls fail
