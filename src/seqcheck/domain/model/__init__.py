"""Domain model entities."""

from seqcheck.domain.model.call import Call
from seqcheck.domain.model.call_specification import (
    ArgumentSpecification,
    CallSpecification,
    is_compatible,
)
from seqcheck.domain.model.configuration import VerificationConfig
from seqcheck.domain.model.enums import LengthPolicy, MatchMode

__all__ = [
    "ArgumentSpecification",
    "Call",
    "CallSpecification",
    "LengthPolicy",
    "MatchMode",
    "VerificationConfig",
    "is_compatible",
]
