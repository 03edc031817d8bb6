"""seqcheck domain layer.

Pure domain logic with no external dependencies.
Only imports: typing, types, dataclasses, enum, collections.abc
"""

from seqcheck.domain.capture import FailureCapture
from seqcheck.domain.exceptions import (
    AsyncCallbackError,
    EmptyQueryError,
    InvalidMatcherError,
    NestedQueryError,
    NotRecordingError,
    QueryFinalizedError,
    QueryNotFinalizedError,
    SeqCheckError,
    SequenceNotFoundError,
    UnexpectedMatcherError,
    UnknownMemberError,
)
from seqcheck.domain.model import (
    ArgumentSpecification,
    Call,
    CallSpecification,
    LengthPolicy,
    MatchMode,
    VerificationConfig,
)
from seqcheck.domain.ports import ArgumentMatcher, Target

__all__ = [
    # Exceptions
    "AsyncCallbackError",
    "EmptyQueryError",
    "InvalidMatcherError",
    "NestedQueryError",
    "NotRecordingError",
    "QueryFinalizedError",
    "QueryNotFinalizedError",
    "SeqCheckError",
    "SequenceNotFoundError",
    "UnexpectedMatcherError",
    "UnknownMemberError",
    # Model
    "ArgumentSpecification",
    "Call",
    "CallSpecification",
    "FailureCapture",
    "LengthPolicy",
    "MatchMode",
    "VerificationConfig",
    # Ports
    "ArgumentMatcher",
    "Target",
]
