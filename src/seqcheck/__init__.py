"""seqcheck - scoped call recording and call-order verification for test doubles."""

__version__ = "0.1.0"

from seqcheck.application.matching.matchers import ANY
from seqcheck.application.query.context import QueryContext, QueryScope, default_context
from seqcheck.application.query.query import Query
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
from seqcheck.domain.model.call import Call
from seqcheck.domain.model.configuration import VerificationConfig
from seqcheck.domain.model.enums import LengthPolicy
from seqcheck.infrastructure.substitute import Substitute
from seqcheck.presentation.api.fluent import (
    any_arg,
    areceived_in_any_order,
    areceived_in_order,
    arun_in_scope,
    enter_scope,
    match,
    received_in_any_order,
    received_in_order,
    run_in_scope,
    verify_any_order,
    verify_exact_order,
)

__all__ = [
    "ANY",
    "AsyncCallbackError",
    "EmptyQueryError",
    "Call",
    "InvalidMatcherError",
    "LengthPolicy",
    "NestedQueryError",
    "NotRecordingError",
    "Query",
    "QueryContext",
    "QueryFinalizedError",
    "QueryNotFinalizedError",
    "QueryScope",
    "SeqCheckError",
    "SequenceNotFoundError",
    "Substitute",
    "UnexpectedMatcherError",
    "UnknownMemberError",
    "VerificationConfig",
    "__version__",
    "any_arg",
    "areceived_in_any_order",
    "areceived_in_order",
    "arun_in_scope",
    "default_context",
    "enter_scope",
    "match",
    "received_in_any_order",
    "received_in_order",
    "run_in_scope",
    "verify_any_order",
    "verify_exact_order",
]
