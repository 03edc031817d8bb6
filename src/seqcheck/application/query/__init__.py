"""Query recording: the Query (trace) and the flow-local scope manager."""

from seqcheck.application.query.context import QueryContext, QueryScope, default_context
from seqcheck.application.query.query import Query

__all__ = [
    "Query",
    "QueryContext",
    "QueryScope",
    "default_context",
]
