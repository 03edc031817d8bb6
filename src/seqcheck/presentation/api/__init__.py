"""Public API."""

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
    "any_arg",
    "areceived_in_any_order",
    "areceived_in_order",
    "arun_in_scope",
    "enter_scope",
    "match",
    "received_in_any_order",
    "received_in_order",
    "run_in_scope",
    "verify_any_order",
    "verify_exact_order",
]
