"""Order verification: exact and any-order algorithms plus diagnostics."""

from seqcheck.application.verification.any_order import group_by_target, verify_any_order
from seqcheck.application.verification.exact import (
    distinct_targets,
    merged_calls,
    verify_exact_order,
)
from seqcheck.application.verification.formatter import SequenceFormatter

__all__ = [
    "SequenceFormatter",
    "distinct_targets",
    "group_by_target",
    "merged_calls",
    "verify_any_order",
    "verify_exact_order",
]
