"""Verification configuration."""

from __future__ import annotations

from dataclasses import dataclass

from seqcheck.domain.model.enums import LengthPolicy


@dataclass(frozen=True, slots=True)
class VerificationConfig:
    """Verification configuration DTO.

    Immutable configuration object with FAIL-FIRST validation.
    All fields have defaults (convenience).

    Attributes:
        failure_types: Exception types matchers raise to signal a mismatch.
            Anything else raised by a matcher is an unexpected error.
        length_policy: Exact-order handling of surplus actual calls.
        max_argument_length: Truncate argument reprs in diagnostics.
            None = unlimited.
    """

    failure_types: tuple[type[BaseException], ...] = (AssertionError,)
    length_policy: LengthPolicy = LengthPolicy.PREFIX
    max_argument_length: int | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.failure_types:
            raise ValueError("failure_types must not be empty")
        for failure_type in self.failure_types:
            if not (isinstance(failure_type, type) and issubclass(failure_type, BaseException)):
                raise TypeError(f"failure_types must contain exception types, got {failure_type!r}")
        if not isinstance(self.length_policy, LengthPolicy):
            raise TypeError(f"length_policy must be LengthPolicy, got {type(self.length_policy).__name__}")
        if self.max_argument_length is not None and self.max_argument_length < 4:
            raise ValueError(f"max_argument_length must be >= 4, got {self.max_argument_length}")
