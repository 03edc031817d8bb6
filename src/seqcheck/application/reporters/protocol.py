"""Reporter protocol: contract for all reporters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from seqcheck.domain.exceptions import SequenceNotFoundError


class ReporterProtocol(Protocol):
    """Protocol for sequence mismatch reporters.

    Output is str, not print(). Caller decides destination.
    """

    def report(self, error: SequenceNotFoundError) -> str:
        """Format sequence mismatch as string.

        Args:
            error: Failed verification.

        Returns:
            Formatted string representation.
        """
        ...
