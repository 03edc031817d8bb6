"""Target protocol: the call-history side of the mock subsystem."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from seqcheck.domain.model.call import Call


@runtime_checkable
class Target(Protocol):
    """Contract for substitute objects whose calls are verified.

    The engine never creates targets. It only consumes their histories.
    Each Call must carry a process-wide, strictly increasing sequence
    number assigned at capture time.
    """

    def received_calls(self) -> Sequence[Call]:
        """All calls received so far, in chronological order."""
        ...
