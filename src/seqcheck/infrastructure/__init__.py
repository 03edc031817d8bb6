"""Infrastructure layer: sequence source and the reference Target adapter."""

from seqcheck.infrastructure.sequence import GLOBAL_SEQUENCE, SequenceNumberGenerator
from seqcheck.infrastructure.substitute import Substitute

__all__ = [
    "GLOBAL_SEQUENCE",
    "SequenceNumberGenerator",
    "Substitute",
]
