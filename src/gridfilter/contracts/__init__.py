"""Stage contracts - fail-fast enforcement of grid stage invariants.

This package enforces semantic guarantees between grid-building stages.
Contracts fail immediately and loudly when a stage doesn't produce its
promised invariants.

Key principle:
- Pydantic validates config correctness
- Contracts validate stage correctness
- Geometry engine errors propagate unchanged
"""

from gridfilter.contracts.failure import ContractViolation
from gridfilter.contracts.base import require
from gridfilter.contracts.grid import assert_rastered, assert_polygonized
from gridfilter.contracts.overlap import assert_overlap_ratios
from gridfilter.contracts.candidates import assert_candidates

__all__ = [
    "ContractViolation",
    "require",
    "assert_rastered",
    "assert_polygonized",
    "assert_overlap_ratios",
    "assert_candidates",
]
