"""
Eligibility predicate policies
"""
from enum import Enum


class EligibilityPolicy(str, Enum):
    """How a holder's mask is compared against the required mask"""

    # holder has no bits outside the requirement: holder & ~required == 0
    SUBSET = "subset"
    # holder has at least every required bit: holder & required == required
    SUPERSET = "superset"
    EXACT = "exact"

    def matches(self, holder: int, required: int) -> bool:
        if self is EligibilityPolicy.SUBSET:
            return holder & ~required == 0
        if self is EligibilityPolicy.SUPERSET:
            return holder & required == required
        return holder == required
