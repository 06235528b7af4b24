"""
Models package for the Subsidy Eligibility Registry
"""

from .policy import EligibilityPolicy

from .registry import AttributeDefinition

from .applicant import (
    ApplicantMask,
    ClaimResult
)

__all__ = [
    # Policies
    "EligibilityPolicy",

    # Registry models
    "AttributeDefinition",

    # Applicant models
    "ApplicantMask",
    "ClaimResult"
]
