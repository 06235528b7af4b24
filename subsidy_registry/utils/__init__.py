"""
Utility functions for the Subsidy Eligibility Registry
"""

from .bitwise import BitArithmetic, to_signed, to_unsigned
from .validators import (
    validate_attribute_name,
    validate_attribute_names,
    validate_subsidy_amount
)

__all__ = [
    "BitArithmetic",
    "to_signed",
    "to_unsigned",
    "validate_attribute_name",
    "validate_attribute_names",
    "validate_subsidy_amount"
]
