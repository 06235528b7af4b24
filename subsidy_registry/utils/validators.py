"""
Utility functions for validating registry configuration
"""
from typing import Any, List, Sequence


def validate_attribute_name(name: Any) -> bool:
    """
    Validate a single attribute name

    Args:
        name: Candidate attribute name

    Returns:
        True if the name is a non-blank string, False otherwise
    """
    return isinstance(name, str) and bool(name.strip())


def validate_attribute_names(names: Sequence[Any], width: int) -> List[str]:
    """
    Validate an ordered list of attribute names for registration

    Args:
        names: Names in bit-position order
        width: Bit width available for the registry

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if isinstance(names, (str, bytes)):
        return ["Attribute names must be a sequence of strings, not a single string"]

    if len(names) > width:
        errors.append(f"{len(names)} attributes do not fit in a {width}-bit mask")

    seen = set()
    for index, name in enumerate(names):
        if not validate_attribute_name(name):
            errors.append(f"Attribute at position {index} must be a non-empty string")
            continue
        if name in seen:
            errors.append(f"Duplicate attribute name: {name!r}")
        seen.add(name)

    return errors


def validate_subsidy_amount(amount: Any) -> bool:
    """Subsidy amounts are positive integers"""
    return isinstance(amount, int) and not isinstance(amount, bool) and amount > 0
