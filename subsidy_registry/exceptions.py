"""
Exception hierarchy for the Subsidy Eligibility Registry
"""


class SubsidyRegistryError(Exception):
    """Base class for every error raised by this package"""


class ConfigError(SubsidyRegistryError):
    """Malformed registry or program construction; fatal at startup"""


class UnknownAttributeError(SubsidyRegistryError, KeyError):
    """An attribute name is not present in the registry"""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"Unknown attribute: {self.name!r}"


class UnauthorizedError(SubsidyRegistryError):
    """The acting identity is not the registry authority"""

    def __init__(self, actor, authority=None):
        super().__init__(f"{actor!r} is not authorized to modify applicant masks")
        self.actor = actor
        self.authority = authority


class TransferError(SubsidyRegistryError):
    """Raised by a ledger gateway when a value transfer cannot be completed"""


class ClaimError(SubsidyRegistryError):
    """Base class for subsidy claim failures"""

    def __init__(self, message: str, applicant=None):
        super().__init__(message)
        self.applicant = applicant


class AccessDeniedError(ClaimError):
    """The applicant's mask does not satisfy the eligibility predicate"""


class TransferFailedError(ClaimError):
    """The ledger refused the subsidy transfer; the applicant's mask is untouched"""
