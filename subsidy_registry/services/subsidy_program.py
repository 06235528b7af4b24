"""
Subsidy program: the authority-facing and applicant-facing operations
"""
import logging
from typing import Hashable, Iterable, Optional, Sequence

from ..config import Settings, get_settings
from ..exceptions import UnauthorizedError
from ..models.applicant import ApplicantMask, ClaimResult
from ..models.policy import EligibilityPolicy
from .attribute_registry import AttributeRegistry
from .eligibility_service import EligibilityService
from .ledger import LedgerGateway
from .mask_store import ApplicantMaskStore

logger = logging.getLogger(__name__)


class SubsidyProgram:
    """
    One registry, one authority, one fixed subsidy.

    The identity invoking the constructor (``ledger.current_caller()``)
    becomes the authority allowed to assign attributes.
    """

    def __init__(
        self,
        ledger: LedgerGateway,
        attribute_names: Sequence[str],
        required_attributes: Sequence[str],
        eligible_attribute: str,
        subsidy_amount: int,
        width: int = 256,
        policy: EligibilityPolicy = EligibilityPolicy.SUBSET,
        require_eligible_bit: bool = True
    ):
        self.ledger = ledger
        self.authority = ledger.current_caller()
        self.registry = AttributeRegistry(attribute_names, width=width)
        self.store = ApplicantMaskStore(self.authority, self.registry.arithmetic)
        self.eligibility = EligibilityService(
            registry=self.registry,
            store=self.store,
            ledger=ledger,
            required_attributes=required_attributes,
            eligible_attribute=eligible_attribute,
            subsidy_amount=subsidy_amount,
            policy=policy,
            require_eligible_bit=require_eligible_bit
        )
        logger.info(f"Subsidy program created by authority {self.authority!r}")

    @classmethod
    def from_settings(cls, ledger: LedgerGateway, settings: Optional[Settings] = None) -> "SubsidyProgram":
        """Build a program from the pydantic settings"""
        settings = settings or get_settings()
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        return cls(
            ledger=ledger,
            attribute_names=settings.get_attribute_names_list(),
            required_attributes=settings.get_required_attributes_list(),
            eligible_attribute=settings.eligible_attribute,
            subsidy_amount=settings.subsidy_amount,
            width=settings.mask_width,
            policy=settings.eligibility_policy,
            require_eligible_bit=settings.require_eligible_bit
        )

    def assign_attributes(self, applicant: Hashable, attribute_names: Iterable[str]) -> int:
        """
        Toggle each named attribute for ``applicant``

        All names are resolved before anything changes. A name listed twice
        toggles twice and cancels out.

        Args:
            applicant: Identity whose mask changes
            attribute_names: Attributes to toggle

        Returns:
            The applicant's new mask

        Raises:
            UnauthorizedError: if the caller is not the authority
            UnknownAttributeError: if any name is not registered
            TypeError: if ``attribute_names`` is a single string
        """
        caller = self.ledger.current_caller()
        if caller != self.authority:
            logger.warning(f"Rejected attribute assignment for {applicant!r} by {caller!r}")
            raise UnauthorizedError(caller, self.authority)

        if isinstance(attribute_names, (str, bytes)):
            raise TypeError("attribute_names must be a sequence of names, not a single string")

        arithmetic = self.registry.arithmetic
        toggles = 0
        for mask in [self.registry.mask_of(name) for name in attribute_names]:
            toggles = arithmetic.bit_xor(toggles, mask)

        return self.store.toggle(caller, applicant, toggles)

    def claim_subsidy(self) -> ClaimResult:
        """Claim the subsidy for the invoking identity"""
        return self.eligibility.claim(self.ledger.current_caller())

    def mask_of(self, applicant: Hashable) -> int:
        return self.store.get(applicant)

    def describe_applicant(self, applicant: Hashable) -> ApplicantMask:
        mask = self.store.get(applicant)
        return ApplicantMask(
            applicant=applicant,
            mask=mask,
            attributes=self.registry.decode(mask)
        )
