"""
Eligibility service for checking applicant masks and disbursing the subsidy
"""
import logging
from typing import Hashable, Iterable, List, Optional

from ..exceptions import AccessDeniedError, ConfigError, TransferError, TransferFailedError
from ..models.applicant import ClaimResult
from ..models.policy import EligibilityPolicy
from ..utils.validators import validate_subsidy_amount
from .attribute_registry import AttributeRegistry
from .ledger import LedgerGateway
from .mask_store import ApplicantMaskStore

logger = logging.getLogger(__name__)


class EligibilityService:
    """Service for checking applicant eligibility and paying out claims"""

    def __init__(
        self,
        registry: AttributeRegistry,
        store: ApplicantMaskStore,
        ledger: LedgerGateway,
        required_attributes: Iterable[str],
        eligible_attribute: str,
        subsidy_amount: int,
        policy: EligibilityPolicy = EligibilityPolicy.SUBSET,
        require_eligible_bit: bool = True
    ):
        if not validate_subsidy_amount(subsidy_amount):
            raise ConfigError(f"Subsidy amount must be a positive integer, got {subsidy_amount!r}")
        if store.arithmetic != registry.arithmetic:
            raise ConfigError(
                f"Store width {store.arithmetic.width} does not match registry width {registry.width}"
            )
        if isinstance(required_attributes, (str, bytes)):
            raise ConfigError("Required attributes must be a sequence of names, not a single string")

        required_attributes = tuple(required_attributes)
        unknown = [name for name in required_attributes if name not in registry]
        if unknown:
            raise ConfigError(f"Required attributes are not registered: {unknown}")
        if eligible_attribute not in registry:
            raise ConfigError(f"Eligible attribute is not registered: {eligible_attribute!r}")
        if eligible_attribute not in required_attributes:
            raise ConfigError(
                f"Eligible attribute {eligible_attribute!r} must be part of the requirement"
            )

        self.registry = registry
        self.store = store
        self.ledger = ledger
        self.required_attributes = required_attributes
        self.eligible_attribute = eligible_attribute
        self.subsidy_amount = subsidy_amount
        self.policy = EligibilityPolicy(policy)
        self.require_eligible_bit = require_eligible_bit
        self.claims: List[ClaimResult] = []

    @property
    def eligible_mask(self) -> int:
        return self.registry.mask_of(self.eligible_attribute)

    def required_mask(self, names: Optional[Iterable[str]] = None) -> int:
        """
        Compute the eligibility requirement mask

        Args:
            names: Attributes to combine (defaults to the configured requirement)

        Returns:
            OR of every named attribute's mask
        """
        if names is None:
            names = self.required_attributes
        return self.registry.combined_mask(names)

    def is_eligible(self, holder: int, required: Optional[int] = None) -> bool:
        """
        Evaluate the configured policy for a holder mask

        Args:
            holder: Applicant's current mask
            required: Requirement mask (defaults to ``required_mask()``)

        Returns:
            True if the policy predicate holds
        """
        if required is None:
            required = self.required_mask()
        return self.policy.matches(holder, required)

    def claim(self, caller: Hashable) -> ClaimResult:
        """
        Pay the subsidy to ``caller`` and consume their eligible bit

        The transfer happens before the mask changes, so a failed transfer
        leaves the applicant free to retry. The store lock is held across the
        whole sequence so concurrent claims by one applicant are serialised.

        Args:
            caller: Identity claiming the subsidy

        Returns:
            ClaimResult describing the payout

        Raises:
            AccessDeniedError: predicate failed or the eligible bit is not set
            TransferFailedError: the ledger refused the transfer
        """
        with self.store.lock:
            holder = self.store.get(caller)
            required = self.required_mask()
            eligible_mask = self.eligible_mask

            if not self.is_eligible(holder, required):
                logger.warning(
                    f"Claim denied for {caller!r}: mask {holder} fails {self.policy.value} check against {required}"
                )
                raise AccessDeniedError(
                    f"Mask {holder} does not satisfy the {self.policy.value} requirement {required}",
                    applicant=caller
                )

            if self.require_eligible_bit and holder & eligible_mask == 0:
                logger.warning(f"Claim denied for {caller!r}: {self.eligible_attribute!r} bit not set")
                raise AccessDeniedError(
                    f"Attribute {self.eligible_attribute!r} is not set for this applicant",
                    applicant=caller
                )

            try:
                self.ledger.transfer_value(caller, self.subsidy_amount)
            except TransferError as e:
                logger.error(f"Subsidy transfer to {caller!r} failed: {e}")
                raise TransferFailedError(f"Subsidy transfer failed: {e}", applicant=caller) from e

            updated = self.store.clear_bits(caller, eligible_mask)

        result = ClaimResult(
            applicant=caller,
            amount=self.subsidy_amount,
            mask_before=holder,
            mask_after=updated
        )
        self.claims.append(result)

        logger.info(f"Subsidy of {self.subsidy_amount} paid to {caller!r}, mask {holder} -> {updated}")
        return result
