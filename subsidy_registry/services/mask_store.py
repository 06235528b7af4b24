"""
Per-applicant attribute masks, mutated only by the registry authority
"""
import logging
import threading
from typing import Dict, Hashable

from ..exceptions import UnauthorizedError
from ..utils.bitwise import BitArithmetic

logger = logging.getLogger(__name__)


class ApplicantMaskStore:
    """
    Mapping from applicant identity to an accumulated bitmask.

    Unseen applicants have mask 0. The authority toggles attributes with XOR,
    so applying the same mask twice restores the previous value. Every
    mutation runs under ``lock``, which callers may also hold to make a
    read-check-write sequence atomic.
    """

    def __init__(self, authority: Hashable, arithmetic: BitArithmetic = None):
        self.authority = authority
        self.arithmetic = arithmetic or BitArithmetic()
        self.lock = threading.RLock()
        self._masks: Dict[Hashable, int] = {}

    def __len__(self):
        return len(self._masks)

    def __contains__(self, applicant) -> bool:
        return applicant in self._masks

    def get(self, applicant: Hashable) -> int:
        """Current mask for ``applicant``; 0 when nothing was ever assigned"""
        with self.lock:
            return self._masks.get(applicant, 0)

    def toggle(self, actor: Hashable, applicant: Hashable, mask: int) -> int:
        """
        XOR ``mask`` into the applicant's stored mask

        Args:
            actor: Identity performing the change
            applicant: Identity whose mask is changed
            mask: Bits to flip

        Returns:
            The applicant's new mask

        Raises:
            UnauthorizedError: if ``actor`` is not the authority
        """
        if actor != self.authority:
            logger.warning(f"Rejected mask toggle for {applicant!r} by non-authority {actor!r}")
            raise UnauthorizedError(actor, self.authority)

        with self.lock:
            updated = self.arithmetic.bit_xor(self.get(applicant), mask)
            self._masks[applicant] = updated

        logger.info(f"Toggled mask {mask} for {applicant!r}, now {updated}")
        return updated

    def clear_bits(self, applicant: Hashable, mask: int) -> int:
        """Clear every bit of ``mask`` for ``applicant`` and return the new mask"""
        with self.lock:
            updated = self.arithmetic.clear_bits(self.get(applicant), mask)
            self._masks[applicant] = updated
        return updated

    def snapshot(self) -> Dict[Hashable, int]:
        """Copy of every stored entry"""
        with self.lock:
            return dict(self._masks)
