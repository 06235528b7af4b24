"""
Services package for the Subsidy Eligibility Registry
"""

from .attribute_registry import AttributeRegistry
from .mask_store import ApplicantMaskStore
from .ledger import LedgerGateway, InMemoryLedger
from .eligibility_service import EligibilityService
from .subsidy_program import SubsidyProgram

__all__ = [
    "AttributeRegistry",
    "ApplicantMaskStore",
    "LedgerGateway",
    "InMemoryLedger",
    "EligibilityService",
    "SubsidyProgram"
]
