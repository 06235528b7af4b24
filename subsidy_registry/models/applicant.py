"""
Pydantic models for applicant masks and subsidy claims
"""
from datetime import datetime, timezone
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


def get_current_utc_time():
    """Get current UTC time for default values"""
    return datetime.now(timezone.utc)


class ApplicantMask(BaseModel):
    """Decoded view of an applicant's attribute mask"""
    applicant: Any = Field(..., description="Ledger identity of the applicant")
    mask: int = Field(..., description="Accumulated attribute bitmask")
    attributes: List[str] = Field(default_factory=list, description="Names of the set attributes")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "applicant": "alice",
                "mask": 586,
                "attributes": ["female", "married", "2 kids", "toReceive"]
            }
        }
    )


class ClaimResult(BaseModel):
    """Outcome of a successful subsidy claim"""
    applicant: Any = Field(..., description="Identity that received the subsidy")
    amount: int = Field(..., gt=0, description="Amount transferred")
    mask_before: int = Field(..., description="Applicant mask before the claim")
    mask_after: int = Field(..., description="Applicant mask after the eligible bit was consumed")
    claimed_at: datetime = Field(default_factory=get_current_utc_time)

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "applicant": "alice",
                "amount": 1000,
                "mask_before": 586,
                "mask_after": 74,
                "claimed_at": "2024-01-15T10:30:00Z"
            }
        }
    )
