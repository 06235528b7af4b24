"""
Configuration settings for the Subsidy Eligibility Registry
"""
import logging
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.policy import EligibilityPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application Configuration
    app_name: str = Field(default="Subsidy Eligibility Registry", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    log_level: str = Field(default="INFO", description="Root logging level")

    # Bitmask Configuration
    mask_width: int = Field(default=256, ge=1, description="Width in bits of every attribute mask")
    attribute_names: str = Field(
        default="male,female,single,married,no kids,1 kid,2 kids,employed,self-employed,toReceive",
        description="Ordered, comma-separated attribute names; bit i is assigned to name i"
    )

    # Subsidy Configuration
    required_attributes: str = Field(
        default="female,married,2 kids,toReceive",
        description="Comma-separated attributes composing the eligibility requirement"
    )
    eligible_attribute: str = Field(
        default="toReceive",
        description="Attribute whose bit gates disbursement and is consumed on claim"
    )
    subsidy_amount: int = Field(default=1000, gt=0, description="Fixed amount paid per claim")
    eligibility_policy: EligibilityPolicy = Field(
        default=EligibilityPolicy.SUBSET,
        description="Predicate used to compare a holder's mask with the required mask"
    )
    require_eligible_bit: bool = Field(
        default=True,
        description="Deny claims unless the eligible bit is currently set"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f'Unknown log level: {v}')
        return level

    def get_attribute_names_list(self) -> List[str]:
        """Get attribute names as a list"""
        return _split_names(self.attribute_names)

    def get_required_attributes_list(self) -> List[str]:
        """Get required attributes as a list"""
        return _split_names(self.required_attributes)

    model_config = SettingsConfigDict(
        env_prefix="SUBSIDY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


def _split_names(value: str) -> List[str]:
    return [name.strip() for name in value.split(',') if name.strip()]


def configure_logging(level: str = None) -> None:
    """Configure root logging at the given (or configured) level"""
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def get_settings() -> Settings:
    """Return the process-wide settings instance"""
    return settings


# Create global settings instance
settings = Settings()
