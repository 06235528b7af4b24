"""
Pydantic models describing registered attributes
"""
from pydantic import BaseModel, ConfigDict, Field


class AttributeDefinition(BaseModel):
    """A single attribute and the bit it occupies"""
    name: str = Field(..., min_length=1, description="Attribute name")
    bit: int = Field(..., ge=0, description="Bit position, 0 is least significant")
    mask: int = Field(..., description="Signed single-bit mask for this attribute")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "name": "married",
                "bit": 3,
                "mask": 8
            }
        }
    )
