"""
Weight value object for set entry.

Sets always store kilograms. Weight is the input-side value object that
accepts either unit and converts to the canonical kilogram value.
"""

import math
from typing import Literal

from pydantic import BaseModel, Field, field_validator


# Conversion constants
LB_TO_KG = 0.45359237

MAX_WEIGHT_VALUE = 2000


class Weight(BaseModel):
    """
    Value object representing the weight lifted for a set.

    Zero is allowed (bodyweight movements are logged with 0 kg).

    Examples:
        >>> Weight(value=100, unit="kg").to_kg()
        100.0

        >>> Weight(value=225, unit="lb").to_kg()
        102.06
    """

    value: float = Field(..., ge=0, description="Weight value")
    unit: Literal["kg", "lb"] = Field(default="kg", description="Unit of measurement")

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: float) -> float:
        """Ensure value is finite, non-negative and reasonable."""
        if math.isnan(v) or math.isinf(v):
            raise ValueError("Weight must be a finite number")
        if v < 0:
            raise ValueError("Weight must not be negative")
        if v > MAX_WEIGHT_VALUE:
            raise ValueError(f"Weight exceeds reasonable maximum ({MAX_WEIGHT_VALUE})")
        return round(v, 2)

    def to_kg(self) -> float:
        """
        Convert to kilograms.

        Returns:
            Weight in kilograms, rounded to 2 decimal places.
        """
        if self.unit == "kg":
            return self.value
        return round(self.value * LB_TO_KG, 2)

    def __str__(self) -> str:
        return f"{self.value} {self.unit}"

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {"value": 100, "unit": "kg"},
                {"value": 135, "unit": "lb"},
            ]
        },
    }
