"""
Exercise value object for catalog reference data.

Exercises are loaded once from the bundled catalog and shared by every
ExerciseSet that references them. The session core never mutates them.
"""

from typing import List

from pydantic import BaseModel, Field, field_validator


class Exercise(BaseModel):
    """
    Value object representing a catalog exercise.

    Examples:
        >>> squat = Exercise(
        ...     id="barbell-back-squat",
        ...     name="Barbell Back Squat",
        ...     notes=["Brace before descending", "Knees track over toes"],
        ...     muscle="Quadriceps",
        ...     group="Legs",
        ... )
        >>> squat.group
        'Legs'
    """

    id: str = Field(..., min_length=1, description="Opaque catalog identifier")
    name: str = Field(..., min_length=1, description="Display name")
    notes: List[str] = Field(
        default_factory=list,
        description="Ordered instructional notes",
    )
    muscle: str = Field(default="", description="Primary muscle label")
    group: str = Field(default="", description="Muscle group label (e.g. 'Chest')")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip surrounding whitespace from the display name."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Exercise name must not be blank")
        return stripped

    def __str__(self) -> str:
        if self.group:
            return f"{self.name} ({self.group})"
        return self.name

    model_config = {
        "frozen": True,  # reference data, shared across sets
        "json_schema_extra": {
            "examples": [
                {
                    "id": "barbell-bench-press",
                    "name": "Barbell Bench Press",
                    "notes": ["Retract shoulder blades", "Touch mid chest"],
                    "muscle": "Pectoralis Major",
                    "group": "Chest",
                },
            ]
        },
    }
