"""
Student Models - Defines the student record and its request payloads.
"""

from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Student(BaseModel):
    """
    One student profile.

    The identifier is fixed at construction. Every other field can be
    reassigned in place and is not validated on assignment; the
    registration code format is only checked by StudentManager.add_student().
    Older exports used ``nim``, ``major`` and ``gpa``; those keys are
    accepted on input, output always uses the current names.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., frozen=True)
    name: str
    code: str = Field(..., validation_alias=AliasChoices("code", "nim"))
    category: str = Field(..., validation_alias=AliasChoices("category", "major"))
    score: float = Field(..., allow_inf_nan=False, validation_alias=AliasChoices("score", "gpa"))

    @classmethod
    def from_dict(cls, data: dict) -> "Student":
        """Build a student from a plain data bag."""
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        """Plain data bag with the same five keys used at construction."""
        return self.model_dump()


class StudentCreate(BaseModel):
    """Student creation payload. A missing id is generated by the manager."""
    id: Optional[str] = None
    name: str
    code: str
    category: str
    score: float = Field(0.0, allow_inf_nan=False)


class StudentUpdate(BaseModel):
    """Student update payload - all fields optional, None means unchanged."""
    name: Optional[str] = None
    code: Optional[str] = None
    category: Optional[str] = None
    score: Optional[float] = Field(None, allow_inf_nan=False)
