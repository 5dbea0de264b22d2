"""Pydantic schemas for the household medical profile used in cost scenarios."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

Sex = Literal["male", "female"]


class Member(BaseModel):
    age: int = Field(..., ge=0, le=120)
    sex: Sex = "male"


class Dependent(Member):
    relationship: Literal["spouse", "child", "domestic_partner"] = "child"


class PreExistingCondition(BaseModel):
    condition: str = Field(..., min_length=1)
    diagnosed_date: Optional[str] = None
    currently_treated: bool = False


class Medication(BaseModel):
    name: str = Field(..., min_length=1)
    dosage: str = ""
    frequency: str = ""
    type: Literal["brand", "generic"] = "generic"


class Allergy(BaseModel):
    allergen: str = Field(..., min_length=1)
    type: Literal["food", "medication", "environmental", "other"] = "medication"
    severity: Literal["mild", "moderate", "severe"] = "mild"


class MedicalEvent(BaseModel):
    type: Literal["hospitalization", "surgery", "emergency_visit"] = "hospitalization"
    description: str = ""
    date: Optional[str] = None


class MedicalProfile(BaseModel):
    pre_existing_conditions: list[PreExistingCondition] = Field(default_factory=list)
    current_medications: list[Medication] = Field(default_factory=list)
    allergies: list[Allergy] = Field(default_factory=list)
    recent_medical_events: list[MedicalEvent] = Field(default_factory=list)
    smoker: bool = False
    expected_usage: Literal["low", "moderate", "high"] = "moderate"


class MedicalInformation(BaseModel):
    """Primary member, dependents, and the primary member's medical profile."""
    primary_member: Member
    dependents: list[Dependent] = Field(default_factory=list)
    primary_medical_info: MedicalProfile = Field(default_factory=MedicalProfile)

    def condition_names(self) -> list[str]:
        return [c.condition for c in self.primary_medical_info.pre_existing_conditions]

    def medication_names(self, with_type: bool = False) -> list[str]:
        meds = self.primary_medical_info.current_medications
        if with_type:
            return [f"{m.name} ({m.type})" for m in meds]
        return [m.name for m in meds]
