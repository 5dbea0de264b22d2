"""Pydantic schemas for API requests/responses."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from src.schemas.llm_outputs import CoverageCategory, PriceCheckResult
from src.schemas.medical import MedicalInformation
from src.schemas.policy import ParsedPolicy


class CoverageContext(BaseModel):
    """Where the user stands in the plan year."""
    is_in_network: bool = True
    deductible_spent: float = Field(0, ge=0)
    out_of_pocket_spent: float = Field(0, ge=0)

    @property
    def network_label(self) -> str:
        return "In-Network" if self.is_in_network else "Out-of-Network"


class SpendingContext(CoverageContext):
    """CoverageContext plus the plan's limits, for situation analysis."""
    deductible_limit: float = Field(0, ge=0)
    out_of_pocket_limit: float = Field(0, ge=0)


class CategoriesRequest(BaseModel):
    query: str = Field("", description="Treatment, medication or procedure; empty for general categories")
    context: CoverageContext = Field(default_factory=CoverageContext)
    policy: ParsedPolicy


class CategoriesResponse(BaseModel):
    categories: list[CoverageCategory]


class SituationsRequest(BaseModel):
    query: str = ""
    current_category: Optional[str] = None
    context: CoverageContext = Field(default_factory=CoverageContext)
    policy: ParsedPolicy


class SituationsResponse(BaseModel):
    situations: list[str]


class AnalyzeRequest(BaseModel):
    situation: str
    context: SpendingContext = Field(default_factory=SpendingContext)

    @field_validator("situation")
    @classmethod
    def situation_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Situation must not be empty")
        return v.strip()


class PriceCheckRequest(BaseModel):
    query: str = Field(..., description="Condition, treatment or medication to price")
    context: CoverageContext = Field(default_factory=CoverageContext)

    @field_validator("query")
    @classmethod
    def query_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Query must not be empty")
        return v.strip()


class PriceCheckResponse(BaseModel):
    results: list[PriceCheckResult]


class CostsRequest(BaseModel):
    medical_data: MedicalInformation
    policy: ParsedPolicy


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(..., min_length=1)
    system: Optional[str] = None
    context: CoverageContext = Field(default_factory=CoverageContext)
    policy: Optional[ParsedPolicy] = None
