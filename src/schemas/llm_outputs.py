"""Pydantic schemas for coverage-question LLM outputs.

These define the exact structure expected from each explorer, price-check
and cost-scenario call. Responses are validated against them inside the
invoker, so downstream code can trust the shape.
"""

from typing import Literal

from pydantic import BaseModel, Field

CoverageScore = Literal["A", "B", "C", "D", "F", "N/A"]


# =============================================================================
# CATEGORY EXPLORER
# =============================================================================

class CoverageCategory(BaseModel):
    """One insurance category graded against the user's plan.

    A: 80-100% covered, B: 60-80%, C: 40-60%, D: 20-40%, F: 0-20%.
    """
    name: str = Field(..., min_length=1)
    score: CoverageScore
    description: str


class CategoriesOutput(BaseModel):
    categories: list[CoverageCategory]


class SituationsOutput(BaseModel):
    situations: list[str]


class SituationAnalysis(BaseModel):
    estimated_cost: float = Field(..., ge=0, description="Estimated out-of-pocket cost in USD")
    coverage_details: str
    recommendations: list[str] = Field(default_factory=list)


# =============================================================================
# PRICE CHECK
# =============================================================================

class PriceCheckResult(BaseModel):
    name: str
    estimated_cost: float = Field(..., ge=0)
    details: str


class PriceCheckOutput(BaseModel):
    results: list[PriceCheckResult]


# =============================================================================
# COST SCENARIOS
# =============================================================================

class ScenariosOutput(BaseModel):
    scenarios: list[str]


class CostBreakdown(BaseModel):
    deductible_payment: float = Field(..., ge=0)
    coinsurance_payment: float = Field(..., ge=0)
    copayments: float = Field(..., ge=0)
    out_of_pocket_max: float = Field(..., ge=0)


class MedicalScenarioResult(BaseModel):
    scenario: str
    estimated_annual_cost: float = Field(..., ge=0)
    user_payment: float = Field(..., ge=0)
    insurance_payment: float = Field(..., ge=0)
    cost_breakdown: CostBreakdown
    policy_score: CoverageScore
    recommendations: list[str] = Field(default_factory=list)
