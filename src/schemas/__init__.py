"""Pydantic schemas for structured data validation.

This package contains:
- policy.py: The parsed SBC document (also the extraction contracts)
- medical.py: Household medical profile for cost scenarios
- llm_outputs.py: Schemas for validating coverage-question LLM outputs
- api.py: Request/response schemas for the REST API

Every LLM output is validated against one of these models before the rest
of the system sees it.
"""

from src.schemas.policy import (
    ExcludedAndOtherCoveredServices,
    FirstPage,
    ImportantQuestions,
    ParsedPolicy,
    PlanSummary,
    ServiceYouMayNeed,
    ServicesPage,
    SERVICE_TYPES,
)

from src.schemas.medical import MedicalInformation

from src.schemas.llm_outputs import (
    CategoriesOutput,
    CostBreakdown,
    CoverageCategory,
    MedicalScenarioResult,
    PriceCheckOutput,
    PriceCheckResult,
    ScenariosOutput,
    SituationAnalysis,
    SituationsOutput,
)

from src.schemas.api import (
    AnalyzeRequest,
    CategoriesRequest,
    CategoriesResponse,
    ChatMessage,
    ChatRequest,
    CostsRequest,
    CoverageContext,
    PriceCheckRequest,
    PriceCheckResponse,
    SituationsRequest,
    SituationsResponse,
    SpendingContext,
)

__all__ = [
    # Policy
    "ExcludedAndOtherCoveredServices",
    "FirstPage",
    "ImportantQuestions",
    "ParsedPolicy",
    "PlanSummary",
    "ServiceYouMayNeed",
    "ServicesPage",
    "SERVICE_TYPES",
    # Medical
    "MedicalInformation",
    # LLM outputs
    "CategoriesOutput",
    "CostBreakdown",
    "CoverageCategory",
    "MedicalScenarioResult",
    "PriceCheckOutput",
    "PriceCheckResult",
    "ScenariosOutput",
    "SituationAnalysis",
    "SituationsOutput",
    # API
    "AnalyzeRequest",
    "CategoriesRequest",
    "CategoriesResponse",
    "ChatMessage",
    "ChatRequest",
    "CostsRequest",
    "CoverageContext",
    "PriceCheckRequest",
    "PriceCheckResponse",
    "SituationsRequest",
    "SituationsResponse",
    "SpendingContext",
]
