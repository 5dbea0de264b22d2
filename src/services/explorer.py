"""Coverage category explorer.

When the invoker gives up, each feature here returns a default payload
instead of raising.
"""

from typing import Optional

from src import config
from src.llm import GenerationExhaustedError, StructuredGenerator, create_fallback, invoke_structured
from src.prompts.insurance import (
    ANALYZE_SYSTEM,
    ANALYZE_USER,
    CATEGORIES_SYSTEM,
    CATEGORIES_USER,
    SITUATIONS_SYSTEM,
    SITUATIONS_USER,
)
from src.schemas.api import CoverageContext, SpendingContext
from src.schemas.llm_outputs import (
    CategoriesOutput,
    CoverageCategory,
    SituationAnalysis,
    SituationsOutput,
)
from src.schemas.policy import ParsedPolicy
from src.utils.logging import log, get_logger

MODULE = "explorer"
logger = get_logger()

DEFAULT_SITUATIONS = [
    "What if I need an MRI?",
    "Emergency room visit costs",
    "Monthly prescription expenses",
    "Specialist consultation fees",
    "Preventive care coverage",
]

DEFAULT_ANALYSIS = {
    "estimated_cost": 0,
    "coverage_details": "Unable to analyze situation at this time.",
    "recommendations": ["Contact your insurance provider for specific details"],
}


def _policy_json(policy: ParsedPolicy) -> str:
    return policy.model_dump_json(exclude_none=True)


async def generate_categories(
    query: str,
    context: CoverageContext,
    policy: ParsedPolicy,
    generator: Optional[StructuredGenerator] = None,
) -> list[CoverageCategory]:
    """Graded insurance categories for a query. Empty list on failure."""
    log.info(logger, MODULE, "categories_start", "Generating categories",
             query=query[:80], network=context.network_label)
    try:
        result = await invoke_structured(
            CategoriesOutput,
            model=config.PRIMARY_MODEL,
            fallback_model=config.FALLBACK_MODEL,
            system=CATEGORIES_SYSTEM.format(
                query=query,
                network=context.network_label,
                deductible_spent=context.deductible_spent,
                out_of_pocket_spent=context.out_of_pocket_spent,
                policy_json=_policy_json(policy),
            ),
            messages=[{"role": "user", "content": CATEGORIES_USER.format(query=query)}],
            context="Category generation",
            generator=generator,
        )
    except GenerationExhaustedError as e:
        log.warning(logger, MODULE, "categories_fallback",
                    "Category generation failed, returning no categories",
                    error=str(e), attempts=e.attempts)
        return []

    log.info(logger, MODULE, "categories_done", "Categories generated",
             count=len(result.categories))
    return result.categories


async def generate_situations(
    query: str,
    context: CoverageContext,
    policy: ParsedPolicy,
    current_category: Optional[str] = None,
    generator: Optional[StructuredGenerator] = None,
) -> list[str]:
    """Common situations/questions for a query. Defaults on failure."""
    focus = f"Focus on situations related to {current_category}.\n" if current_category else ""
    try:
        result = await invoke_structured(
            SituationsOutput,
            model=config.PRIMARY_MODEL,
            fallback_model=config.FALLBACK_MODEL,
            system=SITUATIONS_SYSTEM.format(focus=focus, policy_json=_policy_json(policy)),
            messages=[{"role": "user", "content": SITUATIONS_USER.format(query=query)}],
            context="Situation generation",
            generator=generator,
        )
    except GenerationExhaustedError as e:
        log.warning(logger, MODULE, "situations_fallback",
                    "Situation generation failed, returning defaults",
                    error=str(e), network=context.network_label)
        return list(DEFAULT_SITUATIONS)
    return result.situations


async def analyze_situation(
    situation: str,
    context: SpendingContext,
    generator: Optional[StructuredGenerator] = None,
) -> SituationAnalysis:
    """Cost estimate and coverage notes for one situation."""
    try:
        return await invoke_structured(
            SituationAnalysis,
            model=config.SITUATION_MODEL,
            fallback_model=config.FALLBACK_MODEL,
            system=ANALYZE_SYSTEM.format(
                network=context.network_label,
                deductible_spent=context.deductible_spent,
                deductible_limit=context.deductible_limit,
                out_of_pocket_spent=context.out_of_pocket_spent,
                out_of_pocket_limit=context.out_of_pocket_limit,
            ),
            prompt=ANALYZE_USER.format(situation=situation),
            context="Situation analysis",
            generator=generator,
        )
    except GenerationExhaustedError as e:
        return create_fallback(SituationAnalysis, DEFAULT_ANALYSIS, reason=str(e))
