"""Annual cost scenarios for a household against a parsed policy.

  1. Generate 5-8 plausible scenarios from the medical profile
     (canned list if the model gives up)
  2. Price each scenario sequentially against the policy
  3. A scenario that cannot be priced gets a zeroed "N/A" result instead of
     failing the whole batch
"""

from typing import Optional

from src import config
from src.llm import GenerationExhaustedError, StructuredGenerator, invoke_structured
from src.prompts.insurance import (
    SCENARIO_COSTS_SYSTEM,
    SCENARIO_COSTS_USER,
    SCENARIOS_SYSTEM,
    SCENARIOS_USER,
)
from src.schemas.llm_outputs import CostBreakdown, MedicalScenarioResult, ScenariosOutput
from src.schemas.medical import MedicalInformation
from src.schemas.policy import ParsedPolicy
from src.utils.logging import log, get_logger

MODULE = "costs"
logger = get_logger()

BASE_SCENARIOS = [
    "Annual physical exam and routine lab work",
    "Prescription medication refills for the year",
    "Urgent care visit for minor illness",
    "Specialist consultation and follow-up",
    "Emergency room visit for acute condition",
]
CHRONIC_SCENARIO = "Management of chronic condition with multiple appointments"
SCREENING_SCENARIO = "Preventive screening tests (colonoscopy, mammogram, etc.)"


def _joined(items: list[str]) -> str:
    return ", ".join(items) or "None"


def fallback_scenarios(medical: MedicalInformation) -> list[str]:
    scenarios = list(BASE_SCENARIOS)
    if medical.primary_medical_info.pre_existing_conditions:
        scenarios.append(CHRONIC_SCENARIO)
    if medical.primary_member.age > 50:
        scenarios.append(SCREENING_SCENARIO)
    return scenarios


def unpriced_result(scenario: str, policy: ParsedPolicy) -> MedicalScenarioResult:
    return MedicalScenarioResult(
        scenario=scenario,
        estimated_annual_cost=0,
        user_payment=0,
        insurance_payment=0,
        cost_breakdown=CostBreakdown(
            deductible_payment=0,
            coinsurance_payment=0,
            copayments=0,
            out_of_pocket_max=policy.important_questions.out_of_pocket_limit_for_plan.individual,
        ),
        policy_score="N/A",
        recommendations=[
            "Unable to calculate costs for this scenario. Please contact your insurance provider."
        ],
    )


async def generate_healthcare_scenarios(
    medical: MedicalInformation,
    generator: Optional[StructuredGenerator] = None,
) -> list[str]:
    profile = medical.primary_medical_info
    try:
        result = await invoke_structured(
            ScenariosOutput,
            model=config.ANALYSIS_MODEL,
            fallback_model=config.FALLBACK_MODEL,
            system=SCENARIOS_SYSTEM.format(
                age=medical.primary_member.age,
                conditions=_joined(medical.condition_names()),
                medications=_joined(medical.medication_names()),
                expected_usage=profile.expected_usage,
                smoker="Yes" if profile.smoker else "No",
                dependents=len(medical.dependents),
            ),
            messages=[{"role": "user", "content": SCENARIOS_USER}],
            context="Scenario generation",
            generator=generator,
        )
    except GenerationExhaustedError as e:
        log.warning(logger, MODULE, "scenarios_fallback",
                    "Scenario generation failed, using canned scenarios",
                    error=str(e))
        return fallback_scenarios(medical)
    return result.scenarios


async def calculate_scenario_costs(
    scenario: str,
    medical: MedicalInformation,
    policy: ParsedPolicy,
    generator: Optional[StructuredGenerator] = None,
) -> MedicalScenarioResult:
    profile = medical.primary_medical_info
    questions = policy.important_questions
    services = "\n".join(
        f"- {s.name}: Network: {s.what_you_will_pay.network_provider}, "
        f"Out-of-Network: {s.what_you_will_pay.out_of_network_provider}"
        for s in policy.services_you_may_need
    )
    return await invoke_structured(
        MedicalScenarioResult,
        model=config.ANALYSIS_MODEL,
        fallback_model=config.FALLBACK_MODEL,
        system=SCENARIO_COSTS_SYSTEM.format(
            scenario=scenario,
            age=medical.primary_member.age,
            conditions=_joined(medical.condition_names()),
            medications=_joined(medical.medication_names(with_type=True)),
            expected_usage=profile.expected_usage,
            smoker="Yes" if profile.smoker else "No",
            plan_type=policy.plan_summary.plan_type,
            deductible_individual=questions.overall_deductible.individual,
            deductible_family=questions.overall_deductible.family,
            oop_individual=questions.out_of_pocket_limit_for_plan.individual,
            oop_family=questions.out_of_pocket_limit_for_plan.family,
            services=services or "(none listed)",
        ),
        messages=[{"role": "user", "content": SCENARIO_COSTS_USER.format(scenario=scenario)}],
        context="Scenario cost calculation",
        generator=generator,
    )


async def calculate_costs(
    medical: MedicalInformation,
    policy: ParsedPolicy,
    generator: Optional[StructuredGenerator] = None,
) -> list[MedicalScenarioResult]:
    log.info(logger, MODULE, "costs_start", "Calculating scenario costs",
             age=medical.primary_member.age,
             dependents=len(medical.dependents),
             conditions=len(medical.primary_medical_info.pre_existing_conditions),
             medications=len(medical.primary_medical_info.current_medications))

    scenarios = await generate_healthcare_scenarios(medical, generator)

    results = []
    for scenario in scenarios:
        try:
            results.append(await calculate_scenario_costs(scenario, medical, policy, generator))
        except GenerationExhaustedError as e:
            log.warning(logger, MODULE, "scenario_failed",
                        "Could not price scenario, using placeholder",
                        scenario=scenario, error=str(e))
            results.append(unpriced_result(scenario, policy))

    log.info(logger, MODULE, "costs_done", "Scenario costs calculated",
             scenarios=len(results))
    return results
