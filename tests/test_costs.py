"""Tests for annual cost scenarios."""

import pytest

from src.schemas.medical import MedicalInformation
from src.schemas.policy import ParsedPolicy
from src.services.costs import (
    BASE_SCENARIOS,
    CHRONIC_SCENARIO,
    SCREENING_SCENARIO,
    calculate_costs,
    fallback_scenarios,
    unpriced_result,
)
from tests.fakes import SchemaRoutedGenerator


@pytest.fixture
def policy(policy_data):
    return ParsedPolicy.model_validate(policy_data)


@pytest.fixture
def medical(medical_data):
    return MedicalInformation.model_validate(medical_data)


def priced(scenario, user_payment=1200):
    return {
        "scenario": scenario,
        "estimated_annual_cost": 3000,
        "user_payment": user_payment,
        "insurance_payment": 3000 - user_payment,
        "cost_breakdown": {
            "deductible_payment": 1000,
            "coinsurance_payment": 150,
            "copayments": 50,
            "out_of_pocket_max": 7000,
        },
        "policy_score": "B",
        "recommendations": ["Use generics where possible"],
    }


def test_fallback_scenarios_add_chronic_and_screening(medical):
    assert fallback_scenarios(medical) == BASE_SCENARIOS + [CHRONIC_SCENARIO, SCREENING_SCENARIO]


def test_fallback_scenarios_young_and_healthy():
    medical = MedicalInformation(primary_member={"age": 30})
    assert fallback_scenarios(medical) == BASE_SCENARIOS


def test_unpriced_result_uses_individual_limit(policy):
    result = unpriced_result("Knee surgery", policy)

    assert result.policy_score == "N/A"
    assert result.user_payment == 0
    assert result.cost_breakdown.out_of_pocket_max == 7000


async def test_calculate_costs_prices_each_scenario_in_order(medical, policy):
    scenarios = ["Diabetes management", "Annual physical"]

    def price(request):
        scenario = request.messages[0]["content"]
        return priced("Diabetes management" if "Diabetes" in scenario else "Annual physical")

    generator = SchemaRoutedGenerator({
        "ScenariosOutput": {"scenarios": scenarios},
        "MedicalScenarioResult": price,
    })

    results = await calculate_costs(medical, policy, generator)

    assert [r.scenario for r in results] == scenarios
    scenario_call = generator.calls[0]
    assert scenario_call["schema"] == "ScenariosOutput"
    assert "Type 2 diabetes" in scenario_call["request"].system
    cost_call = generator.calls[1]
    assert "Metformin (generic)" in cost_call["request"].system
    assert "primary_care_visit" in cost_call["request"].system


async def test_scenario_generation_failure_uses_canned_list(medical, policy):
    generator = SchemaRoutedGenerator({
        "ScenariosOutput": RuntimeError("bad gateway"),
        "MedicalScenarioResult": lambda request: priced("whatever"),
    })

    results = await calculate_costs(medical, policy, generator)

    assert len(results) == len(fallback_scenarios(medical))


async def test_unpriceable_scenario_gets_placeholder(medical, policy):
    def price(request):
        if "Emergency" in request.messages[0]["content"]:
            return RuntimeError("refused")
        return priced("Annual physical")

    generator = SchemaRoutedGenerator({
        "ScenariosOutput": {"scenarios": ["Annual physical", "Emergency surgery"]},
        "MedicalScenarioResult": price,
    })

    results = await calculate_costs(medical, policy, generator)

    assert results[0].policy_score == "B"
    assert results[1].scenario == "Emergency surgery"
    assert results[1].policy_score == "N/A"
    assert results[1].recommendations[0].startswith("Unable to calculate costs")
