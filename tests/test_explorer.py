"""Tests for the coverage explorer and price check services."""

import os

import pytest

from src import config
from src.llm import GenerationExhaustedError
from src.schemas.api import CoverageContext, SpendingContext
from src.schemas.policy import ParsedPolicy
from src.services.explorer import (
    DEFAULT_SITUATIONS,
    analyze_situation,
    generate_categories,
    generate_situations,
)
from src.services.price_check import check_price
from tests.fakes import SchemaRoutedGenerator


@pytest.fixture
def policy(policy_data):
    return ParsedPolicy.model_validate(policy_data)


async def test_categories_prompt_includes_context_and_policy(policy):
    generator = SchemaRoutedGenerator({
        "CategoriesOutput": {"categories": [
            {"name": "Physical Therapy", "score": "B", "description": "$40 copay after deductible"},
        ]},
    })
    context = CoverageContext(is_in_network=False, deductible_spent=500, out_of_pocket_spent=800)

    categories = await generate_categories("knee surgery", context, policy, generator)

    assert [c.name for c in categories] == ["Physical Therapy"]
    call = generator.calls[0]
    assert call["model"] == config.PRIMARY_MODEL
    request = call["request"]
    assert "Out-of-Network" in request.system
    assert "Silver Choice PPO" in request.system
    assert "knee surgery" in request.messages[0]["content"]


async def test_categories_exhaustion_returns_empty_list(policy):
    generator = SchemaRoutedGenerator({"CategoriesOutput": {"categories": [{"name": "X", "score": "Z"}]}})

    categories = await generate_categories("anything", CoverageContext(), policy, generator)

    assert categories == []
    # Four primary temperatures plus one fallback call
    assert len(generator.calls) == 5
    assert generator.calls[-1]["model"] == config.FALLBACK_MODEL


async def test_situations_focus_on_current_category(policy):
    generator = SchemaRoutedGenerator({
        "SituationsOutput": {"situations": ["What if I need a crown?"]},
    })

    situations = await generate_situations(
        "", CoverageContext(), policy, current_category="Dental Care", generator=generator,
    )

    assert situations == ["What if I need a crown?"]
    assert "Dental Care" in generator.calls[0]["request"].system


async def test_situations_exhaustion_returns_defaults(policy):
    generator = SchemaRoutedGenerator({"SituationsOutput": RuntimeError("overloaded")})

    situations = await generate_situations("mri", CoverageContext(), policy, generator=generator)

    assert situations == DEFAULT_SITUATIONS
    assert situations is not DEFAULT_SITUATIONS


async def test_analyze_situation_uses_situation_model():
    generator = SchemaRoutedGenerator({
        "SituationAnalysis": {
            "estimated_cost": 450,
            "coverage_details": "MRI subject to deductible, then 20% coinsurance.",
            "recommendations": ["Use an in-network imaging center"],
        },
    })
    context = SpendingContext(deductible_spent=100, deductible_limit=2000,
                              out_of_pocket_spent=100, out_of_pocket_limit=7000)

    analysis = await analyze_situation("What if I need an MRI?", context, generator)

    assert analysis.estimated_cost == 450
    request = generator.calls[0]["request"]
    assert generator.calls[0]["model"] == config.SITUATION_MODEL
    assert "2000" in request.system
    assert request.prompt and "MRI" in request.prompt


async def test_analyze_situation_exhaustion_returns_default():
    generator = SchemaRoutedGenerator({"SituationAnalysis": {"estimated_cost": -5, "coverage_details": ""}})

    analysis = await analyze_situation("ER visit", SpendingContext(), generator)

    assert analysis.estimated_cost == 0
    assert analysis.coverage_details == "Unable to analyze situation at this time."
    assert analysis.recommendations == ["Contact your insurance provider for specific details"]


async def test_price_check_returns_results():
    generator = SchemaRoutedGenerator({
        "PriceCheckOutput": {"results": [
            {"name": "Metformin 500mg", "estimated_cost": 10, "details": "Tier 1 generic"},
        ]},
    })

    output = await check_price("metformin", CoverageContext(deductible_spent=300), generator)

    assert output.results[0].name == "Metformin 500mg"
    assert generator.calls[0]["model"] == config.CHAT_MODEL
    assert "metformin" in generator.calls[0]["request"].messages[0]["content"]


async def test_price_check_exhaustion_propagates():
    generator = SchemaRoutedGenerator({"PriceCheckOutput": RuntimeError("down")})

    with pytest.raises(GenerationExhaustedError) as exc_info:
        await check_price("metformin", CoverageContext(), generator)

    assert exc_info.value.context == "Price check"


@pytest.mark.skipif("SITUATION_MODEL" in os.environ, reason="SITUATION_MODEL overridden")
def test_situation_model_defaults_to_gpt_4o():
    assert config.SITUATION_MODEL == "openai:gpt-4o"
