"""Tests for the SBC parse pipeline with a fake partitioner and generator."""

import asyncio

import pytest

from src import config
from src.llm import GenerationExhaustedError, StructuredGenerator
from src.schemas.policy import FirstPage
from src.services.sbc_parser import SBCParseError, parse_sbc
from tests.fakes import SchemaRoutedGenerator

PAGES = [
    "Summary of Benefits and Coverage: Silver Choice PPO ... Important Questions",
    "Common Medical Event | Services You May Need | What You Will Pay (primary care)",
    "Common Medical Event | Services You May Need | What You Will Pay (emergency)",
    "Excluded Services & Other Covered Services: Services your plan generally does NOT cover "
    "... Other covered services (limitations may apply to these services)",
]


def fake_partitioner(pages):
    async def partition(content, filename):
        return list(pages)
    return partition


def service_row(name, copay):
    return {
        "name": name,
        "what_you_will_pay": {
            "network_provider": copay,
            "out_of_network_provider": "50% coinsurance",
            "limitations_exceptions_and_other_important_information": "None",
        },
    }


@pytest.fixture
def first_page(policy_data):
    return {
        "plan_summary": policy_data["plan_summary"],
        "important_questions": policy_data["important_questions"],
    }


def services_by_page(request):
    if "primary care" in request.prompt:
        return {"services_you_may_need": [service_row("primary_care_visit", "$30 copay")]}
    return {"services_you_may_need": [
        service_row("emergency_room", "$350 copay"),
        service_row("emergency_transport", "$250 copay"),
    ]}


async def test_parse_sbc_assembles_policy(first_page):
    generator = SchemaRoutedGenerator({
        "FirstPage": first_page,
        "ServicesPage": services_by_page,
        "ExcludedAndOtherCoveredServices": {
            "excluded_services": ["Cosmetic surgery"],
            "other_covered_services": ["Acupuncture"],
        },
    })

    policy = await parse_sbc(b"%PDF", "plan.pdf", generator=generator,
                             partitioner=fake_partitioner(PAGES))

    assert policy.filename == "plan.pdf"
    assert policy.page_count == 4
    assert policy.plan_summary.plan_name == "Silver Choice PPO"
    assert policy.important_questions.overall_deductible.individual == 2000
    # Rows keep page order even though pages are structured concurrently
    assert [s.name for s in policy.services_you_may_need] == [
        "primary_care_visit", "emergency_room", "emergency_transport",
    ]
    assert policy.excluded_and_other_covered_services.excluded_services == ["Cosmetic surgery"]
    assert {c["model"] for c in generator.calls} == {config.EXTRACTION_MODEL}


async def test_first_page_prompt_carries_page_text(first_page):
    generator = SchemaRoutedGenerator({
        "FirstPage": first_page,
        "ServicesPage": services_by_page,
        "ExcludedAndOtherCoveredServices": {},
    })

    await parse_sbc(b"%PDF", "plan.pdf", generator=generator, partitioner=fake_partitioner(PAGES))

    first_call = next(c for c in generator.calls if c["schema"] == "FirstPage")
    assert PAGES[0] in first_call["request"].prompt
    services_call = next(c for c in generator.calls if c["schema"] == "ServicesPage")
    assert "primary_care_visit" in services_call["request"].prompt


async def test_no_closing_section_skips_model_call(first_page):
    generator = SchemaRoutedGenerator({
        "FirstPage": first_page,
        "ServicesPage": services_by_page,
    })

    policy = await parse_sbc(b"%PDF", "plan.pdf", generator=generator,
                             partitioner=fake_partitioner(PAGES[:3]))

    assert policy.excluded_and_other_covered_services.excluded_services == []
    assert all(c["schema"] != "ExcludedAndOtherCoveredServices" for c in generator.calls)


async def test_empty_document_raises_parse_error():
    generator = SchemaRoutedGenerator({})

    with pytest.raises(SBCParseError):
        await parse_sbc(b"%PDF", "scan.pdf", generator=generator, partitioner=fake_partitioner([]))
    with pytest.raises(SBCParseError):
        await parse_sbc(b"%PDF", "scan.pdf", generator=generator,
                        partitioner=fake_partitioner(["   ", "What you will pay"]))

    assert generator.calls == []


async def test_first_page_exhaustion_propagates():
    generator = SchemaRoutedGenerator({"FirstPage": RuntimeError("model down")})

    with pytest.raises(GenerationExhaustedError) as exc_info:
        await parse_sbc(b"%PDF", "plan.pdf", generator=generator,
                        partitioner=fake_partitioner(PAGES))

    assert exc_info.value.fallback_used is True
    assert generator.calls[-1]["model"] == config.FALLBACK_MODEL


class SlowSiblingGenerator(StructuredGenerator):
    """First page succeeds; one services page fails at once, the other is slow."""

    def __init__(self, first_page):
        self.first_page = first_page
        self.slow_started = 0
        self.slow_finished = 0

    async def generate(self, request, *, model, temperature):
        if request.schema is FirstPage:
            return self.first_page
        if "FAIL" in request.prompt:
            raise RuntimeError("page unreadable")
        self.slow_started += 1
        await asyncio.sleep(0.05)
        self.slow_finished += 1
        raise RuntimeError("slow page unreadable")


async def test_failed_services_page_cancels_sibling_pages(first_page):
    generator = SlowSiblingGenerator(first_page)
    pages = ["Summary page", "What you will pay FAIL", "What you will pay SLOW"]

    with pytest.raises(GenerationExhaustedError):
        await parse_sbc(b"%PDF", "plan.pdf", generator=generator,
                        partitioner=fake_partitioner(pages))
    started = generator.slow_started

    await asyncio.sleep(0.2)

    assert generator.slow_finished == 0
    assert generator.slow_started == started <= 1
