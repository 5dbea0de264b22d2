"""Shared fixtures: no-sleep backoff, sample policy and medical profile."""

import pytest

from src.llm import invoker


@pytest.fixture(autouse=True)
def backoff_delays(monkeypatch):
    """Record backoff delays instead of sleeping."""
    delays = []

    async def fake_backoff(seconds):
        delays.append(seconds)

    monkeypatch.setattr(invoker, "_backoff", fake_backoff)
    return delays


@pytest.fixture
def policy_data():
    return {
        "filename": "sbc.pdf",
        "page_count": 8,
        "plan_summary": {
            "plan_name": "Silver Choice PPO",
            "coverage_period": {"start_date": "2025-01-01", "end_date": "2025-12-31"},
            "coverage_for": "individual_and_family",
            "plan_type": "PPO",
            "issuer_name": "Example Health",
            "issuer_contact_info": {"phone": "1-800-555-0100", "website": "https://example.com"},
        },
        "important_questions": {
            "overall_deductible": {"individual": 2000, "family": 4000},
            "services_covered_before_deductible": {
                "covered": True,
                "services": ["preventive care", "primary care visits"],
            },
            "deductibles_for_specific_services": {"exists": False},
            "out_of_pocket_limit_for_plan": {"individual": 7000, "family": 14000},
            "not_included_in_out_of_pocket_limit": {"services": ["premiums", "balance-billing"]},
            "network_provider_savings": {
                "lower_costs": True,
                "website": "https://example.com/providers",
                "phone": "1-800-555-0101",
            },
            "need_referral_for_specialist_care": {"required": False},
        },
        "services_you_may_need": [
            {
                "name": "primary_care_visit",
                "what_you_will_pay": {
                    "network_provider": "$30 copay/visit",
                    "out_of_network_provider": "50% coinsurance",
                    "limitations_exceptions_and_other_important_information": "None",
                },
            },
            {
                "name": "emergency_room",
                "what_you_will_pay": {
                    "network_provider": "$350 copay/visit",
                    "out_of_network_provider": "$350 copay/visit",
                    "limitations_exceptions_and_other_important_information": "Copay waived if admitted",
                },
            },
        ],
        "excluded_and_other_covered_services": {
            "excluded_services": ["Cosmetic surgery", "Long-term care"],
            "other_covered_services": ["Chiropractic care"],
        },
    }


@pytest.fixture
def medical_data():
    return {
        "primary_member": {"age": 56, "sex": "female"},
        "dependents": [{"age": 54, "sex": "male", "relationship": "spouse"}],
        "primary_medical_info": {
            "pre_existing_conditions": [{"condition": "Type 2 diabetes", "currently_treated": True}],
            "current_medications": [{"name": "Metformin", "type": "generic"}],
            "smoker": False,
            "expected_usage": "moderate",
        },
    }
