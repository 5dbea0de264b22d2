"""Pydantic schemas for a parsed Summary of Benefits and Coverage.

An SBC is a standardised US document: page 1 carries the plan summary and
the "Important Questions" table, the "Common Medical Event" pages list
what you will pay per service, and a closing section lists excluded and
other covered services. The models below mirror that layout and double as
the output contracts for the extraction calls.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field


# =============================================================================
# SERVICE NAMES
# =============================================================================

# Standard "Services You May Need" rows. Models may also return free text
# for rows an issuer words differently.
SERVICE_TYPES = (
    "primary_care_visit",
    "specialist_visit",
    "preventive_care",
    "diagnostic_test",
    "imaging",
    "generic_drugs",
    "preferred_brand_drugs",
    "non_preferred_brand_drugs",
    "specialty_drugs",
    "outpatient_facility_fee",
    "outpatient_physician_fee",
    "emergency_room",
    "emergency_transport",
    "urgent_care",
    "hospital_facility_fee",
    "hospital_physician_fee",
    "mental_health_outpatient",
    "mental_health_inpatient",
    "pregnancy_office_visits",
    "childbirth_professional",
    "childbirth_facility",
    "home_health_care",
    "rehabilitation_services",
    "habilitation_services",
    "skilled_nursing",
    "durable_medical_equipment",
    "hospice_services",
    "childrens_eye_exam",
    "childrens_glasses",
    "childrens_dental_checkup",
)

ServiceType = Literal[SERVICE_TYPES]  # type: ignore[valid-type]

CoverageFor = Literal["individual", "family", "individual_and_family"]
PlanType = Literal["HMO", "PPO", "EPO", "POS", "HMO-POS", "HMO-EPO", "PPO-EPO", "PPO-POS"]


# =============================================================================
# PAGE 1: PLAN SUMMARY
# =============================================================================

class CoveragePeriod(BaseModel):
    start_date: str
    end_date: str


class IssuerContact(BaseModel):
    phone: str
    website: str


class PlanSummary(BaseModel):
    plan_name: str
    coverage_period: CoveragePeriod
    coverage_for: Union[CoverageFor, str]
    plan_type: Union[PlanType, str]
    issuer_name: str
    issuer_contact_info: IssuerContact


# =============================================================================
# PAGE 1: IMPORTANT QUESTIONS
# =============================================================================

class IndividualFamilyAmount(BaseModel):
    """A dollar amount quoted separately for individual and family coverage."""
    individual: float = Field(..., ge=0)
    family: float = Field(..., ge=0)
    details: Optional[str] = None


class ServicesBeforeDeductible(BaseModel):
    covered: bool
    services: list[str] = Field(default_factory=list)
    details: Optional[str] = None


class SpecificServiceDeductibles(BaseModel):
    exists: bool
    details: Optional[str] = None


class NotIncludedInOutOfPocket(BaseModel):
    services: list[str] = Field(default_factory=list)
    details: Optional[str] = None


class NetworkProviderSavings(BaseModel):
    lower_costs: bool
    website: str
    phone: str
    details: Optional[str] = None


class SpecialistReferral(BaseModel):
    required: bool
    details: Optional[str] = None


class ImportantQuestions(BaseModel):
    overall_deductible: IndividualFamilyAmount
    services_covered_before_deductible: ServicesBeforeDeductible
    deductibles_for_specific_services: SpecificServiceDeductibles
    out_of_pocket_limit_for_plan: IndividualFamilyAmount
    not_included_in_out_of_pocket_limit: NotIncludedInOutOfPocket
    network_provider_savings: NetworkProviderSavings
    need_referral_for_specialist_care: SpecialistReferral


class FirstPage(BaseModel):
    """Extraction contract for SBC page 1."""
    plan_summary: PlanSummary
    important_questions: ImportantQuestions


# =============================================================================
# COMMON MEDICAL EVENTS
# =============================================================================

class WhatYouWillPay(BaseModel):
    network_provider: str
    out_of_network_provider: str
    limitations_exceptions_and_other_important_information: str = Field(
        ...,
        description=(
            "The right-most column of the table. Duplicate it for each row "
            "it applies to."
        ),
    )


class ServiceYouMayNeed(BaseModel):
    name: Union[ServiceType, str]
    what_you_will_pay: WhatYouWillPay


class ServicesPage(BaseModel):
    """Extraction contract for one "what you will pay" page."""
    services_you_may_need: list[ServiceYouMayNeed] = Field(default_factory=list)


# =============================================================================
# EXCLUDED / OTHER COVERED SERVICES
# =============================================================================

class ExcludedAndOtherCoveredServices(BaseModel):
    excluded_services: list[str] = Field(default_factory=list)
    other_covered_services: list[str] = Field(default_factory=list)


# =============================================================================
# FULL POLICY
# =============================================================================

class ParsedPolicy(BaseModel):
    """Everything extracted from one SBC upload."""
    filename: Optional[str] = None
    page_count: int = 0
    plan_summary: PlanSummary
    important_questions: ImportantQuestions
    services_you_may_need: list[ServiceYouMayNeed] = Field(default_factory=list)
    excluded_and_other_covered_services: ExcludedAndOtherCoveredServices = Field(
        default_factory=ExcludedAndOtherCoveredServices
    )
