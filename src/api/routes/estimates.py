"""Price check and cost scenario endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_generator
from src.llm import GenerationExhaustedError, StructuredGenerator
from src.schemas.api import CostsRequest, PriceCheckRequest, PriceCheckResponse
from src.schemas.llm_outputs import MedicalScenarioResult
from src.services.costs import calculate_costs
from src.services.price_check import check_price

router = APIRouter()


@router.post("/price-check", response_model=PriceCheckResponse)
async def price_check(
    body: PriceCheckRequest,
    generator: StructuredGenerator = Depends(get_generator),
):
    try:
        result = await check_price(body.query, body.context, generator)
    except GenerationExhaustedError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return PriceCheckResponse(results=result.results)


@router.post("/costs/calculate", response_model=list[MedicalScenarioResult])
async def costs(
    body: CostsRequest,
    generator: StructuredGenerator = Depends(get_generator),
):
    """Estimate annual costs for generated scenarios.

    Scenario failures are folded into placeholder results, so this only
    errors on invalid input (422).
    """
    return await calculate_costs(body.medical_data, body.policy, generator)
