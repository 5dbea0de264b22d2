"""Coverage explorer endpoints. These never fail on model errors; the
services return defaults instead."""

from fastapi import APIRouter, Depends

from src.api.deps import get_generator
from src.llm import StructuredGenerator
from src.schemas.api import (
    AnalyzeRequest,
    CategoriesRequest,
    CategoriesResponse,
    SituationsRequest,
    SituationsResponse,
)
from src.schemas.llm_outputs import SituationAnalysis
from src.services.explorer import analyze_situation, generate_categories, generate_situations

router = APIRouter()


@router.post("/categories", response_model=CategoriesResponse)
async def categories(
    body: CategoriesRequest,
    generator: StructuredGenerator = Depends(get_generator),
):
    result = await generate_categories(body.query, body.context, body.policy, generator)
    return CategoriesResponse(categories=result)


@router.post("/situations", response_model=SituationsResponse)
async def situations(
    body: SituationsRequest,
    generator: StructuredGenerator = Depends(get_generator),
):
    result = await generate_situations(
        body.query, body.context, body.policy,
        current_category=body.current_category,
        generator=generator,
    )
    return SituationsResponse(situations=result)


@router.post("/analyze", response_model=SituationAnalysis)
async def analyze(
    body: AnalyzeRequest,
    generator: StructuredGenerator = Depends(get_generator),
):
    return await analyze_situation(body.situation, body.context, generator)
