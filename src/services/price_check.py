"""Out-of-pocket price estimates for a condition, treatment or medication."""

from typing import Optional

from src import config
from src.llm import StructuredGenerator, invoke_structured
from src.prompts.insurance import PRICE_CHECK_SYSTEM, PRICE_CHECK_USER
from src.schemas.api import CoverageContext
from src.schemas.llm_outputs import PriceCheckOutput
from src.utils.logging import log, get_logger

MODULE = "price_check"
logger = get_logger()


async def check_price(
    query: str,
    context: CoverageContext,
    generator: Optional[StructuredGenerator] = None,
) -> PriceCheckOutput:
    """Estimate costs for a query.

    There is no meaningful default price, so GenerationExhaustedError
    propagates to the route.
    """
    result = await invoke_structured(
        PriceCheckOutput,
        model=config.CHAT_MODEL,
        fallback_model=config.FALLBACK_MODEL,
        system=PRICE_CHECK_SYSTEM,
        messages=[{
            "role": "user",
            "content": PRICE_CHECK_USER.format(
                query=query,
                is_in_network=context.is_in_network,
                deductible_spent=context.deductible_spent,
                out_of_pocket_spent=context.out_of_pocket_spent,
            ),
        }],
        context="Price check",
        generator=generator,
    )
    log.info(logger, MODULE, "price_check_done", "Price check complete",
             query=query[:80], results=len(result.results))
    return result
