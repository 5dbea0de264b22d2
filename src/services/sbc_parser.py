"""SBC upload → ParsedPolicy.

Pipeline:
  1. Partition the PDF into per-page text
  2. Structure page 1 (plan summary + Important Questions)
  3. Structure every "what you will pay" page concurrently, then combine
     the service rows in page order
  4. Structure the excluded / other covered services section

Every structuring call goes through the invoker with the extraction model
and the configured fallback model. Unlike the explorer features there is
no sensible default policy, so exhaustion propagates to the caller.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from src import config
from src.documents import excluded_and_other_pages, pages_with_services, partition_pdf
from src.llm import StructuredGenerator, invoke_structured
from src.prompts.insurance import (
    EXCLUDED_AND_OTHER_USER,
    EXTRACTION_SYSTEM,
    FIRST_PAGE_USER,
    SERVICES_PAGE_USER,
)
from src.schemas.policy import (
    ExcludedAndOtherCoveredServices,
    FirstPage,
    ParsedPolicy,
    SERVICE_TYPES,
    ServicesPage,
)
from src.utils.logging import log, get_logger

MODULE = "sbc"
logger = get_logger()

Partitioner = Callable[[bytes, str], Awaitable[list[str]]]


class SBCParseError(Exception):
    """Raised when an upload does not look like a readable SBC."""


async def structure_first_page(
    page_text: str,
    generator: Optional[StructuredGenerator] = None,
) -> FirstPage:
    return await invoke_structured(
        FirstPage,
        model=config.EXTRACTION_MODEL,
        fallback_model=config.FALLBACK_MODEL,
        system=EXTRACTION_SYSTEM,
        prompt=FIRST_PAGE_USER.format(page_text=page_text),
        context="SBC first page extraction",
        generator=generator,
    )


async def structure_services_page(
    page_text: str,
    generator: Optional[StructuredGenerator] = None,
) -> ServicesPage:
    return await invoke_structured(
        ServicesPage,
        model=config.EXTRACTION_MODEL,
        fallback_model=config.FALLBACK_MODEL,
        system=EXTRACTION_SYSTEM,
        prompt=SERVICES_PAGE_USER.format(
            page_text=page_text,
            service_types=", ".join(SERVICE_TYPES),
        ),
        context="SBC services extraction",
        generator=generator,
    )


async def structure_excluded_and_other_services(
    pages_text: list[str],
    generator: Optional[StructuredGenerator] = None,
) -> ExcludedAndOtherCoveredServices:
    """Structure the closing section. No pages → empty lists, no model call."""
    if not pages_text:
        return ExcludedAndOtherCoveredServices()
    return await invoke_structured(
        ExcludedAndOtherCoveredServices,
        model=config.EXTRACTION_MODEL,
        fallback_model=config.FALLBACK_MODEL,
        system=EXTRACTION_SYSTEM,
        prompt=EXCLUDED_AND_OTHER_USER.format(pages_text="\n".join(pages_text)),
        context="SBC excluded services extraction",
        generator=generator,
    )


async def parse_sbc(
    content: bytes,
    filename: str,
    *,
    generator: Optional[StructuredGenerator] = None,
    partitioner: Partitioner = partition_pdf,
) -> ParsedPolicy:
    """Parse an SBC PDF into a ParsedPolicy.

    Raises:
        SBCParseError: No text could be extracted
        DocumentExtractionError: The partition API failed
        GenerationExhaustedError: A structuring call failed on every model
    """
    log.info(logger, MODULE, "parse_start", "Parsing SBC upload",
             filename=filename, size_bytes=len(content))

    pages = await partitioner(content, filename)
    if not pages or not pages[0].strip():
        log.warning(logger, MODULE, "parse_failed", "No text extracted from PDF",
                    filename=filename, pages=len(pages))
        raise SBCParseError("Could not extract text from PDF")

    service_indexes = pages_with_services(pages)
    closing_pages = excluded_and_other_pages(pages)
    log.debug(logger, MODULE, "pages_selected", "Located SBC sections",
              filename=filename, pages=len(pages),
              service_pages=service_indexes, closing_pages=len(closing_pages))

    first_page = await structure_first_page(pages[0], generator)

    # gather preserves argument order, so rows stay in page order
    tasks = [
        asyncio.ensure_future(structure_services_page(pages[i], generator))
        for i in service_indexes
    ]
    try:
        service_pages = await asyncio.gather(*tasks)
    except BaseException:
        # One page failed (or we were cancelled): stop the sibling pages
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        log.warning(logger, MODULE, "services_failed",
                    "Services page extraction failed, cancelled remaining pages",
                    filename=filename, service_pages=len(tasks))
        raise
    services = [row for page in service_pages for row in page.services_you_may_need]

    excluded = await structure_excluded_and_other_services(closing_pages, generator)

    policy = ParsedPolicy(
        filename=filename,
        page_count=len(pages),
        plan_summary=first_page.plan_summary,
        important_questions=first_page.important_questions,
        services_you_may_need=services,
        excluded_and_other_covered_services=excluded,
    )
    log.info(logger, MODULE, "parse_done", "SBC parsed",
             filename=filename, plan_name=policy.plan_summary.plan_name,
             services=len(services),
             excluded=len(excluded.excluded_services))
    return policy
