"""PDF text extraction via the Unstructured partition API.

The API splits a document into typed elements (Title, NarrativeText,
Table, ...) each tagged with a 1-based page number. We only need plain
text per page, so elements are folded into a list indexed by page - 1.

Requires UNSTRUCTURED_API_KEY; UNSTRUCTURED_API_URL points at the hosted
API by default.
"""

from typing import Any, Optional

import httpx

from src import config
from src.utils.logging import log, get_logger

MODULE = "documents"
logger = get_logger()


class DocumentExtractionError(Exception):
    """Raised when the partition API fails or returns something unusable."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def organize_text_by_page(elements: list[dict[str, Any]]) -> list[str]:
    """Join element text per page.

    Returns one string per page up to the highest page number seen; pages
    with no elements are empty strings. Elements without a page number are
    ignored.
    """
    numbered = []
    for element in elements:
        page = (element.get("metadata") or {}).get("page_number")
        if isinstance(page, int) and page >= 1:
            numbered.append((page, element.get("text") or ""))

    if not numbered:
        return []

    pages: list[list[str]] = [[] for _ in range(max(p for p, _ in numbered))]
    for page, text in numbered:
        if text:
            pages[page - 1].append(text)
    return [" ".join(chunks).strip() for chunks in pages]


async def partition_pdf(
    content: bytes,
    filename: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> list[str]:
    """Extract per-page text from a PDF.

    Args:
        content: Raw PDF bytes
        filename: Original upload name (the API keys some heuristics off it)
        client: Optional shared AsyncClient (tests pass one with a mock
            transport)

    Raises:
        DocumentExtractionError: On HTTP errors or a malformed response
    """
    log.info(logger, MODULE, "partition_start", "Partitioning PDF",
             filename=filename, size_bytes=len(content))

    files = {"files": (filename, content, "application/pdf")}
    data = {
        "strategy": "fast",
        "chunking_strategy": "by_page",
        "coordinates": "false",
        "languages": "eng",
    }
    headers = {"unstructured-api-key": config.UNSTRUCTURED_API_KEY, "accept": "application/json"}

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=config.UNSTRUCTURED_TIMEOUT_SECONDS)

    try:
        resp = await client.post(
            config.UNSTRUCTURED_API_URL,
            files=files,
            data=data,
            headers=headers,
        )
        resp.raise_for_status()
        elements = resp.json()
    except httpx.HTTPStatusError as e:
        log.error(logger, MODULE, "partition_failed", "Partition API returned an error",
                  error=str(e), error_type=type(e).__name__,
                  status_code=e.response.status_code, filename=filename)
        raise DocumentExtractionError(
            f"Partition API returned HTTP {e.response.status_code}",
            status_code=e.response.status_code,
            body=e.response.text,
        ) from e
    except httpx.HTTPError as e:
        log.error(logger, MODULE, "partition_failed", "Partition API request failed",
                  error=str(e), error_type=type(e).__name__, filename=filename)
        raise DocumentExtractionError(f"Partition API request failed: {e}") from e
    except ValueError as e:
        raise DocumentExtractionError("Partition API response was not valid JSON") from e
    finally:
        if owns_client:
            await client.aclose()

    if not isinstance(elements, list):
        raise DocumentExtractionError("Partition API response was not a list of elements")

    pages = organize_text_by_page(elements)
    log.info(logger, MODULE, "partition_done", "PDF partitioned",
             filename=filename, elements=len(elements), pages=len(pages))
    return pages
