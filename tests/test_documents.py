"""Tests for PDF partitioning and SBC section lookup."""

import httpx
import pytest

from src.documents import (
    DocumentExtractionError,
    excluded_and_other_pages,
    organize_text_by_page,
    pages_with_services,
    partition_pdf,
)


def element(text, page):
    return {"type": "NarrativeText", "element_id": f"e-{page}-{text[:4]}",
            "text": text, "metadata": {"page_number": page, "filetype": "application/pdf"}}


def test_organize_text_by_page_joins_and_fills_gaps():
    elements = [
        element("Summary of Benefits", 1),
        element("and Coverage", 1),
        element("What you will pay", 3),
        {"type": "Header", "text": "no page", "metadata": {}},
    ]

    assert organize_text_by_page(elements) == [
        "Summary of Benefits and Coverage",
        "",
        "What you will pay",
    ]


def test_organize_text_by_page_empty():
    assert organize_text_by_page([]) == []


def test_pages_with_services_is_case_insensitive():
    pages = ["Important Questions", "Common Medical Event ... WHAT YOU WILL PAY", "x", "What You Will Pay"]
    assert pages_with_services(pages) == [1, 3]


def test_excluded_and_other_pages_deduplicates_shared_page():
    closing = ("Services Your Plan Generally Does NOT Cover ... Other Covered Services "
               "(Limitations may apply to these services. ...)")
    pages = ["page one", closing, "appendix"]

    assert excluded_and_other_pages(pages) == [closing]


def test_excluded_and_other_pages_separate_pages():
    pages = [
        "Services your plan generally does not cover: cosmetic surgery",
        "Other covered services (limitations may apply to these services): acupuncture",
    ]
    assert excluded_and_other_pages(pages) == pages


def test_excluded_and_other_pages_missing():
    assert excluded_and_other_pages(["nothing here"]) == []


async def test_partition_pdf_posts_file_and_returns_pages():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = request.read()
        seen["headers"] = request.headers
        return httpx.Response(200, json=[element("Plan A", 1), element("What you will pay", 2)])

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        pages = await partition_pdf(b"%PDF-1.7 test", "plan.pdf", client=client)

    assert pages == ["Plan A", "What you will pay"]
    assert b"plan.pdf" in seen["body"]
    assert b"by_page" in seen["body"]
    assert "unstructured-api-key" in seen["headers"]


async def test_partition_pdf_http_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="internal error")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(DocumentExtractionError) as exc_info:
            await partition_pdf(b"%PDF", "plan.pdf", client=client)

    assert exc_info.value.status_code == 500
    assert exc_info.value.body == "internal error"


async def test_partition_pdf_rejects_non_list_response():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"detail": "odd"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(DocumentExtractionError):
            await partition_pdf(b"%PDF", "plan.pdf", client=client)
