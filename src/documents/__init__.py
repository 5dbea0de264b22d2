"""SBC document handling: PDF partitioning and section lookup."""

from src.documents.pages import excluded_and_other_pages, pages_with_services
from src.documents.unstructured import (
    DocumentExtractionError,
    organize_text_by_page,
    partition_pdf,
)

__all__ = [
    "DocumentExtractionError",
    "excluded_and_other_pages",
    "organize_text_by_page",
    "pages_with_services",
    "partition_pdf",
]
