"""Locate SBC sections by the fixed headings every SBC carries."""

SERVICES_MARKER = "what you will pay"
EXCLUDED_MARKER = "services your plan generally does not cover"
OTHER_COVERED_MARKER = "other covered services (limitations may apply to these services"


def pages_with_services(pages: list[str]) -> list[int]:
    """Indexes of the "Common Medical Event" pages."""
    return [i for i, text in enumerate(pages) if SERVICES_MARKER in text.lower()]


def _first_index(pages: list[str], marker: str) -> int:
    for i, text in enumerate(pages):
        if marker in text.lower():
            return i
    return -1


def excluded_and_other_pages(pages: list[str]) -> list[str]:
    """Texts of the excluded-services and other-covered-services pages.

    Usually both sections share one page, in which case it is returned once.
    """
    selected: list[str] = []
    for marker in (EXCLUDED_MARKER, OTHER_COVERED_MARKER):
        idx = _first_index(pages, marker)
        if idx == -1:
            continue
        text = pages[idx]
        if text and text not in selected:
            selected.append(text)
    return selected
