"""JSON extraction from raw model output.

Hosted models asked for "JSON ONLY" still wrap it in markdown fences,
prepend a sentence, or trail off with commentary. This module pulls the
first complete JSON object (or array) out of such text.
"""

import json
import re
from typing import Any, Optional

_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


class JSONExtractionError(Exception):
    """Raised when no JSON value can be recovered from model output."""

    def __init__(self, message: str, raw_output: str):
        super().__init__(message)
        self.raw_output = raw_output


def extract_json(raw: str) -> Any:
    """Return the JSON value contained in raw model output.

    Tried in order: the whole string, the first fenced code block, then the
    first balanced {...} or [...] span.

    Raises:
        JSONExtractionError: If nothing parses
    """
    text = raw.strip()
    if not text:
        raise JSONExtractionError("Model output was empty", raw_output=raw)

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    fence = _FENCE.search(text)
    if fence:
        try:
            return json.loads(fence.group(1).strip())
        except json.JSONDecodeError:
            pass

    # Whichever bracket opens first wins
    starts = [i for i in (text.find("{"), text.find("[")) if i != -1]
    for start in sorted(starts):
        candidate = _balanced_span(text, start)
        if candidate is None:
            continue
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue

    raise JSONExtractionError(
        f"Could not extract valid JSON from model output ({len(text)} chars)",
        raw_output=raw,
    )


def _balanced_span(text: str, start: int) -> Optional[str]:
    """Return text[start:end] where end closes the bracket opened at start."""
    opener = text[start]
    closer = "}" if opener == "{" else "]"
    depth = 0
    in_string = False
    escaped = False

    for i in range(start, len(text)):
        char = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return text[start:i + 1]

    return None
