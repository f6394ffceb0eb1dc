"""Utility to extract JSON from LLM responses."""

from __future__ import annotations

import json
import re

_JSON_FENCE = re.compile(r"```json\n?([\s\S]*?)\n?```")
_ANY_FENCE = re.compile(r"```\n?([\s\S]*?)\n?```")


def extract_json(text: str) -> dict | list:
    """Extract JSON from LLM response, handling ```json blocks.

    Tries in order:
    1. Interior of the first ```json fenced block
    2. Interior of the first generic ``` fenced block
    3. The raw text as-is

    Fences are stripped once; a fenced block inside the interior is not
    unwrapped again.

    Raises:
        ValueError: if the selected candidate is not valid JSON.
    """
    candidate = _fenced_interior(text)
    if candidate is None:
        candidate = text
    try:
        return json.loads(candidate)
    except (json.JSONDecodeError, TypeError) as e:
        raise ValueError(f"Could not extract JSON from text: {text[:200]}...") from e


def _fenced_interior(text: str) -> str | None:
    """Return the interior of the first json-tagged fence, else any fence."""
    for pattern in (_JSON_FENCE, _ANY_FENCE):
        match = pattern.search(text)
        if match and match.group(1):
            return match.group(1)
    return None
