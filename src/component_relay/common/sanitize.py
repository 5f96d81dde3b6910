"""Cleanup of markdown code fences around generated code."""
from __future__ import annotations
import re

# tsx before ts and jsx before js, otherwise the shorter tag wins and leaves "x"
_LEADING_FENCE = re.compile(r"\A```(?:typescript|tsx|ts|javascript|jsx|js)?\n?")
_TRAILING_FENCE = re.compile(r"\n?```\Z")


def strip_code_fences(text: str) -> str:
    """
    Remove a leading and a trailing markdown code fence, then trim.

    Fences are stripped until none remain at either end, so applying this
    twice gives the same result as applying it once. Text without
    triple backticks is only trimmed.
    """
    cleaned = text.strip()
    while True:
        stripped = _LEADING_FENCE.sub("", cleaned, count=1)
        stripped = _TRAILING_FENCE.sub("", stripped, count=1).strip()
        if stripped == cleaned:
            return cleaned
        cleaned = stripped
