"""Recover a JSON object from free-form model output.

Models asked for "only JSON" still wrap it in prose, append commentary or
leave a trailing comma. Each recovery step is a separate strategy; the chain
stops at the first one that yields a JSON object and gives up on anything
more damaged than that.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable

_TRAILING_COMMA_BRACE_RE = re.compile(r",\s*}")
_TRAILING_COMMA_BRACKET_RE = re.compile(r",\s*]")

ExtractionStrategy = Callable[[str], dict[str, Any] | None]


def _loads_object(text: str) -> dict[str, Any] | None:
    try:
        value = json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return None
    return value if isinstance(value, dict) else None


def _brace_block(text: str) -> str | None:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return None
    return text[start : end + 1]


def repair_trailing_commas(block: str) -> str:
    """Drop commas that sit directly before a closing brace or bracket."""
    block = _TRAILING_COMMA_BRACE_RE.sub("}", block)
    return _TRAILING_COMMA_BRACKET_RE.sub("]", block)


def parse_whole(text: str) -> dict[str, Any] | None:
    return _loads_object(text)


def parse_brace_block(text: str) -> dict[str, Any] | None:
    block = _brace_block(text)
    return _loads_object(block) if block is not None else None


def parse_repaired_block(text: str) -> dict[str, Any] | None:
    block = _brace_block(text)
    return _loads_object(repair_trailing_commas(block)) if block is not None else None


EXTRACTION_STRATEGIES: list[ExtractionStrategy] = [
    parse_whole,
    parse_brace_block,
    parse_repaired_block,
]


def extract_json(text: Any, strategies: list[ExtractionStrategy] | None = None) -> dict[str, Any] | None:
    """Return the first JSON object recoverable from ``text``, or ``None``.

    Never raises. Non-string or empty input yields ``None``.
    """
    if not text or not isinstance(text, str):
        return None
    for strategy in strategies or EXTRACTION_STRATEGIES:
        result = strategy(text)
        if result is not None:
            return result
    return None
