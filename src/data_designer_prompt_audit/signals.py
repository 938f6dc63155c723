"""Text signals detected in a prompt before scoring.

Every detector is a fixed, case-insensitive phrase disjunction. A category is
present when any one of its phrases occurs anywhere in the text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Vocabulary and compiled patterns
# ---------------------------------------------------------------------------

# Order matters: matches are reported in vocabulary order.
VAGUE_WORDS = (
    "maybe", "might", "some", "sort of", "kind of", "like", "generally", "usually", "often",
    "etc", "a bit", "slightly", "pretty", "quite", "basically", "somehow",
    "around", "about", "not too long", "roughly", "approximately", "various", "a couple",
)

_ROLE_OR_AUDIENCE_RE = re.compile(r"(as a |for an? |to someone|audience|role:|you are an?)", re.IGNORECASE)
_FORMAT_RE = re.compile(r"(format|as a list|as json|as a table|markdown|return|bullet points|output)", re.IGNORECASE)
_CONSTRAINTS_RE = re.compile(r"(limit|must|should|within|min|max|required|only|no more than|no less than)", re.IGNORECASE)
_CONTEXT_RE = re.compile(r"(background|context|assume|given that|in this scenario)", re.IGNORECASE)
_TASK_RE = re.compile(
    r"(explain|summarize|analyze|write|generate|compare|refactor|create|design|outline|diagnose|derive|compute)",
    re.IGNORECASE,
)
_EXAMPLE_RE = re.compile(r"(example|e\.g\.|for instance|sample output|like this)", re.IGNORECASE)
_CONTRADICTION_PATTERNS = [
    re.compile(r"(in detail).*(short|brief|concise)|(short|brief|concise).*(in detail)", re.IGNORECASE),
    re.compile(r"(be creative).*(objective)|(objective).*(creative)", re.IGNORECASE),
    re.compile(r"(strictly formal).*(casual)|(casual).*(strict)", re.IGNORECASE),
]
_STRUCTURAL_CUE_RE = re.compile(
    r"(step-by-step|first|next|finally|bullet points|table|json|numbered list|sections|outline)",
    re.IGNORECASE,
)
_WHITESPACE_RUN_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class SignalSet:
    """Facts about one prompt. Built fresh for every analysis."""

    has_role_or_audience: bool
    has_format: bool
    has_constraints: bool
    has_context: bool
    has_task: bool
    has_example: bool
    is_contradictory: bool
    has_structural_cues: bool
    vague_matches: tuple[str, ...]
    word_count: int


def find_vague_words(text: str) -> list[str]:
    """Return the vocabulary entries contained in ``text``, in vocabulary order."""
    lower = text.lower()
    return [word for word in VAGUE_WORDS if word in lower]


def count_words(text: str) -> int:
    # "".split on a whitespace regex still yields one (empty) piece.
    return len(_WHITESPACE_RUN_RE.split(text.strip()))


def is_contradictory(text: str) -> bool:
    return any(pat.search(text) for pat in _CONTRADICTION_PATTERNS)


def detect_signals(prompt: str) -> SignalSet:
    """Inspect ``prompt`` and return every signal the scorer consumes."""
    text = prompt.strip()
    return SignalSet(
        has_role_or_audience=bool(_ROLE_OR_AUDIENCE_RE.search(text)),
        has_format=bool(_FORMAT_RE.search(text)),
        has_constraints=bool(_CONSTRAINTS_RE.search(text)),
        has_context=bool(_CONTEXT_RE.search(text)),
        has_task=bool(_TASK_RE.search(text)),
        has_example=bool(_EXAMPLE_RE.search(text)),
        is_contradictory=is_contradictory(text),
        has_structural_cues=bool(_STRUCTURAL_CUE_RE.search(text)),
        vague_matches=tuple(find_vague_words(text)),
        word_count=count_words(text),
    )
