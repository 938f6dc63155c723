from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Protocol

from data_designer_prompt_audit.core import ScoringWeights, score_prompt
from data_designer_prompt_audit.errors import ExternalCallError, InvalidInputError
from data_designer_prompt_audit.models import AnalysisResult, Highlights, ImprovedPrompts, Weakness

logger = logging.getLogger(__name__)

DEFAULT_WEAKNESS_TYPE = "Vague Language"
UNEXPECTED_WEAKNESS_EXPLANATION = "Undetected issue (model returned unexpected format)."
EXPLANATION_MAX_CHARS = 200

# Kept apart from the scorer's patterns and from the instruction template.
# The alternation below also fires on a lone "short", "brief" or "concise".
_OUTPUT_SPEC_RE = re.compile(r"(format|output|json|table|list|markdown|bullet)", re.IGNORECASE)
_CONFLICT_RE = re.compile(r"(in detail).*(short|brief|concise)|short|brief|concise.*(in detail)", re.IGNORECASE)

_IMPROVED_PROMPT_SLOTS = ("structured", "concise", "detailed")


class AnalysisAdapter(Protocol):
    def request_analysis(self, prompt: str) -> dict[str, Any]: ...


# ---------------------------------------------------------------------------
# Fallbacks
# ---------------------------------------------------------------------------


def local_highlights(prompt: str, vague_words: list[str]) -> dict[str, Any]:
    return {
        "vagueWords": list(vague_words),
        "missingOutputSpec": not _OUTPUT_SPEC_RE.search(prompt),
        "conflictingInstructions": bool(_CONFLICT_RE.search(prompt.lower())),
    }


def identity_fallback(prompt: str, vague_words: list[str]) -> dict[str, Any]:
    """Model-shaped verdict used whenever the model gives nothing usable.

    Rewrites are the prompt itself: nothing is invented without the model.
    """
    return {
        "weaknesses": [],
        "improvedPrompts": {slot: prompt for slot in _IMPROVED_PROMPT_SLOTS},
        "highlights": local_highlights(prompt, vague_words),
    }


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)[:EXPLANATION_MAX_CHARS]


def normalize_weakness(entry: Any) -> Weakness:
    """Coerce one model-supplied weakness entry into ``{type, explanation}``."""
    if isinstance(entry, str):
        return Weakness(type=DEFAULT_WEAKNESS_TYPE, explanation=entry or UNEXPECTED_WEAKNESS_EXPLANATION)
    if isinstance(entry, Mapping):
        kind = entry.get("type")
        explanation = entry.get("explanation")
        return Weakness(
            type=kind if isinstance(kind, str) else DEFAULT_WEAKNESS_TYPE,
            explanation=explanation if isinstance(explanation, str) and explanation else _compact_json(entry),
        )
    if isinstance(entry, list):
        return Weakness(type=DEFAULT_WEAKNESS_TYPE, explanation=_compact_json(entry))
    return Weakness(type=DEFAULT_WEAKNESS_TYPE, explanation=UNEXPECTED_WEAKNESS_EXPLANATION)


def _improved_prompts(value: Any, fallback: dict[str, str]) -> ImprovedPrompts:
    if not value or not isinstance(value, Mapping):
        return ImprovedPrompts(**fallback)
    slots = {}
    for slot in _IMPROVED_PROMPT_SLOTS:
        rewrite = value.get(slot)
        slots[slot] = rewrite if isinstance(rewrite, str) and rewrite else fallback[slot]
    return ImprovedPrompts(**slots)


def _highlights(value: Any, fallback: dict[str, Any]) -> Highlights:
    source = value if value and isinstance(value, Mapping) else fallback

    def flag(key: str) -> bool:
        return source[key] if isinstance(source.get(key), bool) else fallback[key]

    # Vague words always come from the local vocabulary, never from the model.
    return Highlights(
        vague_words=fallback["vagueWords"],
        missing_output_spec=flag("missingOutputSpec"),
        conflicting_instructions=flag("conflictingInstructions"),
    )


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


class ResultAssembler:
    """Combine the local score with the model's verdict into one AnalysisResult.

    Args:
        adapter: Object with ``request_analysis(prompt) -> dict``. When ``None``
            the model step is skipped and the deterministic fallback is used.
        weights: Optional scorer weights.
    """

    def __init__(self, adapter: AnalysisAdapter | None = None, weights: ScoringWeights | None = None) -> None:
        self.adapter = adapter
        self.weights = weights

    def _model_verdict(self, prompt: str, vague_words: list[str]) -> dict[str, Any]:
        if self.adapter is None:
            logger.debug("No analysis adapter configured, using fallback verdict")
            return identity_fallback(prompt, vague_words)
        try:
            return self.adapter.request_analysis(prompt)
        except ExternalCallError as e:
            logger.warning(f"Model call failed: {e}")
            return identity_fallback(prompt, vague_words)

    def assemble(self, prompt: str) -> AnalysisResult:
        report = score_prompt(prompt, self.weights)
        vague_words = report.vague_words
        fallback = identity_fallback(prompt, vague_words)

        verdict = self._model_verdict(prompt, vague_words)
        if not isinstance(verdict, Mapping):
            verdict = fallback

        raw_weaknesses = verdict.get("weaknesses")
        weaknesses = raw_weaknesses if isinstance(raw_weaknesses, list) else []

        return AnalysisResult(
            weaknesses=[normalize_weakness(w) for w in weaknesses],
            improved_prompts=_improved_prompts(verdict.get("improvedPrompts"), fallback["improvedPrompts"]),
            highlights=_highlights(verdict.get("highlights"), fallback["highlights"]),
            subscores=report.subscores.to_payload(),
            clarity_score=report.clarity_score,
            score_explanation=list(report.score_explanation),
        )


def analyze(prompt: Any, assembler: ResultAssembler | None = None) -> AnalysisResult:
    """Validate ``prompt`` and return its full quality report.

    Raises:
        InvalidInputError: ``prompt`` is not a string or is blank after trimming.
    """
    if not isinstance(prompt, str):
        raise InvalidInputError("Missing prompt in request body. Send JSON: { \"prompt\": \"...\" }")
    text = prompt.strip()
    if not text:
        raise InvalidInputError("Prompt must not be empty.")
    return (assembler or ResultAssembler()).assemble(text)
