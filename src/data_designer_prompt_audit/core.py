# Deterministic prompt scorer.
#
# Turns the signals found in a prompt into a clarity score (0-100), five
# sub-scores and a list of plain-language reasons. No model calls: the same
# prompt always yields the same report.

from __future__ import annotations

from dataclasses import dataclass

from data_designer_prompt_audit.signals import SignalSet, detect_signals

# ---------------------------------------------------------------------------
# Weights
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScoringWeights:
    """Penalties, tiers and bonuses used by the scorer."""

    score_base: int = 100
    score_min: int = 0
    score_max: int = 100

    # (minimum distinct matches, penalty), highest applicable tier wins
    vague_tiers: tuple[tuple[int, int], ...] = ((5, 30), (3, 20), (1, 10))

    missing_task_penalty: int = 15
    missing_format_penalty: int = 15
    missing_constraints_penalty: int = 15
    missing_role_penalty: int = 10
    missing_context_penalty: int = 10
    missing_example_penalty: int = 5

    contradiction_penalty: int = 15

    very_short_word_count: int = 5
    very_short_penalty: int = 30
    short_word_count: int = 12
    short_penalty: int = 15
    long_word_count: int = 200
    long_penalty: int = 10

    structure_bonus: int = 10

    specificity_missing_example_penalty: int = 10
    context_missing_context_penalty: int = 20
    context_missing_role_penalty: int = 15
    constraints_missing_penalty: int = 30


DEFAULT_WEIGHTS = ScoringWeights()

# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Subscores:
    clarity: int
    structure: int
    specificity: int
    context: int
    constraints: int

    def to_payload(self) -> dict[str, int]:
        return {
            "clarity": self.clarity,
            "structure": self.structure,
            "specificity": self.specificity,
            "context": self.context,
            "constraints": self.constraints,
        }


@dataclass(frozen=True)
class ScoreReport:
    clarity_score: int
    subscores: Subscores
    score_explanation: tuple[str, ...]
    signals: SignalSet
    vague_penalty: int
    missing_penalty: int
    contradiction_penalty: int
    length_penalty: int
    structure_bonus: int

    @property
    def vague_words(self) -> list[str]:
        return list(self.signals.vague_matches)


# ---------------------------------------------------------------------------
# Penalties
# ---------------------------------------------------------------------------


def _vague_penalty(signals: SignalSet, w: ScoringWeights) -> int:
    matches = len(signals.vague_matches)
    for minimum, penalty in w.vague_tiers:
        if matches >= minimum:
            return penalty
    return 0


def _missing_penalty(signals: SignalSet, w: ScoringWeights) -> int:
    total = 0
    if not signals.has_task:
        total += w.missing_task_penalty
    if not signals.has_format:
        total += w.missing_format_penalty
    if not signals.has_constraints:
        total += w.missing_constraints_penalty
    if not signals.has_role_or_audience:
        total += w.missing_role_penalty
    if not signals.has_context:
        total += w.missing_context_penalty
    if not signals.has_example:
        total += w.missing_example_penalty
    return total


def _length_penalty(word_count: int, w: ScoringWeights) -> int:
    if word_count < w.very_short_word_count:
        return w.very_short_penalty
    if word_count < w.short_word_count:
        return w.short_penalty
    if word_count > w.long_word_count:
        return w.long_penalty
    return 0


def _explain(signals: SignalSet, vague_penalty: int, w: ScoringWeights) -> tuple[str, ...]:
    reasons = [
        (vague_penalty > 0, "The prompt contains vague or subjective wording."),
        (not signals.has_task, "The prompt lacks a clear action or task verb."),
        (not signals.has_format, "The prompt does not specify an output format."),
        (not signals.has_constraints, "The prompt does not specify constraints (length, style, rules)."),
        (not signals.has_role_or_audience, "The prompt does not specify a target role or audience."),
        (not signals.has_context, "The prompt lacks contextual background."),
        (not signals.has_example, "Adding examples would increase clarity."),
        (signals.is_contradictory, "The prompt contains contradictory instructions."),
        (signals.word_count < w.short_word_count, "The prompt is too short to be precise."),
        (signals.word_count > w.long_word_count, "The prompt may be overly long and unfocused."),
    ]
    return tuple(sentence for triggered, sentence in reasons if triggered)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def score_prompt(prompt: str, weights: ScoringWeights | None = None) -> ScoreReport:
    """Score a prompt for clarity.

    Args:
        prompt: The prompt text. Surrounding whitespace is ignored.
        weights: Optional tuning overrides. Uses the stock weights if omitted.

    Returns:
        ScoreReport with the clamped clarity score, sub-scores, explanation
        sentences and the signals they were derived from.
    """
    w = weights or DEFAULT_WEIGHTS
    signals = detect_signals(prompt)

    vague = _vague_penalty(signals, w)
    missing = _missing_penalty(signals, w)
    contradiction = w.contradiction_penalty if signals.is_contradictory else 0
    length = _length_penalty(signals.word_count, w)
    bonus = w.structure_bonus if signals.has_structural_cues else 0

    raw_score = w.score_base - vague - missing - contradiction - length + bonus
    score = max(w.score_min, min(w.score_max, raw_score))

    subscores = Subscores(
        clarity=max(0, w.score_base - vague - contradiction),
        structure=max(0, w.score_base - missing + bonus),
        specificity=max(0, w.score_base - vague - (0 if signals.has_example else w.specificity_missing_example_penalty)),
        context=max(
            0,
            w.score_base
            - (0 if signals.has_context else w.context_missing_context_penalty)
            - (0 if signals.has_role_or_audience else w.context_missing_role_penalty),
        ),
        constraints=max(0, w.score_base - (0 if signals.has_constraints else w.constraints_missing_penalty)),
    )

    return ScoreReport(
        clarity_score=score,
        subscores=subscores,
        score_explanation=_explain(signals, vague, w),
        signals=signals,
        vague_penalty=vague,
        missing_penalty=missing,
        contradiction_penalty=contradiction,
        length_penalty=length,
        structure_bonus=bonus,
    )
