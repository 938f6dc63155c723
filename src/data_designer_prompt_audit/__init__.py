# SPDX-License-Identifier: Apache-2.0
"""Prompt Audit plugin for NeMo Data Designer.

Scores LLM prompts for clarity with fixed, hand-authored text rules and,
optionally, asks a Gemini model for weaknesses and three rewrites. The score
never depends on the model.

Usage::

    from data_designer_prompt_audit import analyze

    result = analyze("Summarize this report as a bullet list for executives.")
    result.clarity_score, result.subscores

    from data_designer_prompt_audit import PromptAuditColumnConfig

    builder.add_column(PromptAuditColumnConfig(
        name="prompt_audit",
        target_columns=["prompt"],
        min_score=60,
    ))
"""

from data_designer_prompt_audit.assembler import ResultAssembler, analyze
from data_designer_prompt_audit.config import PromptAuditColumnConfig
from data_designer_prompt_audit.core import ScoringWeights, score_prompt
from data_designer_prompt_audit.errors import ExternalCallError, InvalidInputError
from data_designer_prompt_audit.models import AnalysisResult

__all__ = [
    "PromptAuditColumnConfig",
    "analyze",
    "score_prompt",
    "ScoringWeights",
    "ResultAssembler",
    "AnalysisResult",
    "InvalidInputError",
    "ExternalCallError",
]
