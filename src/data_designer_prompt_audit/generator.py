from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING

from data_designer.engine.column_generators.generators.base import ColumnGeneratorFullColumn

from data_designer_prompt_audit.adapter import GeminiAnalysisAdapter
from data_designer_prompt_audit.assembler import AnalysisAdapter, ResultAssembler, analyze
from data_designer_prompt_audit.config import PromptAuditColumnConfig
from data_designer_prompt_audit.errors import InvalidInputError
from data_designer_prompt_audit.settings import get_settings

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


def build_adapter(config: PromptAuditColumnConfig) -> GeminiAnalysisAdapter | None:
    """Return a Gemini adapter when the column asks for the model, else ``None``."""
    if not config.use_model:
        return None
    return GeminiAnalysisAdapter.from_settings(get_settings())


def score_row(text: str, config: PromptAuditColumnConfig, assembler: ResultAssembler) -> dict:
    try:
        result = analyze(text, assembler)
    except InvalidInputError:
        return {"is_valid": False, "clarity_score": 0, "subscores": {}, "vague_words": []}

    output: dict = {
        "is_valid": result.clarity_score >= config.min_score,
        "clarity_score": result.clarity_score,
        "subscores": dict(result.subscores),
        "vague_words": list(result.highlights.vague_words),
    }
    if config.include_explanation:
        output["score_explanation"] = list(result.score_explanation)
    if config.include_rewrites:
        output["weaknesses"] = [w.model_dump() for w in result.weaknesses]
        output["improved_prompts"] = result.improved_prompts.model_dump()
    return output


def audit_rows(
    data: pd.DataFrame,
    config: PromptAuditColumnConfig,
    adapter: AnalysisAdapter | None = None,
) -> list[dict]:
    """Score every row of ``data``, joining the target columns into one prompt."""
    assembler = ResultAssembler(adapter=adapter)
    results = []
    for _, row in data[config.target_columns].iterrows():
        text = " ".join(str(v) for v in row.values if v is not None)
        results.append(score_row(text, config, assembler))
    return results


class PromptAuditColumnGenerator(ColumnGeneratorFullColumn[PromptAuditColumnConfig]):
    """Column generator that scores prompts for clarity."""

    def generate(self, data: pd.DataFrame) -> pd.DataFrame:
        logger.info(f"\U0001f50e Scoring column {self.config.name!r} for prompt clarity")
        logger.info(f"   target columns: {self.config.target_columns}")
        logger.info(f"   min_score: {self.config.min_score}")
        logger.info(f"   use_model: {self.config.use_model}")

        adapter = build_adapter(self.config)
        with adapter or contextlib.nullcontext():
            results = audit_rows(data, self.config, adapter)

        data = data.copy()
        data[self.config.name] = results
        return data
