from __future__ import annotations

from typing import Literal

from pydantic import Field

from data_designer.config.column_configs import SingleColumnConfig


class PromptAuditColumnConfig(SingleColumnConfig):
    """Score prompt columns for clarity using deterministic text signals.

    Each row's prompt gets a clarity score (0-100), five sub-scores and the vague
    words found in it. With ``use_model`` enabled, a Gemini model also supplies
    weaknesses and three rewrites; rows fall back to the local result when that
    call fails.

    Attributes:
        target_columns: Columns whose text content will be concatenated and scored.
        min_score: Minimum clarity score (0-100) for ``is_valid=True``.
        include_explanation: Include the score explanation sentences in output.
        include_rewrites: Include weaknesses and improved prompts in output.
        use_model: Call the Gemini model configured through ``GEMINI_*`` settings.
    """

    target_columns: list[str]
    min_score: int = Field(default=60, ge=0, le=100, description="Minimum clarity score for is_valid=True")
    include_explanation: bool = Field(default=True, description="Include score explanation sentences in output")
    include_rewrites: bool = Field(default=False, description="Include weaknesses and improved prompts in output")
    use_model: bool = Field(default=False, description="Ask the Gemini model for weaknesses and rewrites")
    column_type: Literal["prompt-audit"] = "prompt-audit"

    @staticmethod
    def get_column_emoji() -> str:
        return "\U0001f50e"

    @property
    def required_columns(self) -> list[str]:
        return self.target_columns

    @property
    def side_effect_columns(self) -> list[str]:
        return []
