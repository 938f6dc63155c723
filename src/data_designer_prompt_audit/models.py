"""Result types returned by :func:`data_designer_prompt_audit.assembler.analyze`.

Field names are snake_case in Python and camelCase on the wire::

    result.model_dump(by_alias=True)
    # {"weaknesses": [...], "improvedPrompts": {...}, "highlights": {...},
    #  "subscores": {...}, "clarityScore": 42, "scoreExplanation": [...]}
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Weakness(_WireModel):
    type: str = Field(description="One of the weakness kinds requested from the model")
    explanation: str = Field(min_length=1)


class ImprovedPrompts(_WireModel):
    structured: str
    concise: str
    detailed: str


class Highlights(_WireModel):
    vague_words: list[str] = Field(default_factory=list)
    missing_output_spec: bool
    conflicting_instructions: bool


class AnalysisResult(_WireModel):
    """Full quality report for one prompt. Built once, never mutated."""

    weaknesses: list[Weakness] = Field(default_factory=list)
    improved_prompts: ImprovedPrompts
    highlights: Highlights
    subscores: dict[str, int]
    clarity_score: int = Field(ge=0, le=100)
    score_explanation: list[str] = Field(default_factory=list)

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)
