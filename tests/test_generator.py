import pandas as pd

from data_designer_prompt_audit.adapter import GeminiAnalysisAdapter
from data_designer_prompt_audit.assembler import ResultAssembler
from data_designer_prompt_audit.config import PromptAuditColumnConfig
from data_designer_prompt_audit.errors import ExternalCallError
from data_designer_prompt_audit.generator import audit_rows, build_adapter, score_row


# Scores 15: a task verb and nothing else.
MINIMAL_PROMPT = "write a poem"

VERDICT = {
    "weaknesses": [{"type": "Missing Context", "explanation": "No audience is named."}],
    "improvedPrompts": {"structured": "S", "concise": "C", "detailed": "D"},
    "highlights": {"vagueWords": [], "missingOutputSpec": True, "conflictingInstructions": False},
}


class StubAdapter:
    def __init__(self, verdict):
        self.verdict = verdict
        self.calls = []

    def request_analysis(self, prompt):
        self.calls.append(prompt)
        return self.verdict


class FailingAdapter:
    def request_analysis(self, prompt):
        raise ExternalCallError("Gemini error", status=500, body="boom")


def _config(**kwargs) -> PromptAuditColumnConfig:
    kwargs.setdefault("target_columns", ["prompt"])
    return PromptAuditColumnConfig(name="audit", **kwargs)


class TestAuditRows:
    def test_one_result_per_row(self):
        data = pd.DataFrame({"prompt": [MINIMAL_PROMPT, "maybe write something"]})
        results = audit_rows(data, _config())
        assert len(results) == 2
        assert results[0]["clarity_score"] == 15
        assert results[1]["vague_words"] == ["maybe", "some"]

    def test_blank_row_is_invalid(self):
        data = pd.DataFrame({"prompt": ["   "]})
        result = audit_rows(data, _config(min_score=0))[0]
        assert result == {"is_valid": False, "clarity_score": 0, "subscores": {}, "vague_words": []}

    def test_target_columns_are_joined(self):
        data = pd.DataFrame({"task": ["write"], "topic": ["a poem"], "notes": ["ignored entirely"]})
        stub = StubAdapter(VERDICT)
        result = audit_rows(data, _config(target_columns=["task", "topic"]), stub)[0]
        assert stub.calls == [MINIMAL_PROMPT]
        assert result["clarity_score"] == 15

    def test_missing_values_are_skipped(self):
        data = pd.DataFrame({"task": ["write", "write"], "topic": [None, "a poem"]})
        stub = StubAdapter(VERDICT)
        audit_rows(data, _config(target_columns=["task", "topic"]), stub)
        assert stub.calls == ["write", MINIMAL_PROMPT]

    def test_failed_model_call_keeps_row(self):
        data = pd.DataFrame({"prompt": [MINIMAL_PROMPT]})
        result = audit_rows(data, _config(include_rewrites=True), FailingAdapter())[0]
        assert result["clarity_score"] == 15
        assert result["weaknesses"] == []
        assert result["improved_prompts"] == {
            "structured": MINIMAL_PROMPT,
            "concise": MINIMAL_PROMPT,
            "detailed": MINIMAL_PROMPT,
        }


class TestScoreRow:
    def test_min_score_threshold(self):
        assembler = ResultAssembler()
        assert score_row(MINIMAL_PROMPT, _config(min_score=15), assembler)["is_valid"] is True
        assert score_row(MINIMAL_PROMPT, _config(min_score=16), assembler)["is_valid"] is False
        assert score_row(MINIMAL_PROMPT, _config(), assembler)["is_valid"] is False

    def test_subscores_present(self):
        result = score_row(MINIMAL_PROMPT, _config(), ResultAssembler())
        assert set(result["subscores"]) == {"clarity", "structure", "specificity", "context", "constraints"}

    def test_explanation_toggle(self):
        assembler = ResultAssembler()
        with_explanation = score_row(MINIMAL_PROMPT, _config(), assembler)
        assert with_explanation["score_explanation"]
        assert all(isinstance(s, str) for s in with_explanation["score_explanation"])

        without = score_row(MINIMAL_PROMPT, _config(include_explanation=False), assembler)
        assert "score_explanation" not in without

    def test_rewrites_toggle(self):
        assembler = ResultAssembler(adapter=StubAdapter(VERDICT))
        without = score_row(MINIMAL_PROMPT, _config(), assembler)
        assert "weaknesses" not in without
        assert "improved_prompts" not in without

        result = score_row(MINIMAL_PROMPT, _config(include_rewrites=True), assembler)
        assert result["weaknesses"] == [{"type": "Missing Context", "explanation": "No audience is named."}]
        assert result["improved_prompts"] == {"structured": "S", "concise": "C", "detailed": "D"}


class TestBuildAdapter:
    def test_no_adapter_without_model(self):
        assert build_adapter(_config()) is None

    def test_adapter_from_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
        with build_adapter(_config(use_model=True)) as adapter:
            assert isinstance(adapter, GeminiAnalysisAdapter)
            assert adapter.api_key == "env-key"
            assert adapter.url.endswith("/models/gemini-test:generateContent")
        assert adapter._client.is_closed
