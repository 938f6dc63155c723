import json

from data_designer_prompt_audit.extraction import (
    extract_json,
    parse_brace_block,
    parse_repaired_block,
    parse_whole,
    repair_trailing_commas,
)


VERDICT = {
    "weaknesses": [{"type": "Ambiguity", "explanation": "\"something\" names no subject."}],
    "improvedPrompts": {"structured": "a", "concise": "b", "detailed": "c"},
    "highlights": {"vagueWords": ["some"], "missingOutputSpec": True, "conflictingInstructions": False},
}


class TestExtractJson:
    def test_serialized_object_is_recovered(self):
        assert extract_json(json.dumps(VERDICT)) == VERDICT
        assert extract_json(json.dumps(VERDICT, indent=2)) == VERDICT

    def test_object_wrapped_in_prose(self):
        text = "Sure! Here is the analysis:\n" + json.dumps(VERDICT) + "\nLet me know if you need more."
        assert extract_json(text) == VERDICT

    def test_code_fenced_object(self):
        text = "```json\n" + json.dumps(VERDICT) + "\n```"
        assert extract_json(text) == VERDICT

    def test_trailing_commas_are_repaired(self):
        text = 'Result: {"weaknesses": ["vague",], "highlights": {"missingOutputSpec": true,},}'
        assert extract_json(text) == {"weaknesses": ["vague"], "highlights": {"missingOutputSpec": True}}

    def test_no_braces_returns_none(self):
        assert extract_json("The prompt looks fine to me.") is None

    def test_reversed_braces_return_none(self):
        assert extract_json("} nothing here {") is None

    def test_structural_damage_is_not_guessed(self):
        assert extract_json('{"weaknesses": [}') is None
        assert extract_json('{"weaknesses": ') is None

    def test_non_object_json_is_rejected(self):
        assert extract_json("[1, 2, 3]") is None
        assert extract_json('"just a string"') is None

    def test_non_string_input(self):
        assert extract_json(None) is None
        assert extract_json(42) is None
        assert extract_json("") is None

    def test_custom_strategy_chain(self):
        assert extract_json('{"a": 1,}', strategies=[parse_whole, parse_brace_block]) is None
        assert extract_json('{"a": 1,}') == {"a": 1}


class TestStrategies:
    def test_parse_whole_needs_clean_text(self):
        assert parse_whole('{"a": 1}') == {"a": 1}
        assert parse_whole('note: {"a": 1}') is None

    def test_parse_brace_block_slices_first_to_last_brace(self):
        assert parse_brace_block('note: {"a": {"b": 2}} done') == {"a": {"b": 2}}
        assert parse_brace_block('{"a": 1,}') is None

    def test_parse_repaired_block(self):
        assert parse_repaired_block('x {"a": [1, 2 ,], "b": 1 ,} y') == {"a": [1, 2], "b": 1}
        assert parse_repaired_block("no braces") is None

    def test_repair_trailing_commas(self):
        assert repair_trailing_commas('{"a": [1,\n ],\n}') == '{"a": [1]}'
