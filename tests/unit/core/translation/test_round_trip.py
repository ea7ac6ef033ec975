from typing import Any

import pytest
from dialect_adapter.core.domain.translation_types import TranslationDirection
from dialect_adapter.core.translation.round_trip import (
    RoundTripVerifier,
    format_round_trip_result,
)


@pytest.fixture
def verifier() -> RoundTripVerifier:
    return RoundTripVerifier()


class TestRequestRoundTrips:
    def test_chat_request_round_trip(
        self, verifier: RoundTripVerifier, chat_request: dict[str, Any]
    ) -> None:
        result = verifier.verify(chat_request, TranslationDirection.CHAT_TO_RESPONSE)

        assert result.success, result.differences
        assert result.differences == []
        assert result.semantic_equivalence.as_dict() == {
            "model": True,
            "content": True,
            "parameters": True,
        }
        assert result.back_translated == chat_request

    def test_response_request_round_trip(
        self, verifier: RoundTripVerifier, response_request: dict[str, Any]
    ) -> None:
        result = verifier.verify(
            response_request, TranslationDirection.RESPONSE_TO_CHAT
        )

        assert result.success, result.differences
        assert result.back_translated == response_request

    def test_frequency_penalty_survives_round_trip(
        self, verifier: RoundTripVerifier, chat_request: dict[str, Any]
    ) -> None:
        chat_request["frequency_penalty"] = 0.2

        result = verifier.verify(chat_request, TranslationDirection.CHAT_TO_RESPONSE)

        assert result.success, result.differences
        assert result.translated["frequency_penalty"] == 0.2
        assert result.back_translated["frequency_penalty"] == 0.2

    def test_extension_fields_survive_both_directions(
        self, verifier: RoundTripVerifier, response_request: dict[str, Any]
    ) -> None:
        response_request["reasoning"] = {"effort": "high"}
        response_request["text"] = {"format": {"type": "text"}, "verbosity": "low"}
        response_request["previous_response_id"] = "resp_0"

        result = verifier.verify(
            response_request, TranslationDirection.RESPONSE_TO_CHAT
        )

        assert result.success, result.differences
        assert result.back_translated["reasoning"] == {"effort": "high"}
        assert result.back_translated["text"] == {
            "format": {"type": "text"},
            "verbosity": "low",
        }

    def test_system_message_folding_is_tolerated(
        self, verifier: RoundTripVerifier
    ) -> None:
        payload = {
            "model": "o3-pro",
            "messages": [
                {"role": "system", "content": "A"},
                {"role": "user", "content": "hi"},
                {"role": "system", "content": "B"},
            ],
        }

        result = verifier.verify(payload, TranslationDirection.CHAT_TO_RESPONSE)

        assert result.translated["instructions"] == "A\nB"
        assert result.back_translated["messages"] == [
            {"role": "system", "content": "A\nB"},
            {"role": "user", "content": "hi"},
        ]
        assert result.success, result.differences

    def test_string_input_is_tolerated(self, verifier: RoundTripVerifier) -> None:
        payload = {"model": "gpt-4o", "input": "hi", "instructions": ""}

        result = verifier.verify(payload, TranslationDirection.RESPONSE_TO_CHAT)

        assert result.back_translated["input"] == [{"role": "user", "content": "hi"}]
        assert result.success, result.differences

    def test_max_completion_tokens_alias_is_tolerated(
        self, verifier: RoundTripVerifier
    ) -> None:
        payload = {
            "model": "o3-pro",
            "messages": [{"role": "user", "content": "hi"}],
            "max_completion_tokens": 64,
        }

        result = verifier.verify(payload, TranslationDirection.CHAT_TO_RESPONSE)

        assert result.back_translated["max_tokens"] == 64
        assert result.success, result.differences

    def test_translator_failure_is_reported(self, verifier: RoundTripVerifier) -> None:
        result = verifier.verify({"model": "o3-pro"}, TranslationDirection.CHAT_TO_RESPONSE)

        assert not result.success
        assert result.translated is None
        assert len(result.differences) == 1
        assert result.differences[0].startswith("forward translation failed")
        assert not result.semantic_equivalence.model


class TestResponseBodyRoundTrips:
    def test_chat_completion_round_trip(
        self, verifier: RoundTripVerifier, chat_completion: dict[str, Any]
    ) -> None:
        chat_completion["system_fingerprint"] = "fp_1"

        result = verifier.verify(
            chat_completion, TranslationDirection.CHAT_TO_RESPONSE_RESPONSE
        )

        assert result.success, result.differences

    def test_response_object_round_trip(
        self, verifier: RoundTripVerifier, response_object: dict[str, Any]
    ) -> None:
        result = verifier.verify(
            response_object, TranslationDirection.RESPONSE_TO_CHAT_RESPONSE
        )

        assert result.success, result.differences

    def test_tool_call_round_trip(
        self, verifier: RoundTripVerifier, chat_completion: dict[str, Any]
    ) -> None:
        chat_completion["choices"][0] = {
            "index": 0,
            "message": {
                "role": "assistant",
                "content": None,
                "tool_calls": [
                    {
                        "id": "call_1",
                        "type": "function",
                        "function": {"name": "f", "arguments": "{}"},
                    }
                ],
            },
            "finish_reason": "tool_calls",
        }

        result = verifier.verify(
            chat_completion, TranslationDirection.CHAT_TO_RESPONSE_RESPONSE
        )

        assert result.success, result.differences

    def test_multiple_choices_are_reported_as_lossy(
        self, verifier: RoundTripVerifier, chat_completion: dict[str, Any]
    ) -> None:
        chat_completion["choices"].append(
            {
                "index": 1,
                "message": {"role": "assistant", "content": "Another"},
                "finish_reason": "stop",
            }
        )

        result = verifier.verify(
            chat_completion, TranslationDirection.CHAT_TO_RESPONSE_RESPONSE
        )

        assert not result.success
        assert not result.semantic_equivalence.content
        assert result.semantic_equivalence.model
        assert any(diff.startswith("choices") for diff in result.differences)


class TestDifferenceReporting:
    def test_lists_every_differing_path(self) -> None:
        class LossyTranslator:
            def translate(self, payload, direction, options=None):
                from dialect_adapter.core.translation.field_translator import (
                    FieldTranslator,
                )

                result = FieldTranslator().translate(payload, direction, options)
                result.translated.pop("temperature", None)
                result.translated["model"] = "other"
                return result

        verifier = RoundTripVerifier(translator=LossyTranslator())
        payload = {
            "model": "o3-pro",
            "messages": [{"role": "user", "content": "hi"}],
            "temperature": 0.5,
        }

        result = verifier.verify(payload, TranslationDirection.CHAT_TO_RESPONSE)

        assert not result.success
        assert "temperature: missing after round trip" in result.differences
        assert "model: 'o3-pro' != 'other'" in result.differences
        assert result.semantic_equivalence.as_dict() == {
            "model": False,
            "content": True,
            "parameters": False,
        }


def test_format_round_trip_result_pass(
    verifier: RoundTripVerifier, chat_request: dict[str, Any]
) -> None:
    result = verifier.verify(chat_request, TranslationDirection.CHAT_TO_RESPONSE)

    assert format_round_trip_result(result) == (
        "PASS\n  Model: ok\n  Content: ok\n  Parameters: ok"
    )


def test_format_round_trip_result_lists_differences(
    verifier: RoundTripVerifier,
) -> None:
    result = verifier.verify({"model": "x"}, TranslationDirection.RESPONSE_TO_CHAT)

    report = format_round_trip_result(result)

    assert report.startswith("FAIL")
    assert "  Differences:" in report
    assert "    - forward translation failed" in report
