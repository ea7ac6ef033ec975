import pytest
from dialect_adapter.core.domain.api_type import ApiType
from dialect_adapter.core.domain.translation_types import (
    DirectionDecision,
    PayloadKind,
    TranslationContext,
    TranslationDirection,
    TranslationMode,
)


class TestTranslationDirection:
    def test_inverse_pairs(self) -> None:
        for direction in TranslationDirection:
            assert direction.inverse.inverse is direction
            assert direction.inverse.payload_kind is direction.payload_kind
            assert direction.inverse.source is direction.target

    def test_source_and_target(self) -> None:
        direction = TranslationDirection.RESPONSE_TO_CHAT_RESPONSE

        assert direction.source is ApiType.RESPONSE
        assert direction.target is ApiType.CHAT_COMPLETIONS
        assert direction.payload_kind is PayloadKind.RESPONSE

    def test_between_rejects_same_dialect(self) -> None:
        with pytest.raises(ValueError):
            TranslationDirection.between(
                ApiType.RESPONSE, ApiType.RESPONSE, PayloadKind.REQUEST
            )


class TestTranslationContext:
    def test_create_generates_request_id(self) -> None:
        decision = DirectionDecision(
            source=ApiType.CHAT_COMPLETIONS,
            target=ApiType.RESPONSE,
            payload_kind=PayloadKind.REQUEST,
            mode=TranslationMode.TRANSLATE,
            direction=TranslationDirection.CHAT_TO_RESPONSE,
        )

        first = TranslationContext.create(decision)
        second = TranslationContext.create(decision)

        assert first.request_id != second.request_id
        assert len(first.request_id) == 32
        assert first.direction is TranslationDirection.CHAT_TO_RESPONSE

    def test_create_keeps_caller_request_id(self) -> None:
        decision = DirectionDecision(
            source=ApiType.RESPONSE,
            target=ApiType.RESPONSE,
            payload_kind=PayloadKind.REQUEST,
            mode=TranslationMode.PASS_THROUGH,
        )

        context = TranslationContext.create(decision, request_id="req-1")

        assert context.request_id == "req-1"
        assert context.mode is TranslationMode.PASS_THROUGH
        assert context.direction is None

    def test_create_without_decision(self) -> None:
        context = TranslationContext.create(None, "req-2", start_time_ns=42)

        assert context.request_id == "req-2"
        assert context.direction is None
        assert context.mode is TranslationMode.TRANSLATE
        assert context.start_time_ns == 42

    def test_elapsed_ms_is_non_negative(self) -> None:
        context = TranslationContext(
            request_id="req-1", direction=None, mode=TranslationMode.TRANSLATE
        )

        assert context.elapsed_ms() >= 0
