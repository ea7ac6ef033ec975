import pytest
from dialect_adapter.core.domain.api_type import ApiType
from dialect_adapter.core.domain.translation_types import (
    PayloadKind,
    TranslationDirection,
    TranslationMode,
)
from dialect_adapter.core.routing.direction_resolver import resolve_direction


@pytest.mark.parametrize(
    ("source", "target", "kind", "expected"),
    [
        (
            ApiType.CHAT_COMPLETIONS,
            ApiType.RESPONSE,
            PayloadKind.REQUEST,
            TranslationDirection.CHAT_TO_RESPONSE,
        ),
        (
            ApiType.RESPONSE,
            ApiType.CHAT_COMPLETIONS,
            PayloadKind.REQUEST,
            TranslationDirection.RESPONSE_TO_CHAT,
        ),
        (
            ApiType.CHAT_COMPLETIONS,
            ApiType.RESPONSE,
            PayloadKind.RESPONSE,
            TranslationDirection.CHAT_TO_RESPONSE_RESPONSE,
        ),
        (
            ApiType.RESPONSE,
            ApiType.CHAT_COMPLETIONS,
            PayloadKind.RESPONSE,
            TranslationDirection.RESPONSE_TO_CHAT_RESPONSE,
        ),
    ],
)
def test_different_dialects_translate(
    source: ApiType,
    target: ApiType,
    kind: PayloadKind,
    expected: TranslationDirection,
) -> None:
    decision = resolve_direction(source, target, kind)

    assert decision.mode is TranslationMode.TRANSLATE
    assert decision.direction is expected
    assert not decision.is_pass_through


@pytest.mark.parametrize("api_type", list(ApiType))
@pytest.mark.parametrize("kind", list(PayloadKind))
def test_matching_dialects_pass_through(api_type: ApiType, kind: PayloadKind) -> None:
    decision = resolve_direction(api_type, api_type, kind)

    assert decision.is_pass_through
    assert decision.direction is None


def test_payload_kind_defaults_to_request() -> None:
    decision = resolve_direction(ApiType.CHAT_COMPLETIONS, ApiType.RESPONSE)

    assert decision.payload_kind is PayloadKind.REQUEST
    assert decision.direction is TranslationDirection.CHAT_TO_RESPONSE


def test_accepts_plain_string_values() -> None:
    decision = resolve_direction("chat_completions", ApiType.RESPONSE, "response")

    assert decision.source is ApiType.CHAT_COMPLETIONS
    assert decision.payload_kind is PayloadKind.RESPONSE
    assert decision.direction is TranslationDirection.CHAT_TO_RESPONSE_RESPONSE


def test_plain_string_matching_dialect_passes_through() -> None:
    decision = resolve_direction("response", ApiType.RESPONSE)

    assert decision.is_pass_through
