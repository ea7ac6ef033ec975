from __future__ import annotations

from collections.abc import Callable
from typing import Any

from dialect_adapter.core.domain.translation_results import TranslationResult
from dialect_adapter.core.domain.translation_types import (
    TranslationDirection,
    TranslationOptions,
)
from dialect_adapter.core.translation.chat_to_response import (
    chat_response_to_response,
    chat_to_response,
)
from dialect_adapter.core.translation.response_to_chat import (
    response_to_chat,
    response_to_chat_response,
)

Converter = Callable[[Any, TranslationOptions], TranslationResult]


class FieldTranslator:
    """
    Reshapes payloads between the Chat Completions and Response dialects.

    Translation is pure: the source payload is never mutated, the returned
    payload shares no mutable structure with it, and nothing is logged here.
    Logging belongs to the caller, which knows the request context.
    """

    def __init__(self) -> None:
        self._converters: dict[TranslationDirection, Converter] = {
            TranslationDirection.CHAT_TO_RESPONSE: chat_to_response,
            TranslationDirection.RESPONSE_TO_CHAT: response_to_chat,
            TranslationDirection.CHAT_TO_RESPONSE_RESPONSE: chat_response_to_response,
            TranslationDirection.RESPONSE_TO_CHAT_RESPONSE: response_to_chat_response,
        }

    def translate(
        self,
        payload: Any,
        direction: TranslationDirection,
        options: TranslationOptions | None = None,
    ) -> TranslationResult:
        """
        Translate ``payload`` in the given direction.

        Args:
            payload: The decoded JSON payload in the source dialect
            direction: The translation direction
            options: Translation options (strict mode)

        Returns:
            The translated payload and its field diagnostics

        Raises:
            SchemaViolationError: If the payload does not fit the source dialect
        """
        converter = self._converters[TranslationDirection(direction)]
        return converter(payload, options or TranslationOptions())

    def chat_to_response(
        self, payload: Any, options: TranslationOptions | None = None
    ) -> TranslationResult:
        return self.translate(payload, TranslationDirection.CHAT_TO_RESPONSE, options)

    def response_to_chat(
        self, payload: Any, options: TranslationOptions | None = None
    ) -> TranslationResult:
        return self.translate(payload, TranslationDirection.RESPONSE_TO_CHAT, options)

    def chat_response_to_response(
        self, payload: Any, options: TranslationOptions | None = None
    ) -> TranslationResult:
        return self.translate(
            payload, TranslationDirection.CHAT_TO_RESPONSE_RESPONSE, options
        )

    def response_to_chat_response(
        self, payload: Any, options: TranslationOptions | None = None
    ) -> TranslationResult:
        return self.translate(
            payload, TranslationDirection.RESPONSE_TO_CHAT_RESPONSE, options
        )
