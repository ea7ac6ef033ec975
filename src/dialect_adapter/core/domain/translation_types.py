"""Translation directions, modes and the per-call translation context."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum

from dialect_adapter.core.domain.api_type import ApiType
from dialect_adapter.core.interfaces.model_bases import InternalDTO


class PayloadKind(str, Enum):
    """Whether a payload is a request body or a response body."""

    REQUEST = "request"
    RESPONSE = "response"


class TranslationMode(str, Enum):
    TRANSLATE = "translate"
    PASS_THROUGH = "pass_through"


class TranslationDirection(str, Enum):
    """Supported translation directions.

    Names read ``<source>_to_<destination>``; the ``_response`` suffix marks
    the pair that reshapes response bodies instead of requests.
    """

    CHAT_TO_RESPONSE = "chat_to_response"
    RESPONSE_TO_CHAT = "response_to_chat"
    CHAT_TO_RESPONSE_RESPONSE = "chat_to_response_response"
    RESPONSE_TO_CHAT_RESPONSE = "response_to_chat_response"

    @property
    def payload_kind(self) -> PayloadKind:
        if self in (
            TranslationDirection.CHAT_TO_RESPONSE_RESPONSE,
            TranslationDirection.RESPONSE_TO_CHAT_RESPONSE,
        ):
            return PayloadKind.RESPONSE
        return PayloadKind.REQUEST

    @property
    def source(self) -> ApiType:
        if self.value.startswith("chat_"):
            return ApiType.CHAT_COMPLETIONS
        return ApiType.RESPONSE

    @property
    def target(self) -> ApiType:
        if self.source is ApiType.CHAT_COMPLETIONS:
            return ApiType.RESPONSE
        return ApiType.CHAT_COMPLETIONS

    @property
    def inverse(self) -> TranslationDirection:
        """The direction that undoes this one for the same payload kind."""
        return _INVERSES[self]

    @classmethod
    def between(
        cls, source: ApiType, target: ApiType, payload_kind: PayloadKind
    ) -> TranslationDirection:
        for direction in cls:
            if (
                direction.source == source
                and direction.target == target
                and direction.payload_kind == payload_kind
            ):
                return direction
        raise ValueError(
            f"No translation direction from {ApiType(source).value} "
            f"to {ApiType(target).value}"
        )


_INVERSES: dict[TranslationDirection, TranslationDirection] = {
    TranslationDirection.CHAT_TO_RESPONSE: TranslationDirection.RESPONSE_TO_CHAT,
    TranslationDirection.RESPONSE_TO_CHAT: TranslationDirection.CHAT_TO_RESPONSE,
    TranslationDirection.CHAT_TO_RESPONSE_RESPONSE: TranslationDirection.RESPONSE_TO_CHAT_RESPONSE,
    TranslationDirection.RESPONSE_TO_CHAT_RESPONSE: TranslationDirection.CHAT_TO_RESPONSE_RESPONSE,
}


@dataclass(frozen=True)
class DirectionDecision(InternalDTO):
    """Outcome of direction resolution for one payload."""

    source: ApiType
    target: ApiType
    payload_kind: PayloadKind
    mode: TranslationMode
    direction: TranslationDirection | None = None

    @property
    def is_pass_through(self) -> bool:
        return self.mode is TranslationMode.PASS_THROUGH


def generate_request_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class TranslationContext(InternalDTO):
    """Per-call identity, timing and mode metadata.

    Created once at the start of a translation call and handed to the
    translation logger together with the outcome. Never persisted.
    """

    request_id: str
    direction: TranslationDirection | None
    mode: TranslationMode
    start_time_ns: int = field(default_factory=time.monotonic_ns)

    @classmethod
    def create(
        cls,
        decision: DirectionDecision | None,
        request_id: str | None = None,
        start_time_ns: int | None = None,
    ) -> TranslationContext:
        """Build the context for a call.

        ``decision`` is None when the call failed before a direction was
        resolved; such a context carries no direction.
        """
        return cls(
            request_id=request_id or generate_request_id(),
            direction=decision.direction if decision else None,
            mode=decision.mode if decision else TranslationMode.TRANSLATE,
            start_time_ns=(
                time.monotonic_ns() if start_time_ns is None else start_time_ns
            ),
        )

    def elapsed_ms(self) -> float:
        return (time.monotonic_ns() - self.start_time_ns) / 1_000_000


@dataclass(frozen=True)
class TranslationOptions(InternalDTO):
    """Options passed to the translators."""

    strict: bool = False  # Reject unknown fields instead of carrying them
