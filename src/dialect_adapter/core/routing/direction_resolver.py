from __future__ import annotations

from dialect_adapter.core.domain.api_type import ApiType
from dialect_adapter.core.domain.translation_types import (
    DirectionDecision,
    PayloadKind,
    TranslationDirection,
    TranslationMode,
)


def resolve_direction(
    source: ApiType | str,
    target: ApiType | str,
    payload_kind: PayloadKind | str = PayloadKind.REQUEST,
) -> DirectionDecision:
    """Decide how a payload in ``source`` dialect reaches ``target``.

    Matching dialects always pass through untouched. Otherwise the payload
    kind picks the request pair or the response-body pair of directions.
    Dialects and payload kinds may be given as enum members or their values.
    """
    source = ApiType(source)
    target = ApiType(target)
    payload_kind = PayloadKind(payload_kind)

    if source == target:
        return DirectionDecision(
            source=source,
            target=target,
            payload_kind=payload_kind,
            mode=TranslationMode.PASS_THROUGH,
        )
    return DirectionDecision(
        source=source,
        target=target,
        payload_kind=payload_kind,
        mode=TranslationMode.TRANSLATE,
        direction=TranslationDirection.between(source, target, payload_kind),
    )
