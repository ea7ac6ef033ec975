"""
Unknown field detection.

Splits a payload into the fields its dialect knows about and the ones it
does not. Detection is a plain set difference: values are never inspected
or transformed, so unknown fields can be reattached verbatim after mapping.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from typing import Any

from dialect_adapter.core.domain.dialects import DialectPayload, ResponseApiRequest
from dialect_adapter.core.domain.translation_results import UnknownFieldsResult

# Sub-keys of the Response ``text`` object that the mapping table understands
KNOWN_TEXT_FIELDS: frozenset[str] = frozenset({"format"})


def detect(payload: Mapping[str, Any], known_keys: Collection[str]) -> UnknownFieldsResult:
    """Detect keys of ``payload`` that are absent from ``known_keys``.

    Args:
        payload: The payload to inspect
        known_keys: Field names defined by the payload's dialect

    Returns:
        The unknown keys in first-occurrence order and the known-key subset
    """
    unknown_fields: list[str] = []
    cleaned_payload: dict[str, Any] = {}

    for key, value in payload.items():
        if key in known_keys:
            cleaned_payload[key] = value
        elif key not in unknown_fields:
            unknown_fields.append(key)

    return UnknownFieldsResult(
        unknown_fields=unknown_fields, cleaned_payload=cleaned_payload
    )


def detect_for(
    model_cls: type[DialectPayload], payload: Mapping[str, Any]
) -> UnknownFieldsResult:
    """Detect unknown fields against the known schema of a dialect model.

    Response requests additionally report unrecognized ``text`` sub-keys as
    ``text.<key>``. Those stay inside ``text`` in the cleaned payload.
    """
    result = detect(payload, model_cls.known_fields())
    if model_cls is not ResponseApiRequest:
        return result

    text = payload.get("text")
    if not isinstance(text, Mapping):
        return result

    nested = [f"text.{key}" for key in text if key not in KNOWN_TEXT_FIELDS]
    if not nested:
        return result
    return UnknownFieldsResult(
        unknown_fields=[*result.unknown_fields, *nested],
        cleaned_payload=result.cleaned_payload,
    )


def split_extensions(
    result: UnknownFieldsResult, payload: Mapping[str, Any]
) -> dict[str, Any]:
    """Collect the top-level unknown fields of ``payload`` into an extension map."""
    return {
        key: value
        for key, value in payload.items()
        if key not in result.cleaned_payload
    }
