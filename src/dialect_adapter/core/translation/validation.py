"""
Payload validation helpers shared by the translators.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import ValidationError

from dialect_adapter.core.common.exceptions import (
    PayloadTooDeepError,
    SchemaViolationError,
)
from dialect_adapter.core.domain.dialects import DialectPayload
from dialect_adapter.core.domain.translation_results import UnknownFieldsResult
from dialect_adapter.core.translation.unknown_fields import detect_for, split_extensions

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=DialectPayload)


def _describe(model_cls: type[DialectPayload]) -> str:
    return f"{model_cls.dialect.value} {model_cls.payload_kind.value}"


def parse_payload(
    model_cls: type[P], payload: Any, *, strict: bool = False
) -> tuple[P, UnknownFieldsResult]:
    """Validate a wire payload into its typed dialect model.

    Args:
        model_cls: The dialect model describing the payload
        payload: The decoded JSON payload
        strict: Reject unknown fields instead of carrying them

    Returns:
        The typed payload (unknown fields in ``extensions``) and the detection result

    Raises:
        SchemaViolationError: If the payload does not fit the dialect
    """
    dialect = model_cls.dialect.value
    if not isinstance(payload, dict):
        raise SchemaViolationError(
            f"{_describe(model_cls).capitalize()} must be a JSON object",
            dialect=dialect,
        )

    unknown = detect_for(model_cls, payload)
    if strict and unknown.has_unknown_fields:
        raise SchemaViolationError(
            f"Unknown fields are not allowed in strict mode: "
            f"{', '.join(unknown.unknown_fields)}",
            dialect=dialect,
            field=unknown.unknown_fields[0],
            details={"unknown_fields": list(unknown.unknown_fields)},
        )

    data = dict(unknown.cleaned_payload)
    data["extensions"] = split_extensions(unknown, payload)
    try:
        parsed = model_cls.model_validate(data)
    except ValidationError as exc:
        errors = exc.errors(include_url=False)
        first = errors[0] if errors else {}
        loc = first.get("loc") or ()
        field = str(loc[0]) if loc else None
        reason = first.get("msg", str(exc))
        logger.debug(
            "Rejected %s payload: field=%s reason=%s", dialect, field, reason
        )
        raise SchemaViolationError(
            f"Invalid {_describe(model_cls)}"
            + (f" field '{field}'" if field else "")
            + f": {reason}",
            dialect=dialect,
            field=field,
            details={
                "errors": [
                    {
                        "field": ".".join(str(part) for part in err.get("loc", ())),
                        "message": err.get("msg"),
                    }
                    for err in errors
                ]
            },
        ) from exc
    return parsed, unknown


def calculate_depth(value: Any) -> int:
    """Nesting depth of a JSON value: primitives are 0, each container adds 1."""
    deepest = 0
    stack: list[tuple[Any, int]] = [(value, 0)]
    while stack:
        node, level = stack.pop()
        if isinstance(node, dict):
            children = list(node.values())
        elif isinstance(node, list):
            children = node
        else:
            deepest = max(deepest, level)
            continue
        level += 1
        deepest = max(deepest, level)
        stack.extend((child, level) for child in children)
    return deepest


def validate_json_depth(payload: Any, max_depth: int) -> None:
    """Raise ``PayloadTooDeepError`` when ``payload`` nests deeper than ``max_depth``."""
    depth = calculate_depth(payload)
    if depth > max_depth:
        raise PayloadTooDeepError(
            f"JSON nesting depth exceeds maximum of {max_depth} levels",
            details={"depth": depth, "max_depth": max_depth},
        )
