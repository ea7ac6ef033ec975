"""Result records produced by the translation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from pydantic import Field

from dialect_adapter.core.common.exceptions import ErrorKind
from dialect_adapter.core.domain.base import ValueObject
from dialect_adapter.core.domain.translation_types import (
    TranslationContext,
    TranslationDirection,
    TranslationMode,
)
from dialect_adapter.core.interfaces.model_bases import InternalDTO


@dataclass(frozen=True)
class UnknownFieldsResult(InternalDTO):
    """Fields found outside the known schema of a dialect.

    ``unknown_fields`` keeps the order of first occurrence; ``cleaned_payload``
    holds only the known-key subset of the inspected payload.
    """

    unknown_fields: list[str] = field(default_factory=list)
    cleaned_payload: dict[str, Any] = field(default_factory=dict)

    @property
    def has_unknown_fields(self) -> bool:
        return bool(self.unknown_fields)


@dataclass(frozen=True)
class TranslationResult(InternalDTO):
    """A translated payload plus the field diagnostics gathered on the way.

    ``unmapped_fields`` lists known source fields that have no destination
    equivalent and were written into the destination's extension bag.
    """

    direction: TranslationDirection
    translated: dict[str, Any]
    unknown: UnknownFieldsResult
    unmapped_fields: list[str] = field(default_factory=list)

    @property
    def unknown_fields(self) -> list[str]:
        return self.unknown.unknown_fields


@dataclass(frozen=True)
class SemanticEquivalence(InternalDTO):
    model: bool
    content: bool
    parameters: bool

    def as_dict(self) -> dict[str, bool]:
        return {
            "model": self.model,
            "content": self.content,
            "parameters": self.parameters,
        }


@dataclass(frozen=True)
class RoundTripTestResult(InternalDTO):
    """Outcome of translating a payload forward and back again."""

    success: bool
    original: Any
    translated: Any
    back_translated: Any
    differences: list[str]
    semantic_equivalence: SemanticEquivalence


class TranslationLogEntry(ValueObject):
    """Structured record emitted once per translation call."""

    request_id: str
    translation_direction: TranslationDirection | None
    mode: TranslationMode
    unknown_fields: list[str] = Field(default_factory=list)
    timestamp: str
    success: bool
    error: str | None = None
    duration_ms: float | None = None

    @classmethod
    def from_context(
        cls,
        context: TranslationContext,
        *,
        unknown_fields: list[str] | None = None,
        success: bool,
        error: str | None = None,
    ) -> TranslationLogEntry:
        return cls(
            request_id=context.request_id,
            translation_direction=context.direction,
            mode=context.mode,
            unknown_fields=list(unknown_fields or []),
            timestamp=datetime.now(timezone.utc).isoformat(),
            success=success,
            error=error,
            duration_ms=round(context.elapsed_ms(), 3),
        )


@dataclass(frozen=True)
class TranslationOutcome(InternalDTO):
    """Result type returned by the translation service.

    Failures carry an explicit ``error_kind`` so callers can branch on the
    category without catching exceptions.
    """

    context: TranslationContext
    success: bool
    payload: dict[str, Any] | None = None
    result: TranslationResult | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None
    error_details: dict[str, Any] = field(default_factory=dict)

    @property
    def mode(self) -> TranslationMode:
        return self.context.mode

    @property
    def unknown_fields(self) -> list[str]:
        return self.result.unknown_fields if self.result else []
