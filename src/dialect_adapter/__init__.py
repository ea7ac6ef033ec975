"""Bidirectional Chat Completions / Response API dialect adapter."""

from dialect_adapter.core.common.exceptions import (
    AdapterError,
    ConfigurationError,
    ErrorKind,
    InvalidMappingError,
    ModelNotFoundError,
    PayloadTooDeepError,
    SchemaViolationError,
    UnknownFieldWarning,
)
from dialect_adapter.core.domain.api_type import ApiType
from dialect_adapter.core.domain.translation_types import (
    PayloadKind,
    TranslationDirection,
    TranslationMode,
    TranslationOptions,
)
from dialect_adapter.core.routing.direction_resolver import resolve_direction
from dialect_adapter.core.routing.model_router import ModelRouter
from dialect_adapter.core.services.translation_service import TranslationService
from dialect_adapter.core.translation.field_translator import FieldTranslator
from dialect_adapter.core.translation.round_trip import (
    RoundTripVerifier,
    format_round_trip_result,
)

__version__ = "0.1.0"

__all__ = [
    "AdapterError",
    "ApiType",
    "ConfigurationError",
    "ErrorKind",
    "FieldTranslator",
    "InvalidMappingError",
    "ModelNotFoundError",
    "ModelRouter",
    "PayloadKind",
    "PayloadTooDeepError",
    "RoundTripVerifier",
    "SchemaViolationError",
    "TranslationDirection",
    "TranslationMode",
    "TranslationOptions",
    "TranslationService",
    "UnknownFieldWarning",
    "format_round_trip_result",
    "resolve_direction",
]
