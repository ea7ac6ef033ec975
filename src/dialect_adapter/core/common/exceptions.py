"""
Common exception classes for the dialect adapter.

This module defines the exception hierarchy raised by the translation engine
and its configuration layer. Every exception carries an ``ErrorKind`` so the
service layer can turn it into a result object without losing the category.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Categories of failures surfaced by the adapter."""

    MODEL_NOT_FOUND = "model_not_found"
    INVALID_MAPPING = "invalid_mapping"
    SCHEMA_VIOLATION = "schema_violation"
    PAYLOAD_TOO_DEEP = "payload_too_deep"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


class AdapterError(Exception):
    """Base exception class for all adapter errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        *,
        status_code: int | None = None,
        **kwargs,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
            status_code: Optional HTTP status code hint for transport adapters
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code or 500
        for key, value in (kwargs or {}).items():
            setattr(self, key, value)

    def to_dict(self) -> dict:
        error_dict = {
            "message": self.message,
            "type": self.__class__.__name__,
            "kind": self.kind.value,
            "details": self.details,
        }

        for attr_name in dir(self):
            if (
                not attr_name.startswith("_")
                and attr_name
                not in ["message", "details", "status_code", "args", "kind"]
                and not callable(getattr(self, attr_name))
            ):
                error_dict[attr_name] = getattr(self, attr_name)

        return {"error": error_dict}


class ModelNotFoundError(AdapterError):
    """Raised when a model is absent from the routing table."""

    kind = ErrorKind.MODEL_NOT_FOUND

    def __init__(
        self,
        message: str | None = None,
        model: str | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        det = details.copy() if details else {}
        if model is not None:
            det.setdefault("model", model)
        super().__init__(
            message or f"Model '{model}' not found in configuration",
            det,
            status_code=404,
            **kwargs,
        )
        self.model = model


class InvalidMappingError(AdapterError):
    """Raised when the model mapping configuration is malformed.

    Fatal at startup: a process must not serve traffic with an invalid mapping.
    """

    kind = ErrorKind.INVALID_MAPPING

    def __init__(
        self,
        message: str = "Invalid model mapping",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, status_code=500, **kwargs)


class SchemaViolationError(AdapterError):
    """Raised when a payload is missing a structurally required field."""

    kind = ErrorKind.SCHEMA_VIOLATION

    def __init__(
        self,
        message: str = "Payload does not match its dialect schema",
        dialect: str | None = None,
        field: str | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        det = details.copy() if details else {}
        if dialect is not None:
            det.setdefault("dialect", dialect)
        if field is not None:
            det.setdefault("field", field)
        super().__init__(message, det, status_code=400, **kwargs)
        self.dialect = dialect
        self.field = field


class PayloadTooDeepError(AdapterError):
    """Raised when a payload nests deeper than the configured limit."""

    kind = ErrorKind.PAYLOAD_TOO_DEEP

    def __init__(
        self,
        message: str = "Payload nesting depth exceeds the configured maximum",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, status_code=413, **kwargs)


class ConfigurationError(AdapterError):
    """Raised when there's a configuration issue."""

    kind = ErrorKind.CONFIGURATION

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, status_code=500, **kwargs)


class UnknownFieldWarning(UserWarning):
    """Category label for fields carried through without a known mapping.

    Never raised: translation proceeds and the field is preserved. The class
    name is used as the ``category`` of the unknown-fields log event.
    """
