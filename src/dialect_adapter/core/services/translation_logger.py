"""
Translation logging.

Emits one structured event per translation call, plus debug events for
fields that were carried without a known mapping. Translators never log;
the service hands the context and the outcome to this logger instead.
"""

from __future__ import annotations

from dialect_adapter.core.common.exceptions import UnknownFieldWarning
from dialect_adapter.core.common.structlog_config import get_logger
from dialect_adapter.core.domain.translation_results import TranslationLogEntry
from dialect_adapter.core.domain.translation_types import TranslationContext

COMPLETED_EVENT = "translation_completed"
FAILED_EVENT = "translation_failed"
UNKNOWN_FIELDS_EVENT = "unknown_fields_detected"
UNMAPPED_FIELDS_EVENT = "unmapped_fields_written"


class TranslationLogger:
    """Structured logger for translation events."""

    def __init__(self, name: str = "dialect_adapter.translation") -> None:
        self._logger = get_logger(name)

    def create_entry(
        self,
        context: TranslationContext,
        *,
        success: bool,
        unknown_fields: list[str] | None = None,
        error: str | None = None,
    ) -> TranslationLogEntry:
        return TranslationLogEntry.from_context(
            context, unknown_fields=unknown_fields, success=success, error=error
        )

    def log_translation(self, entry: TranslationLogEntry) -> None:
        """Emit the per-call event carrying every log entry field."""
        fields = entry.model_dump(mode="json")
        if entry.success:
            self._logger.info(COMPLETED_EVENT, **fields)
        else:
            self._logger.error(FAILED_EVENT, **fields)

    def log_unknown_fields(
        self, context: TranslationContext, unknown_fields: list[str]
    ) -> None:
        if not unknown_fields:
            return
        self._logger.debug(
            UNKNOWN_FIELDS_EVENT,
            request_id=context.request_id,
            translation_direction=_direction(context),
            unknown_fields=list(unknown_fields),
            category=UnknownFieldWarning.__name__,
        )

    def log_unmapped_fields(
        self, context: TranslationContext, unmapped_fields: list[str]
    ) -> None:
        if not unmapped_fields:
            return
        self._logger.debug(
            UNMAPPED_FIELDS_EVENT,
            request_id=context.request_id,
            translation_direction=_direction(context),
            unmapped_fields=list(unmapped_fields),
        )


def _direction(context: TranslationContext) -> str | None:
    return context.direction.value if context.direction else None

