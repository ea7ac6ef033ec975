from __future__ import annotations

import logging
import time
from typing import Any

from dialect_adapter.core.common.exceptions import AdapterError, SchemaViolationError
from dialect_adapter.core.config.app_config import DEFAULT_MAX_JSON_DEPTH, AdapterConfig
from dialect_adapter.core.config.model_mapping import build_model_router
from dialect_adapter.core.domain.api_type import ApiType
from dialect_adapter.core.domain.translation_results import TranslationOutcome
from dialect_adapter.core.domain.translation_types import (
    DirectionDecision,
    PayloadKind,
    TranslationContext,
    TranslationOptions,
    generate_request_id,
)
from dialect_adapter.core.interfaces.field_translator_interface import (
    IFieldTranslator,
)
from dialect_adapter.core.routing.direction_resolver import resolve_direction
from dialect_adapter.core.routing.model_router import ModelRouter
from dialect_adapter.core.services.translation_logger import TranslationLogger
from dialect_adapter.core.translation.field_translator import FieldTranslator
from dialect_adapter.core.translation.validation import validate_json_depth

logger = logging.getLogger(__name__)


class TranslationService:
    """
    Runs one payload through routing, direction resolution and translation.

    Requests travel from the client's dialect to the dialect the routed model
    requires. Response bodies travel the other way: from the model's dialect
    back to the client's.
    """

    def __init__(
        self,
        router: ModelRouter,
        translator: IFieldTranslator | None = None,
        translation_logger: TranslationLogger | None = None,
        max_json_depth: int = DEFAULT_MAX_JSON_DEPTH,
    ) -> None:
        self._router = router
        self._translator: IFieldTranslator = translator or FieldTranslator()
        self._translation_logger = translation_logger or TranslationLogger()
        self._max_json_depth = max_json_depth

    @classmethod
    def from_config(
        cls, config: AdapterConfig, router: ModelRouter | None = None
    ) -> TranslationService:
        """Build a service from startup configuration.

        Raises:
            InvalidMappingError: If the model mapping cannot be loaded
        """
        return cls(
            router or build_model_router(config),
            max_json_depth=config.max_json_depth,
        )

    @property
    def router(self) -> ModelRouter:
        return self._router

    def translate(
        self,
        payload: Any,
        client_api: ApiType | str,
        payload_kind: PayloadKind | str = PayloadKind.REQUEST,
        *,
        model: str | None = None,
        request_id: str | None = None,
        strict: bool = False,
    ) -> TranslationOutcome:
        """
        Translate a payload between the client's dialect and the model's dialect.

        Args:
            payload: The decoded JSON payload
            client_api: The dialect the client speaks
            payload_kind: Whether ``payload`` is a request or a response body
            model: Routing key; defaults to the payload's ``model`` field
            request_id: Caller-supplied request id; generated when omitted
            strict: Reject unknown fields instead of carrying them

        Returns:
            A TranslationOutcome. Failures are reported through ``error_kind``,
            never raised. A pass-through outcome carries the payload object
            it was given, untouched.

        Raises:
            ValueError: If ``client_api`` or ``payload_kind`` is not a known value
        """
        client_api = ApiType(client_api)
        payload_kind = PayloadKind(payload_kind)
        request_id = request_id or generate_request_id()
        start_time_ns = time.monotonic_ns()
        decision: DirectionDecision | None = None

        try:
            validate_json_depth(payload, self._max_json_depth)
            model_api = self._router.resolve(model or _routing_model(payload))
            if payload_kind is PayloadKind.REQUEST:
                decision = resolve_direction(client_api, model_api, payload_kind)
            else:
                decision = resolve_direction(model_api, client_api, payload_kind)
            context = TranslationContext.create(decision, request_id, start_time_ns)

            if decision.direction is None:
                outcome = TranslationOutcome(
                    context=context, success=True, payload=payload
                )
            else:
                result = self._translator.translate(
                    payload,
                    decision.direction,
                    TranslationOptions(strict=strict),
                )
                self._translation_logger.log_unknown_fields(
                    context, result.unknown_fields
                )
                self._translation_logger.log_unmapped_fields(
                    context, result.unmapped_fields
                )
                outcome = TranslationOutcome(
                    context=context,
                    success=True,
                    payload=result.translated,
                    result=result,
                )
        except AdapterError as exc:
            context = TranslationContext.create(decision, request_id, start_time_ns)
            logger.debug(
                "Translation %s failed with %s: %s",
                request_id,
                exc.kind.value,
                exc.message,
            )
            outcome = TranslationOutcome(
                context=context,
                success=False,
                error=exc.message,
                error_kind=exc.kind,
                error_details=dict(exc.details),
            )

        self._translation_logger.log_translation(
            self._translation_logger.create_entry(
                outcome.context,
                success=outcome.success,
                unknown_fields=outcome.unknown_fields,
                error=outcome.error,
            )
        )
        return outcome


def _routing_model(payload: Any) -> str:
    if not isinstance(payload, dict):
        raise SchemaViolationError("Payload must be a JSON object")
    model = payload.get("model")
    if not isinstance(model, str) or not model:
        raise SchemaViolationError(
            "Missing required field: model must be a non-empty string",
            field="model",
        )
    return model
