"""
Field translator interface.

This module defines the interface the round-trip verifier and the
translation service depend on.
"""

from typing import Any, Protocol

from dialect_adapter.core.domain.translation_results import TranslationResult
from dialect_adapter.core.domain.translation_types import (
    TranslationDirection,
    TranslationOptions,
)


class IFieldTranslator(Protocol):
    """Interface for dialect translators."""

    def translate(
        self,
        payload: Any,
        direction: TranslationDirection,
        options: TranslationOptions | None = None,
    ) -> TranslationResult:
        """
        Translates a payload from the direction's source dialect to its destination.

        Args:
            payload: The decoded JSON payload in the source dialect.
            direction: The translation direction.
            options: Optional translation options.

        Returns:
            The translated payload together with its field diagnostics.
        """
        ...
