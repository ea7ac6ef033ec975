"""
Model routing table.

Maps model names to the API dialect each model must be called with. The
table is built once at startup and is read-only afterwards, so a single
router instance can be shared freely between concurrent calls.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from dialect_adapter.core.common.exceptions import (
    InvalidMappingError,
    ModelNotFoundError,
)
from dialect_adapter.core.domain.api_type import ApiType


class ModelRouter:
    """Immutable model name -> ApiType lookup."""

    __slots__ = ("_mapping",)

    def __init__(self, mapping: Mapping[str, ApiType]) -> None:
        """Build a router from an already validated mapping.

        Args:
            mapping: Model names to their dialect, in configuration order

        Raises:
            InvalidMappingError: If a key is not a non-empty string or a value
                is not an ``ApiType`` member
        """
        invalid: list[str] = []
        entries: dict[str, ApiType] = {}
        for model, api_type in mapping.items():
            if not isinstance(model, str) or not model:
                invalid.append(repr(model))
                continue
            if not isinstance(api_type, ApiType):
                invalid.append(model)
                continue
            entries[model] = api_type

        if invalid:
            raise InvalidMappingError(
                f"Invalid model mapping entries: {', '.join(invalid)}. "
                f"Values must be one of: {', '.join(ApiType.values())}",
                details={"invalid_models": invalid},
            )

        self._mapping: Mapping[str, ApiType] = MappingProxyType(entries)

    def resolve(self, model: str) -> ApiType:
        """Return the dialect configured for ``model``.

        Raises:
            ModelNotFoundError: If the model is not in the routing table
        """
        try:
            return self._mapping[model]
        except (KeyError, TypeError):
            raise ModelNotFoundError(model=model) from None

    def contains(self, model: str) -> bool:
        try:
            return model in self._mapping
        except TypeError:
            return False

    def list_models(self) -> list[str]:
        return list(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __repr__(self) -> str:
        return f"ModelRouter(models={len(self._mapping)})"
