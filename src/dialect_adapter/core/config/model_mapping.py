"""
Model mapping configuration.

Loads the model name -> dialect table from a JSON or YAML file, validates it
against a JSON Schema and builds the ``ModelRouter`` used at runtime. Every
failure here is fatal at startup.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError

from dialect_adapter.core.common.exceptions import InvalidMappingError
from dialect_adapter.core.config.app_config import AdapterConfig
from dialect_adapter.core.domain.api_type import ApiType
from dialect_adapter.core.routing.model_router import ModelRouter

logger = logging.getLogger(__name__)

YAML_SUFFIXES = frozenset({".yaml", ".yml"})

MODEL_MAPPING_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Model API mapping",
    "type": "object",
    "propertyNames": {"type": "string", "minLength": 1},
    "additionalProperties": {"type": "string", "enum": ApiType.values()},
}


class _DuplicateModelError(Exception):
    def __init__(self, model: Any) -> None:
        super().__init__(model)
        self.model = model


def _reject_duplicates(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise _DuplicateModelError(key)
        result[key] = value
    return result


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that refuses mappings with repeated keys."""


def _construct_unique_mapping(
    loader: _UniqueKeyLoader, node: yaml.MappingNode, deep: bool = False
) -> dict[Any, Any]:
    seen: set[Any] = set()
    for key_node, _ in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in seen:
            raise _DuplicateModelError(key)
        seen.add(key)
    return loader.construct_mapping(node, deep=deep)


_UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_unique_mapping
)


def load_model_mapping_file(path: str | Path) -> Any:
    """Read the raw model mapping from a JSON or YAML file.

    Files ending in ``.yaml``/``.yml`` are parsed as YAML, anything else as
    JSON. Repeated model names are rejected instead of silently overwritten.

    Raises:
        InvalidMappingError: If the file is missing, unreadable, malformed or
            repeats a model name
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise InvalidMappingError(
            f"Model mapping file not found: {path}", details={"path": str(path)}
        ) from None
    except OSError as exc:
        raise InvalidMappingError(
            f"Failed to read model mapping file {path}: {exc}",
            details={"path": str(path)},
        ) from exc

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.load(content, Loader=_UniqueKeyLoader)  # noqa: S506
        return json.loads(content, object_pairs_hook=_reject_duplicates)
    except _DuplicateModelError as exc:
        raise InvalidMappingError(
            f'Duplicate model name found in mapping file: "{exc.model}"',
            details={"path": str(path), "model": exc.model},
        ) from None
    except json.JSONDecodeError as exc:
        raise InvalidMappingError(
            f"Invalid JSON in model mapping file: {exc.msg}",
            details={"path": str(path), "line": exc.lineno, "column": exc.colno},
        ) from exc
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        location = f" at line {mark.line + 1}, column {mark.column + 1}" if mark else ""
        raise InvalidMappingError(
            f"Invalid YAML in model mapping file{location}: "
            f"{getattr(exc, 'problem', None) or exc}",
            details={"path": str(path)},
        ) from exc


def _describe_error(err: ValidationError) -> tuple[str, str]:
    """Return the offending model name and a readable message for one error."""
    if err.validator == "propertyNames":
        return str(err.instance), f'Model name "{err.instance}" is not valid'
    model = str(err.path[0]) if err.path else "<root>"
    return (
        model,
        f'Model "{model}": {err.instance!r} is not valid. '
        f'Must be "{ApiType.RESPONSE.value}" or "{ApiType.CHAT_COMPLETIONS.value}"',
    )


def validate_model_mapping(raw: Any) -> dict[str, ApiType]:
    """Validate a raw model mapping and convert its values to ``ApiType``.

    Every invalid entry is reported, not only the first one.

    Raises:
        InvalidMappingError: If the mapping is not an object or any entry is invalid
    """
    if not isinstance(raw, dict):
        raise InvalidMappingError(
            "Model mapping must be an object",
            details={"type": type(raw).__name__},
        )

    order = {model: index for index, model in enumerate(raw)}
    validator = Draft7Validator(MODEL_MAPPING_SCHEMA)
    # Report in configuration order
    errors = sorted(
        validator.iter_errors(raw),
        key=lambda e: order.get(e.path[0] if e.path else e.instance, -1),
    )
    if errors:
        invalid_models: list[str] = []
        messages: list[str] = []
        for err in errors:
            model, message = _describe_error(err)
            if model not in invalid_models:
                invalid_models.append(model)
                messages.append(message)
        raise InvalidMappingError(
            "Invalid API type values in model mapping:\n"
            + "\n".join(f"  - {message}" for message in messages),
            details={"invalid_models": invalid_models, "errors": messages},
        )

    if not raw:
        logger.warning("Model mapping is empty; every model lookup will fail")
    return {model: ApiType(api_type) for model, api_type in raw.items()}


def load_model_mapping(path: str | Path) -> dict[str, ApiType]:
    return validate_model_mapping(load_model_mapping_file(path))


def build_model_router(config: AdapterConfig) -> ModelRouter:
    """Build the startup model router from the adapter configuration.

    Raises:
        InvalidMappingError: If the mapping file cannot be loaded or is invalid
    """
    mapping = load_model_mapping(config.model_mapping_file)
    router = ModelRouter(mapping)
    logger.info(
        "Loaded %d model mapping(s) from %s", len(router), config.model_mapping_file
    )
    return router
