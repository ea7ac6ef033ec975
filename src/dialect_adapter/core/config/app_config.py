from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import ConfigDict, Field, ValidationError, field_validator

from dialect_adapter.core.common.exceptions import ConfigurationError
from dialect_adapter.core.common.structlog_config import LogFormat
from dialect_adapter.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)

DEFAULT_MAX_JSON_DEPTH = 100

MAPPING_FILE_ENV = "MODEL_API_MAPPING_FILE"
LOG_LEVEL_ENV = "ADAPTER_LOG_LEVEL"
LOG_FORMAT_ENV = "ADAPTER_LOG_FORMAT"
MAX_JSON_DEPTH_ENV = "MAX_JSON_DEPTH"


def _get_env_value(
    env: Mapping[str, str],
    name: str,
    default: Any,
) -> Any:
    """Return a stripped environment variable value, or ``default`` when unset or blank."""
    raw_value = env.get(name)
    if raw_value is None or not raw_value.strip():
        return default
    return raw_value.strip()


class LogLevel(str, Enum):
    """Log levels for configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def numeric(self) -> int:
        return logging.getLevelName(self.value)


class AdapterConfig(DomainModel):
    """Startup configuration of the dialect adapter."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_mapping_file: Path
    log_level: LogLevel = LogLevel.INFO
    log_format: LogFormat = LogFormat.CONSOLE
    max_json_depth: int = Field(DEFAULT_MAX_JSON_DEPTH, ge=1)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @classmethod
    def from_env(
        cls,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> AdapterConfig:
        """Create AdapterConfig from environment variables.

        A ``.env`` file in the working directory is loaded first when reading
        the process environment. Passing ``environ`` skips that step.

        Raises:
            ConfigurationError: If a variable is missing or invalid
        """
        if environ is None:
            load_dotenv(find_dotenv(usecwd=True))
        env: Mapping[str, str] = os.environ if environ is None else environ

        mapping_file = _get_env_value(env, MAPPING_FILE_ENV, None)
        if mapping_file is None:
            raise ConfigurationError(
                f"{MAPPING_FILE_ENV} environment variable is required",
                details={"variable": MAPPING_FILE_ENV},
            )

        raw_depth = _get_env_value(env, MAX_JSON_DEPTH_ENV, DEFAULT_MAX_JSON_DEPTH)
        try:
            max_json_depth = int(raw_depth)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"{MAX_JSON_DEPTH_ENV} must be an integer, got '{raw_depth}'",
                details={"variable": MAX_JSON_DEPTH_ENV, "value": raw_depth},
            ) from None

        config: dict[str, Any] = {
            "model_mapping_file": mapping_file,
            "log_level": _get_env_value(env, LOG_LEVEL_ENV, LogLevel.INFO.value),
            "log_format": _get_env_value(env, LOG_FORMAT_ENV, LogFormat.CONSOLE.value),
            "max_json_depth": max_json_depth,
        }

        try:
            return cls.model_validate(config)
        except ValidationError as exc:
            errors = [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in exc.errors(include_url=False)
            ]
            logger.debug("Rejected adapter configuration: %s", errors)
            raise ConfigurationError(
                "Invalid adapter configuration",
                details={"errors": errors},
            ) from exc
