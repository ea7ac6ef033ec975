# Configuration package

from dialect_adapter.core.config.app_config import AdapterConfig, LogLevel
from dialect_adapter.core.config.model_mapping import (
    build_model_router,
    load_model_mapping,
    load_model_mapping_file,
    validate_model_mapping,
)

__all__ = [
    "AdapterConfig",
    "LogLevel",
    "build_model_router",
    "load_model_mapping",
    "load_model_mapping_file",
    "validate_model_mapping",
]
