# Routing package

from .direction_resolver import resolve_direction
from .model_router import ModelRouter

__all__ = ["ModelRouter", "resolve_direction"]
