# Services package

from .translation_logger import TranslationLogger
from .translation_service import TranslationService

__all__ = [
    "TranslationLogger",
    "TranslationService",
]
