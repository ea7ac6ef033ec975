from __future__ import annotations

from enum import Enum


class ApiType(str, Enum):
    """Enum for the supported request/response dialects."""

    RESPONSE = "response"
    CHAT_COMPLETIONS = "chat_completions"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]
