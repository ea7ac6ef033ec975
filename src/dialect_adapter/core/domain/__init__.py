# Domain package

from .api_type import ApiType
from .dialects import (
    ChatCompletionsRequest,
    ChatCompletionsResponse,
    ResponseApiRequest,
    ResponseApiResponse,
)

__all__ = [
    "ApiType",
    "ChatCompletionsRequest",
    "ChatCompletionsResponse",
    "ResponseApiRequest",
    "ResponseApiResponse",
]
