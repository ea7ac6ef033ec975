import json
import logging
from pathlib import Path
from typing import Any

import pytest
import structlog
from dialect_adapter.core.domain.api_type import ApiType
from dialect_adapter.core.routing.model_router import ModelRouter

CHAT_MODEL = "gpt-4o"
RESPONSE_MODEL = "o3-pro"


@pytest.fixture(autouse=True)
def _restore_logging() -> Any:
    """Undo logging configuration done by a test (the CLI configures logging)."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def model_mapping() -> dict[str, ApiType]:
    return {
        CHAT_MODEL: ApiType.CHAT_COMPLETIONS,
        RESPONSE_MODEL: ApiType.RESPONSE,
    }


@pytest.fixture
def router(model_mapping: dict[str, ApiType]) -> ModelRouter:
    return ModelRouter(model_mapping)


@pytest.fixture
def mapping_file(tmp_path: Path) -> Path:
    path = tmp_path / "models.json"
    path.write_text(
        json.dumps({CHAT_MODEL: "chat_completions", RESPONSE_MODEL: "response"}),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def chat_request() -> dict[str, Any]:
    return {
        "model": RESPONSE_MODEL,
        "messages": [
            {"role": "system", "content": "You are terse."},
            {"role": "user", "content": "Hello"},
        ],
        "temperature": 0.7,
        "max_tokens": 256,
        "top_p": 0.9,
        "stream": False,
    }


@pytest.fixture
def response_request() -> dict[str, Any]:
    return {
        "model": CHAT_MODEL,
        "instructions": "You are terse.",
        "input": [{"role": "user", "content": "Hello"}],
        "temperature": 0.7,
        "max_output_tokens": 256,
        "top_p": 0.9,
    }


@pytest.fixture
def chat_completion() -> dict[str, Any]:
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": CHAT_MODEL,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "Hi there"},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 9, "completion_tokens": 3, "total_tokens": 12},
    }


@pytest.fixture
def response_object() -> dict[str, Any]:
    return {
        "id": "resp_123",
        "object": "response",
        "created_at": 1700000000,
        "model": RESPONSE_MODEL,
        "status": "completed",
        "output": [
            {
                "type": "message",
                "id": "msg_1",
                "role": "assistant",
                "status": "completed",
                "content": [
                    {"type": "output_text", "text": "Hi there", "annotations": []}
                ],
            }
        ],
        "usage": {"input_tokens": 9, "output_tokens": 3, "total_tokens": 12},
    }
