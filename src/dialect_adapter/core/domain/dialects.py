"""Typed shapes of the two request/response dialects.

Each model declares the known fields of one dialect. Fields outside that set
are never validated or interpreted; they travel verbatim in the explicit
``extensions`` map.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import ConfigDict, Field, field_validator, model_validator

from dialect_adapter.core.domain.api_type import ApiType
from dialect_adapter.core.domain.base import ValueObject
from dialect_adapter.core.domain.translation_types import PayloadKind

KNOWN_MESSAGE_ROLES: tuple[str, ...] = (
    "system",
    "user",
    "assistant",
    "developer",
    "tool",
)

Number = float | int


def validate_message_item(item: Any, index: int, *, label: str = "Message") -> None:
    """Check the role/content shape of one message or input item.

    Raises:
        ValueError: If the item is not a role/content object
    """
    if not isinstance(item, dict):
        raise ValueError(f"{label} at index {index} must be an object")

    role = item.get("role")
    if not isinstance(role, str):
        raise ValueError(f"{label} at index {index} must have a string role")
    if role not in KNOWN_MESSAGE_ROLES:
        raise ValueError(
            f"Invalid role '{role}' at index {index}. "
            f"Must be one of: {', '.join(KNOWN_MESSAGE_ROLES)}"
        )

    content = item.get("content")
    if content is None and item.get("tool_calls"):
        # Assistant turns that only call tools carry no text
        return
    if "content" not in item:
        raise ValueError(f"{label} at index {index} must have a content field")
    if not isinstance(content, str | list):
        raise ValueError(
            f"{label} content must be a string or a list of parts, "
            f"got {type(content).__name__} at index {index}"
        )


class DialectPayload(ValueObject):
    """Base for dialect payloads with an explicit extension map."""

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    dialect: ClassVar[ApiType]
    payload_kind: ClassVar[PayloadKind]

    extensions: dict[str, Any] = Field(
        default_factory=dict,
        description="Fields outside the known schema, carried verbatim",
    )

    @classmethod
    def known_fields(cls) -> frozenset[str]:
        return frozenset(name for name in cls.model_fields if name != "extensions")

    def has(self, name: str) -> bool:
        return name in self.model_fields_set


class ChatCompletionsRequest(DialectPayload):
    """A Chat Completions request (message-list based)."""

    dialect: ClassVar[ApiType] = ApiType.CHAT_COMPLETIONS
    payload_kind: ClassVar[PayloadKind] = PayloadKind.REQUEST

    model: str = Field(..., min_length=1, description="The model to use")
    messages: list[dict[str, Any]] = Field(
        ..., description="The conversation messages"
    )
    temperature: Number | None = None
    max_tokens: int | None = None
    max_completion_tokens: int | None = None
    top_p: Number | None = None
    frequency_penalty: Number | None = None
    presence_penalty: Number | None = None
    n: int | None = None
    stream: bool | None = None
    tools: list[dict[str, Any]] | None = None
    tool_choice: str | dict[str, Any] | None = None
    response_format: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
    stop: str | list[str] | None = None
    logprobs: bool | None = None
    top_logprobs: int | None = None

    @field_validator("messages")
    @classmethod
    def validate_messages(cls, v: list[dict[str, Any]]) -> list[dict[str, Any]]:
        if not v:
            raise ValueError(
                "Messages array is required and must contain at least one message"
            )
        for index, message in enumerate(v):
            validate_message_item(message, index)
        return v


class ResponseApiRequest(DialectPayload):
    """A Response API request (single input plus instructions)."""

    dialect: ClassVar[ApiType] = ApiType.RESPONSE
    payload_kind: ClassVar[PayloadKind] = PayloadKind.REQUEST

    model: str = Field(..., min_length=1, description="The model to use")
    input: str | list[dict[str, Any]] | None = None
    instructions: str | None = None
    temperature: Number | None = None
    max_output_tokens: int | None = None
    top_p: Number | None = None
    stream: bool | None = None
    tools: list[dict[str, Any]] | None = None
    tool_choice: str | dict[str, Any] | None = None
    text: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
    previous_response_id: str | None = None

    @field_validator("input")
    @classmethod
    def validate_input(
        cls, v: str | list[dict[str, Any]] | None
    ) -> str | list[dict[str, Any]] | None:
        if isinstance(v, list):
            for index, item in enumerate(v):
                validate_message_item(item, index, label="Input item")
        return v

    @model_validator(mode="after")
    def require_input_or_instructions(self) -> ResponseApiRequest:
        if not self.input and not self.instructions:
            raise ValueError(
                "Response request requires a non-empty input or instructions"
            )
        return self


class ChatCompletionsResponse(DialectPayload):
    """A Chat Completions response body."""

    dialect: ClassVar[ApiType] = ApiType.CHAT_COMPLETIONS
    payload_kind: ClassVar[PayloadKind] = PayloadKind.RESPONSE

    id: str = Field(..., description="Unique identifier for the completion")
    object: str = Field("chat.completion", description="The object type")
    created: int | None = None
    model: str = Field(..., min_length=1)
    choices: list[dict[str, Any]] = Field(..., description="The generated choices")
    usage: dict[str, Any] | None = None
    system_fingerprint: str | None = None
    service_tier: str | None = None

    @field_validator("choices")
    @classmethod
    def validate_choices(cls, v: list[dict[str, Any]]) -> list[dict[str, Any]]:
        if not v:
            raise ValueError("At least one choice is required")
        for index, choice in enumerate(v):
            message = choice.get("message")
            if not isinstance(message, dict):
                raise ValueError(f"Choice at index {index} must carry a message")
            # Refusals and tool-only turns leave content null, so only the role is checked
            if "role" in message and not isinstance(message["role"], str):
                raise ValueError(f"Choice message at index {index} has a non-string role")
        return v


class ResponseApiResponse(DialectPayload):
    """A Response API response object."""

    dialect: ClassVar[ApiType] = ApiType.RESPONSE
    payload_kind: ClassVar[PayloadKind] = PayloadKind.RESPONSE

    id: str = Field(..., description="Unique identifier for the response")
    object: str = Field("response", description="The object type")
    created_at: Number | None = None
    model: str = Field(..., min_length=1)
    status: str | None = None
    output: list[dict[str, Any]] = Field(..., description="The output items")
    usage: dict[str, Any] | None = None
    incomplete_details: dict[str, Any] | None = None
    error: dict[str, Any] | None = None
    service_tier: str | None = None

    @field_validator("output")
    @classmethod
    def validate_output(cls, v: list[dict[str, Any]]) -> list[dict[str, Any]]:
        for index, item in enumerate(v):
            if not isinstance(item.get("type"), str):
                raise ValueError(f"Output item at index {index} must have a type")
        return v

