"""
Chat Completions -> Response API translation.

Request field mappings:

- model -> model (direct copy)
- messages[role=system] -> instructions (joined with newlines, in order)
- messages[role!=system] -> input (order preserved, items kept as they are)
- max_tokens -> max_output_tokens (falls back to max_completion_tokens)
- response_format -> text.format
- temperature, top_p, stream, tools, tool_choice, metadata -> same name
- frequency_penalty, presence_penalty, n, stop, logprobs, top_logprobs ->
  written under their own key so a reverse translation restores them
- unknown fields -> passed through verbatim. An unknown field named like a
  Response field (for example ``instructions``) is read as that field on the
  Response side unless a mapped value already claims the key.

Response-body mappings mirror the request table: choices become output items,
finish_reason becomes status and usage keys are renamed.
"""

from __future__ import annotations

import copy
from typing import Any

from dialect_adapter.core.domain.dialects import (
    ChatCompletionsRequest,
    ChatCompletionsResponse,
)
from dialect_adapter.core.domain.translation_results import TranslationResult
from dialect_adapter.core.domain.translation_types import (
    TranslationDirection,
    TranslationOptions,
)
from dialect_adapter.core.translation.field_mapping import (
    CHAT_ONLY_REQUEST_FIELDS,
    CHAT_ONLY_RESPONSE_FIELDS,
    CHAT_TO_RESPONSE_USAGE_KEYS,
    COMMON_REQUEST_FIELDS,
    COMMON_RESPONSE_FIELDS,
    INSTRUCTIONS_SEPARATOR,
    copy_fields,
    reattach_extensions,
    rename_field,
    rename_keys,
    system_text,
    write_unmapped,
)
from dialect_adapter.core.translation.validation import parse_payload

_DEFAULT_OPTIONS = TranslationOptions()

# finish_reason -> (status, incomplete_details.reason)
_FINISH_REASON_STATUS: dict[str, tuple[str, str | None]] = {
    "stop": ("completed", None),
    "tool_calls": ("completed", None),
    "function_call": ("completed", None),
    "length": ("incomplete", "max_output_tokens"),
    "content_filter": ("incomplete", "content_filter"),
}


def chat_to_response(
    payload: Any, options: TranslationOptions = _DEFAULT_OPTIONS
) -> TranslationResult:
    """Translate a Chat Completions request into a Response API request.

    Args:
        payload: The Chat Completions request payload
        options: Translation options

    Returns:
        The translated request and the field diagnostics

    Raises:
        SchemaViolationError: If the payload is not a valid Chat request
    """
    request, unknown = parse_payload(
        ChatCompletionsRequest, payload, strict=options.strict
    )

    instructions: list[str] = []
    input_items: list[dict[str, Any]] = []
    for message in request.messages:
        text = system_text(message)
        if text is not None:
            instructions.append(text)
        else:
            input_items.append(message)

    translated: dict[str, Any] = {"model": request.model}
    if instructions:
        translated["instructions"] = INSTRUCTIONS_SEPARATOR.join(instructions)
    if input_items:
        translated["input"] = input_items

    copy_fields(request, translated, COMMON_REQUEST_FIELDS)

    unmapped: list[str] = []
    if not rename_field(request, translated, "max_tokens", "max_output_tokens"):
        rename_field(request, translated, "max_completion_tokens", "max_output_tokens")
    elif request.has("max_completion_tokens"):
        unmapped.extend(write_unmapped(request, translated, ["max_completion_tokens"]))

    if request.has("response_format"):
        carried_text = request.extensions.get("text")
        text: dict[str, Any] = (
            dict(carried_text) if isinstance(carried_text, dict) else {}
        )
        text["format"] = request.response_format
        translated["text"] = text

    unmapped.extend(write_unmapped(request, translated, CHAT_ONLY_REQUEST_FIELDS))
    reattach_extensions(translated, request.extensions)

    return TranslationResult(
        direction=TranslationDirection.CHAT_TO_RESPONSE,
        translated=copy.deepcopy(translated),
        unknown=unknown,
        unmapped_fields=unmapped,
    )


def _output_content(message: dict[str, Any]) -> list[dict[str, Any]]:
    parts: list[dict[str, Any]] = []
    content = message.get("content")
    if isinstance(content, str) and content:
        parts.append({"type": "output_text", "text": content, "annotations": []})
    elif isinstance(content, list):
        for part in content:
            if isinstance(part, dict) and part.get("type") == "text":
                parts.append(
                    {
                        "type": "output_text",
                        "text": part.get("text", ""),
                        "annotations": [],
                    }
                )
            else:
                parts.append(part)
    refusal = message.get("refusal")
    if isinstance(refusal, str) and refusal:
        parts.append({"type": "refusal", "refusal": refusal})
    return parts


def _function_call_item(tool_call: dict[str, Any]) -> dict[str, Any]:
    function = tool_call.get("function") or {}
    return {
        "type": "function_call",
        "call_id": tool_call.get("id"),
        "name": function.get("name"),
        "arguments": function.get("arguments", "{}"),
        "status": "completed",
    }


def chat_response_to_response(
    payload: Any, options: TranslationOptions = _DEFAULT_OPTIONS
) -> TranslationResult:
    """Translate a Chat Completions response body into a Response API object.

    Every choice contributes one output message (when it has content) followed
    by one function_call item per tool call. The status is derived from the
    first choice's finish_reason.
    """
    response, unknown = parse_payload(
        ChatCompletionsResponse, payload, strict=options.strict
    )

    output: list[dict[str, Any]] = []
    for choice in response.choices:
        message = choice["message"]
        parts = _output_content(message)
        if parts:
            output.append(
                {
                    "type": "message",
                    "role": message.get("role", "assistant"),
                    "status": "completed",
                    "content": parts,
                }
            )
        for tool_call in message.get("tool_calls") or []:
            output.append(_function_call_item(tool_call))

    translated: dict[str, Any] = {"object": "response"}
    copy_fields(response, translated, COMMON_RESPONSE_FIELDS)
    rename_field(response, translated, "created", "created_at")
    translated["output"] = output

    finish_reason = response.choices[0].get("finish_reason")
    if finish_reason is not None:
        status, reason = _FINISH_REASON_STATUS.get(finish_reason, ("completed", None))
        translated["status"] = status
        if reason is not None:
            translated["incomplete_details"] = {"reason": reason}

    if response.has("usage"):
        usage = response.usage
        translated["usage"] = (
            rename_keys(usage, CHAT_TO_RESPONSE_USAGE_KEYS)
            if isinstance(usage, dict)
            else usage
        )

    unmapped = write_unmapped(response, translated, CHAT_ONLY_RESPONSE_FIELDS)
    reattach_extensions(translated, response.extensions)

    return TranslationResult(
        direction=TranslationDirection.CHAT_TO_RESPONSE_RESPONSE,
        translated=copy.deepcopy(translated),
        unknown=unknown,
        unmapped_fields=unmapped,
    )
