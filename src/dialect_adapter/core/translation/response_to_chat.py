"""
Response API -> Chat Completions translation.

Request field mappings:

- model -> model (direct copy)
- instructions -> leading system message (omitted when empty)
- input (string) -> single user message
- input (items) -> messages, order preserved
- max_output_tokens -> max_tokens
- text.format -> response_format; other ``text`` sub-keys are carried under ``text``
- temperature, top_p, stream, tools, tool_choice, metadata -> same name
- previous_response_id -> written under its own key
- unknown fields -> passed through verbatim. An unknown field named like a
  Chat field is read as that field on the Chat side unless a mapped value
  already claims the key.
"""

from __future__ import annotations

import copy
from typing import Any

from dialect_adapter.core.domain.dialects import (
    ResponseApiRequest,
    ResponseApiResponse,
)
from dialect_adapter.core.domain.translation_results import TranslationResult
from dialect_adapter.core.domain.translation_types import (
    TranslationDirection,
    TranslationOptions,
)
from dialect_adapter.core.translation.field_mapping import (
    COMMON_REQUEST_FIELDS,
    COMMON_RESPONSE_FIELDS,
    RESPONSE_ONLY_REQUEST_FIELDS,
    RESPONSE_ONLY_RESPONSE_FIELDS,
    RESPONSE_TO_CHAT_USAGE_KEYS,
    SYSTEM_ROLE,
    copy_fields,
    reattach_extensions,
    rename_field,
    rename_keys,
    write_unmapped,
)
from dialect_adapter.core.translation.validation import parse_payload

_DEFAULT_OPTIONS = TranslationOptions()

# incomplete_details.reason -> finish_reason
_INCOMPLETE_FINISH_REASONS: dict[str, str] = {
    "max_output_tokens": "length",
    "content_filter": "content_filter",
}

_TEXT_PART_TYPES = frozenset({"output_text", "text", "input_text"})


def response_to_chat(
    payload: Any, options: TranslationOptions = _DEFAULT_OPTIONS
) -> TranslationResult:
    """Translate a Response API request into a Chat Completions request.

    Raises:
        SchemaViolationError: If the payload is not a valid Response request
    """
    request, unknown = parse_payload(
        ResponseApiRequest, payload, strict=options.strict
    )

    messages: list[dict[str, Any]] = []
    if request.instructions:
        messages.append({"role": SYSTEM_ROLE, "content": request.instructions})
    if isinstance(request.input, str):
        if request.input:
            messages.append({"role": "user", "content": request.input})
    elif request.input:
        messages.extend(request.input)

    translated: dict[str, Any] = {"model": request.model, "messages": messages}
    copy_fields(request, translated, COMMON_REQUEST_FIELDS)
    rename_field(request, translated, "max_output_tokens", "max_tokens")

    unmapped: list[str] = []
    if request.has("text"):
        text = request.text
        if isinstance(text, dict) and "format" in text:
            translated["response_format"] = text["format"]
            rest = {key: value for key, value in text.items() if key != "format"}
            if rest:
                translated["text"] = rest
                unmapped.append("text")
        else:
            # No format to map; the whole object rides along for the way back
            translated["text"] = text
            unmapped.append("text")

    unmapped.extend(write_unmapped(request, translated, RESPONSE_ONLY_REQUEST_FIELDS))
    reattach_extensions(translated, request.extensions)

    return TranslationResult(
        direction=TranslationDirection.RESPONSE_TO_CHAT,
        translated=copy.deepcopy(translated),
        unknown=unknown,
        unmapped_fields=unmapped,
    )


def _extract_text_content(content: Any) -> str:
    """Concatenate the text parts of an output message's content."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            str(part.get("text") or "")
            for part in content
            if isinstance(part, dict) and part.get("type") in _TEXT_PART_TYPES
        )
    return ""


def _extract_refusal(content: Any) -> str:
    if not isinstance(content, list):
        return ""
    return "".join(
        str(part.get("refusal") or "")
        for part in content
        if isinstance(part, dict) and part.get("type") == "refusal"
    )


def _tool_call(item: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": item.get("call_id") or item.get("id"),
        "type": "function",
        "function": {
            "name": item.get("name"),
            "arguments": item.get("arguments", "{}"),
        },
    }


def response_to_chat_response(
    payload: Any, options: TranslationOptions = _DEFAULT_OPTIONS
) -> TranslationResult:
    """Translate a Response API response object into a Chat Completions body.

    All output messages collapse into a single choice: text parts are joined
    without a separator inside one item and with a newline across items.
    function_call items become the choice's tool calls. Other output item
    types have no Chat equivalent and are dropped; they are reported in
    ``unmapped_fields`` as ``output.<type>``.
    """
    response, unknown = parse_payload(
        ResponseApiResponse, payload, strict=options.strict
    )

    role = "assistant"
    texts: list[str] = []
    refusals: list[str] = []
    tool_calls: list[dict[str, Any]] = []
    unmapped: list[str] = []
    seen_role = False
    for item in response.output:
        item_type = item["type"]
        if item_type == "message":
            if not seen_role and isinstance(item.get("role"), str):
                role = item["role"]
                seen_role = True
            texts.append(_extract_text_content(item.get("content")))
            refusal = _extract_refusal(item.get("content"))
            if refusal:
                refusals.append(refusal)
        elif item_type == "function_call":
            tool_calls.append(_tool_call(item))
        elif f"output.{item_type}" not in unmapped:
            unmapped.append(f"output.{item_type}")

    content = "\n".join(text for text in texts if text)
    message: dict[str, Any] = {"role": role, "content": content or None}
    if refusals:
        message["refusal"] = "\n".join(refusals)
    if tool_calls:
        message["tool_calls"] = tool_calls

    translated: dict[str, Any] = {"object": "chat.completion"}
    copy_fields(response, translated, COMMON_RESPONSE_FIELDS)
    rename_field(response, translated, "created_at", "created")

    finish_reason = _finish_reason(response, bool(tool_calls), translated, unmapped)
    translated["choices"] = [
        {"index": 0, "message": message, "finish_reason": finish_reason}
    ]

    if response.has("usage"):
        usage = response.usage
        translated["usage"] = (
            rename_keys(usage, RESPONSE_TO_CHAT_USAGE_KEYS)
            if isinstance(usage, dict)
            else usage
        )

    unmapped.extend(write_unmapped(response, translated, RESPONSE_ONLY_RESPONSE_FIELDS))
    reattach_extensions(translated, response.extensions)

    return TranslationResult(
        direction=TranslationDirection.RESPONSE_TO_CHAT_RESPONSE,
        translated=copy.deepcopy(translated),
        unknown=unknown,
        unmapped_fields=unmapped,
    )


def _finish_reason(
    response: ResponseApiResponse,
    has_tool_calls: bool,
    translated: dict[str, Any],
    unmapped: list[str],
) -> str | None:
    """Derive the Chat finish_reason from the Response status.

    Statuses and incomplete reasons without a finish_reason equivalent are
    written under their own keys so the reverse direction can restore them.
    """
    status = response.status
    details = response.incomplete_details
    if status == "incomplete":
        reason = details.get("reason") if isinstance(details, dict) else None
        mapped = _INCOMPLETE_FINISH_REASONS.get(reason) if reason else None
        if mapped is not None:
            return mapped
        translated["status"] = status
        unmapped.append("status")
        if response.has("incomplete_details"):
            translated["incomplete_details"] = details
            unmapped.append("incomplete_details")
        return None
    if status == "completed":
        return "tool_calls" if has_tool_calls else "stop"
    if response.has("status"):
        translated["status"] = status
        unmapped.append("status")
    if response.has("incomplete_details"):
        translated["incomplete_details"] = details
        unmapped.append("incomplete_details")
    return None
