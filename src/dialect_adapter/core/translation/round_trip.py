"""
Round-trip verification.

Translates a payload forward, translates the result back with the inverse
direction and compares the back-translated payload with the original. Both
sides are normalized first so that only the documented, meaning-preserving
foldings are tolerated:

- plain system messages fold into one leading system message (Chat) or into
  ``instructions`` (Response)
- a string ``input`` is a single user item
- empty ``instructions`` or ``input`` count as absent
- ``max_completion_tokens`` is an alias of ``max_tokens``
- response bodies compare their message text, refusals and tool calls, not
  item ids, per-item status or the way text is split into parts
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from dialect_adapter.core.common.exceptions import AdapterError
from dialect_adapter.core.domain.api_type import ApiType
from dialect_adapter.core.domain.translation_results import (
    RoundTripTestResult,
    SemanticEquivalence,
)
from dialect_adapter.core.domain.translation_types import (
    PayloadKind,
    TranslationDirection,
    TranslationOptions,
)
from dialect_adapter.core.interfaces.field_translator_interface import (
    IFieldTranslator,
)
from dialect_adapter.core.translation.field_mapping import (
    INSTRUCTIONS_SEPARATOR,
    SYSTEM_ROLE,
    system_text,
)
from dialect_adapter.core.translation.field_translator import FieldTranslator

logger = logging.getLogger(__name__)

# Top-level keys carrying the conversation content of each payload shape
_CONTENT_KEYS: dict[tuple[ApiType, PayloadKind], frozenset[str]] = {
    (ApiType.CHAT_COMPLETIONS, PayloadKind.REQUEST): frozenset({"messages"}),
    (ApiType.RESPONSE, PayloadKind.REQUEST): frozenset({"instructions", "input"}),
    (ApiType.CHAT_COMPLETIONS, PayloadKind.RESPONSE): frozenset({"choices"}),
    (ApiType.RESPONSE, PayloadKind.RESPONSE): frozenset({"output"}),
}

_TEXT_PART_TYPES = frozenset({"output_text", "text", "input_text"})


class RoundTripVerifier:
    """Checks that a payload survives a forward and inverse translation."""

    def __init__(self, translator: IFieldTranslator | None = None) -> None:
        self._translator: IFieldTranslator = translator or FieldTranslator()

    def verify(
        self,
        payload: Any,
        forward_direction: TranslationDirection,
        options: TranslationOptions | None = None,
    ) -> RoundTripTestResult:
        """Translate ``payload`` forward and back and compare the two ends.

        Translator failures in either leg are reported as differences.
        """
        direction = TranslationDirection(forward_direction)

        try:
            forward = self._translator.translate(payload, direction, options)
        except AdapterError as exc:
            return _failed(payload, None, None, f"forward translation failed: {exc}")

        try:
            back = self._translator.translate(
                forward.translated, direction.inverse, options
            )
        except AdapterError as exc:
            return _failed(
                payload,
                forward.translated,
                None,
                f"inverse translation failed: {exc}",
            )

        shape = (direction.source, direction.payload_kind)
        expected = normalize(payload, *shape)
        actual = normalize(back.translated, *shape)

        differences: list[str] = []
        _compare(expected, actual, "", differences)
        if differences:
            logger.debug(
                "Round trip %s produced %d difference(s)",
                direction.value,
                len(differences),
            )

        return RoundTripTestResult(
            success=not differences,
            original=payload,
            translated=forward.translated,
            back_translated=back.translated,
            differences=differences,
            semantic_equivalence=_equivalence(differences, _CONTENT_KEYS[shape]),
        )


def _failed(
    original: Any, translated: Any, back_translated: Any, reason: str
) -> RoundTripTestResult:
    return RoundTripTestResult(
        success=False,
        original=original,
        translated=translated,
        back_translated=back_translated,
        differences=[reason],
        semantic_equivalence=SemanticEquivalence(
            model=False, content=False, parameters=False
        ),
    )


def _equivalence(differences: list[str], content_keys: frozenset[str]) -> SemanticEquivalence:
    roots = {_root_key(path) for path in differences}
    return SemanticEquivalence(
        model="model" not in roots,
        content=not (roots & content_keys),
        parameters=not (roots - content_keys - {"model"}),
    )


def _root_key(path: str) -> str:
    for index, char in enumerate(path):
        if char in ".[:":
            return path[:index]
    return path


def _compare(expected: Any, actual: Any, path: str, differences: list[str]) -> None:
    """Append one entry per differing key path to ``differences``."""
    if isinstance(expected, dict) and isinstance(actual, dict):
        for key in expected:
            child = f"{path}.{key}" if path else str(key)
            if key not in actual:
                differences.append(f"{child}: missing after round trip")
            else:
                _compare(expected[key], actual[key], child, differences)
        for key in actual:
            if key not in expected:
                child = f"{path}.{key}" if path else str(key)
                differences.append(f"{child}: unexpected after round trip")
        return

    if isinstance(expected, list) and isinstance(actual, list):
        if len(expected) != len(actual):
            differences.append(
                f"{path or '<root>'}: length {len(expected)} != {len(actual)}"
            )
        for index, (left, right) in enumerate(zip(expected, actual)):
            _compare(left, right, f"{path}[{index}]", differences)
        return

    if type(expected) is not type(actual) or expected != actual:
        differences.append(f"{path or '<root>'}: {expected!r} != {actual!r}")


def normalize(payload: Any, dialect: ApiType, payload_kind: PayloadKind) -> Any:
    """Return a canonical copy of ``payload`` for round-trip comparison."""
    if not isinstance(payload, dict):
        return payload
    data = copy.deepcopy(payload)
    if payload_kind is PayloadKind.REQUEST:
        if dialect is ApiType.CHAT_COMPLETIONS:
            return _normalize_chat_request(data)
        return _normalize_response_request(data)
    if dialect is ApiType.CHAT_COMPLETIONS:
        return _normalize_chat_response(data)
    return _normalize_response_body(data)


def _normalize_chat_request(data: dict[str, Any]) -> dict[str, Any]:
    messages = data.get("messages")
    if isinstance(messages, list):
        folded: list[str] = []
        rest: list[Any] = []
        for message in messages:
            text = system_text(message) if isinstance(message, dict) else None
            if text is not None:
                folded.append(text)
            else:
                rest.append(message)
        if folded:
            rest.insert(
                0,
                {"role": SYSTEM_ROLE, "content": INSTRUCTIONS_SEPARATOR.join(folded)},
            )
        data["messages"] = rest
    if "max_tokens" not in data and "max_completion_tokens" in data:
        data["max_tokens"] = data.pop("max_completion_tokens")
    return data


def _normalize_response_request(data: dict[str, Any]) -> dict[str, Any]:
    parts: list[str] = []
    instructions = data.pop("instructions", None)
    if isinstance(instructions, str) and instructions:
        parts.append(instructions)
    elif instructions is not None and instructions != "":
        data["instructions"] = instructions

    items: list[Any] = []
    raw_input = data.pop("input", None)
    if isinstance(raw_input, str):
        if raw_input:
            items.append({"role": "user", "content": raw_input})
    elif isinstance(raw_input, list):
        for item in raw_input:
            text = system_text(item) if isinstance(item, dict) else None
            if text is not None:
                parts.append(text)
            else:
                items.append(item)

    if parts:
        data["instructions"] = INSTRUCTIONS_SEPARATOR.join(parts)
    if items:
        data["input"] = items
    return data


def _text_of(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            str(part.get("text") or "")
            for part in content
            if isinstance(part, dict) and part.get("type") in _TEXT_PART_TYPES
        )
    return ""


def _normalize_chat_response(data: dict[str, Any]) -> dict[str, Any]:
    data.setdefault("object", "chat.completion")
    choices = data.get("choices")
    if not isinstance(choices, list):
        return data

    normalized: list[Any] = []
    for index, choice in enumerate(choices):
        if not isinstance(choice, dict) or not isinstance(choice.get("message"), dict):
            normalized.append(choice)
            continue
        message = choice["message"]
        canonical: dict[str, Any] = {
            "role": message.get("role", "assistant"),
            "content": _text_of(message.get("content")) or None,
        }
        if message.get("refusal"):
            canonical["refusal"] = message["refusal"]
        if message.get("tool_calls"):
            canonical["tool_calls"] = [
                {
                    "id": call.get("id"),
                    "type": "function",
                    "function": {
                        "name": (call.get("function") or {}).get("name"),
                        "arguments": (call.get("function") or {}).get(
                            "arguments", "{}"
                        ),
                    },
                }
                for call in message["tool_calls"]
            ]
        entry: dict[str, Any] = {
            key: value
            for key, value in choice.items()
            if key not in ("index", "message", "finish_reason") and value is not None
        }
        entry["index"] = choice.get("index", index)
        entry["message"] = canonical
        entry["finish_reason"] = choice.get("finish_reason")
        normalized.append(entry)
    data["choices"] = normalized
    return data


def _normalize_response_body(data: dict[str, Any]) -> dict[str, Any]:
    data.setdefault("object", "response")
    output = data.get("output")
    if not isinstance(output, list):
        return data

    role: str | None = None
    texts: list[str] = []
    refusals: list[str] = []
    others: list[Any] = []
    for item in output:
        if not isinstance(item, dict):
            others.append(item)
        elif item.get("type") == "message":
            role = role or item.get("role")
            texts.append(_text_of(item.get("content")))
            content = item.get("content")
            if isinstance(content, list):
                refusals.extend(
                    str(part.get("refusal"))
                    for part in content
                    if isinstance(part, dict)
                    and part.get("type") == "refusal"
                    and part.get("refusal")
                )
        elif item.get("type") == "function_call":
            others.append(
                {
                    "type": "function_call",
                    "call_id": item.get("call_id") or item.get("id"),
                    "name": item.get("name"),
                    "arguments": item.get("arguments", "{}"),
                }
            )
        else:
            others.append(item)

    canonical: list[Any] = []
    text = INSTRUCTIONS_SEPARATOR.join(t for t in texts if t)
    if text or refusals:
        message: dict[str, Any] = {"type": "message", "role": role or "assistant"}
        if text:
            message["text"] = text
        if refusals:
            message["refusal"] = INSTRUCTIONS_SEPARATOR.join(refusals)
        canonical.append(message)
    canonical.extend(others)
    data["output"] = canonical
    return data


def format_round_trip_result(result: RoundTripTestResult) -> str:
    """Render a round-trip result as a short human-readable report."""

    def mark(ok: bool) -> str:
        return "ok" if ok else "MISMATCH"

    equivalence = result.semantic_equivalence
    lines = [
        "PASS" if result.success else "FAIL",
        f"  Model: {mark(equivalence.model)}",
        f"  Content: {mark(equivalence.content)}",
        f"  Parameters: {mark(equivalence.parameters)}",
    ]
    if result.differences:
        lines.append("  Differences:")
        lines.extend(f"    - {difference}" for difference in result.differences)
    return "\n".join(lines)
