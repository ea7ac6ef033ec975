"""
Shared field mapping helpers for the translators.

The mapping tables of both directions are expressed through these helpers so
that the direct pass-through fields, the renamed fields and the fields that
only one dialect knows stay in one place.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from dialect_adapter.core.domain.dialects import DialectPayload

# Same name and meaning in both request dialects
COMMON_REQUEST_FIELDS: tuple[str, ...] = (
    "temperature",
    "top_p",
    "stream",
    "tools",
    "tool_choice",
    "metadata",
)

# Known Chat request fields without a Response equivalent
CHAT_ONLY_REQUEST_FIELDS: tuple[str, ...] = (
    "frequency_penalty",
    "presence_penalty",
    "n",
    "stop",
    "logprobs",
    "top_logprobs",
)

# Known Response request fields without a Chat equivalent
RESPONSE_ONLY_REQUEST_FIELDS: tuple[str, ...] = ("previous_response_id",)

COMMON_RESPONSE_FIELDS: tuple[str, ...] = ("id", "model", "service_tier")
CHAT_ONLY_RESPONSE_FIELDS: tuple[str, ...] = ("system_fingerprint",)
RESPONSE_ONLY_RESPONSE_FIELDS: tuple[str, ...] = ("error",)

SYSTEM_ROLE = "system"
INSTRUCTIONS_SEPARATOR = "\n"

CHAT_TO_RESPONSE_USAGE_KEYS: dict[str, str] = {
    "prompt_tokens": "input_tokens",
    "completion_tokens": "output_tokens",
    "total_tokens": "total_tokens",
    "prompt_tokens_details": "input_tokens_details",
    "completion_tokens_details": "output_tokens_details",
}
RESPONSE_TO_CHAT_USAGE_KEYS: dict[str, str] = {
    value: key for key, value in CHAT_TO_RESPONSE_USAGE_KEYS.items()
}


def copy_fields(
    source: DialectPayload, target: dict[str, Any], names: Iterable[str]
) -> None:
    """Copy fields present on ``source`` into ``target`` under the same name."""
    for name in names:
        if source.has(name):
            target[name] = getattr(source, name)


def rename_field(
    source: DialectPayload, target: dict[str, Any], name: str, new_name: str
) -> bool:
    if not source.has(name):
        return False
    target[new_name] = getattr(source, name)
    return True


def write_unmapped(
    source: DialectPayload, target: dict[str, Any], names: Iterable[str]
) -> list[str]:
    """Write known source fields with no destination equivalent into ``target``.

    The destination does not know these keys, so they land in its extension
    bag under their original name and a reverse translation restores them.

    Returns:
        The names that were written
    """
    written: list[str] = []
    for name in names:
        if source.has(name):
            target[name] = getattr(source, name)
            written.append(name)
    return written


def reattach_extensions(
    target: dict[str, Any], extensions: Mapping[str, Any]
) -> list[str]:
    """Reattach source extension entries to the destination payload verbatim.

    Natively mapped destination values win over an extension entry with the
    same key.

    Returns:
        The extension keys that were reattached
    """
    reattached: list[str] = []
    for key, value in extensions.items():
        if key not in target:
            target[key] = value
            reattached.append(key)
    return reattached


def rename_keys(data: Mapping[str, Any], renames: Mapping[str, str]) -> dict[str, Any]:
    """Rename the keys listed in ``renames``; other keys are kept as they are."""
    return {renames.get(key, key): value for key, value in data.items()}


def system_text(message: Mapping[str, Any]) -> str | None:
    """Return the text of a system message that can fold into instructions.

    Only plain ``{role, content}`` messages with string content fold; anything
    carrying structured content or extra keys stays in the input list.
    """
    if message.get("role") != SYSTEM_ROLE or set(message) - {"role", "content"}:
        return None
    content = message.get("content")
    return content if isinstance(content, str) and content else None
