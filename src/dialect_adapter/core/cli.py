"""
Diagnostic command line interface.

Subcommands:

- ``validate-mapping FILE``: load and validate a model mapping file
- ``translate``: run one payload through the translation service
- ``round-trip``: translate a payload forward and back and report differences
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from dialect_adapter.core.common.exceptions import AdapterError
from dialect_adapter.core.common.structlog_config import LogFormat, configure_logging
from dialect_adapter.core.config.app_config import DEFAULT_MAX_JSON_DEPTH, LogLevel
from dialect_adapter.core.config.model_mapping import load_model_mapping
from dialect_adapter.core.domain.api_type import ApiType
from dialect_adapter.core.domain.translation_types import (
    PayloadKind,
    TranslationDirection,
)
from dialect_adapter.core.routing.model_router import ModelRouter
from dialect_adapter.core.services.translation_service import TranslationService
from dialect_adapter.core.translation.round_trip import (
    RoundTripVerifier,
    format_round_trip_result,
)

logger = logging.getLogger(__name__)


class PayloadReadError(Exception):
    """Raised when a payload argument cannot be read or decoded."""


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dialect-adapter",
        description="Translate payloads between the Chat Completions and Response dialects",
    )
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        default=LogLevel.WARNING.value,
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-format",
        choices=[fmt.value for fmt in LogFormat],
        default=LogFormat.CONSOLE.value,
        help="Log output format (default: console)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser(
        "validate-mapping", help="Validate a model mapping file"
    )
    validate.add_argument("file", help="JSON or YAML model mapping file")

    translate = subparsers.add_parser(
        "translate", help="Translate a payload through the full service"
    )
    translate.add_argument(
        "--mapping", required=True, help="JSON or YAML model mapping file"
    )
    translate.add_argument(
        "--client",
        required=True,
        choices=ApiType.values(),
        help="Dialect the client speaks",
    )
    translate.add_argument(
        "--kind",
        choices=[kind.value for kind in PayloadKind],
        default=PayloadKind.REQUEST.value,
        help="Whether the payload is a request or a response body (default: request)",
    )
    translate.add_argument(
        "--model", help="Routing key, defaults to the payload's model field"
    )
    translate.add_argument(
        "--strict",
        action="store_true",
        help="Reject unknown fields instead of carrying them through",
    )
    translate.add_argument(
        "--max-json-depth",
        type=int,
        default=DEFAULT_MAX_JSON_DEPTH,
        help=f"Maximum payload nesting depth (default: {DEFAULT_MAX_JSON_DEPTH})",
    )
    translate.add_argument("payload", help="JSON payload file, or - for stdin")

    round_trip = subparsers.add_parser(
        "round-trip", help="Translate a payload forward and back and compare"
    )
    round_trip.add_argument(
        "--direction",
        required=True,
        choices=[direction.value for direction in TranslationDirection],
        help="Forward translation direction",
    )
    round_trip.add_argument("payload", help="JSON payload file, or - for stdin")

    return parser


def parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_cli_parser().parse_args(argv)


def _read_payload(source: str) -> Any:
    try:
        text = sys.stdin.read() if source == "-" else Path(source).read_text(
            encoding="utf-8"
        )
    except OSError as exc:
        raise PayloadReadError(f"Cannot read payload {source}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise PayloadReadError(f"Invalid JSON payload: {exc}") from exc


def _dump(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _validate_mapping(args: argparse.Namespace) -> int:
    mapping = load_model_mapping(args.file)
    print(f"{len(mapping)} model(s) mapped:")
    for model, api_type in mapping.items():
        print(f"  {model} -> {api_type.value}")
    return 0


def _translate(args: argparse.Namespace) -> int:
    payload = _read_payload(args.payload)
    service = TranslationService(
        ModelRouter(load_model_mapping(args.mapping)),
        max_json_depth=args.max_json_depth,
    )
    outcome = service.translate(
        payload,
        ApiType(args.client),
        PayloadKind(args.kind),
        model=args.model,
        strict=args.strict,
    )
    if not outcome.success:
        kind = outcome.error_kind.value if outcome.error_kind else "error"
        print(f"Translation failed ({kind}): {outcome.error}", file=sys.stderr)
        return 1
    print(_dump(outcome.payload))
    return 0


def _round_trip(args: argparse.Namespace) -> int:
    payload = _read_payload(args.payload)
    result = RoundTripVerifier().verify(payload, TranslationDirection(args.direction))
    print(format_round_trip_result(result))
    return 0 if result.success else 1


_COMMANDS = {
    "validate-mapping": _validate_mapping,
    "translate": _translate,
    "round-trip": _round_trip,
}


def main(argv: list[str] | None = None) -> int:
    args = parse_cli_args(argv)
    configure_logging(args.log_level, args.log_format)

    try:
        return _COMMANDS[args.command](args)
    except (AdapterError, PayloadReadError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
