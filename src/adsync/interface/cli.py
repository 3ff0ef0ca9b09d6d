"""CLI commands for previewing campaign sets and inspecting ad types."""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..config.runtime import get_settings
from ..domain.field_validator import validate_ad_type
from ..models.hierarchy import SyncPreviewRequest
from ..wiring import build_registry, build_sync_preview_service
from .observability import configure_logging, log_command

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_BLOCKED = 2


def load_json_object(path: Path) -> dict[str, Any]:
    """Read a JSON object from ``path``. Raises OSError / JSONDecodeError / ValueError."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return raw


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def _cmd_preview(args: argparse.Namespace) -> int:
    payload = load_json_object(args.file)
    if args.platforms:
        payload["selectedPlatforms"] = [p for p in args.platforms.split(",") if p.strip()]
    if args.threshold is not None:
        payload["skipRateThreshold"] = args.threshold
    request = SyncPreviewRequest.from_payload(payload)
    preview = build_sync_preview_service().preview(request)
    _print_json(preview.to_dict())
    return EXIT_OK if preview.can_proceed else EXIT_BLOCKED


def _cmd_ad_types(args: argparse.Namespace) -> int:
    registry = build_registry()
    definitions = registry.get_by_platform(args.platform) if args.platform else registry.all()
    if args.category:
        definitions = [d for d in definitions if d.category == args.category]
    for d in definitions:
        print(f"{d.platform}\t{d.id}\t{d.category}\t{d.name}")
    return EXIT_OK


def _cmd_validate(args: argparse.Namespace) -> int:
    data = load_json_object(args.file)
    result = validate_ad_type(
        build_registry(),
        args.platform,
        args.ad_type,
        data,
        url_schemes=get_settings().strict_url_schemes,
    )
    _print_json(result.to_dict())
    return EXIT_OK if result.valid else EXIT_BLOCKED


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="adsync", description="Validate ad campaign sets before platform sync")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Preview command
    preview_parser = subparsers.add_parser("preview", help="Classify every ad of a campaign set")
    preview_parser.add_argument("--file", type=Path, required=True, help="Path to a sync preview request JSON file")
    preview_parser.add_argument(
        "--platforms",
        type=str,
        default=None,
        help="Comma-separated platforms, overriding the request (e.g. google,reddit)",
    )
    preview_parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Skip rate (percent) above which a warning is emitted",
    )

    # Ad types command
    types_parser = subparsers.add_parser("ad-types", help="List registered ad types")
    types_parser.add_argument("--platform", type=str, default=None, help="Only this platform")
    types_parser.add_argument(
        "--category",
        type=str,
        default=None,
        choices=["paid", "organic", "promoted"],
        help="Only this category",
    )

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate ad data against an ad type")
    validate_parser.add_argument("--platform", type=str, required=True, help="Platform name")
    validate_parser.add_argument("--ad-type", type=str, required=True, help="Ad type id (e.g. responsive-search)")
    validate_parser.add_argument("--file", type=Path, required=True, help="Path to a JSON object of field values")

    return parser


_COMMANDS = {
    "preview": _cmd_preview,
    "ad-types": _cmd_ad_types,
    "validate": _cmd_validate,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(get_settings().log_level)

    command = _COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return EXIT_INPUT_ERROR

    t0 = time.monotonic()
    exit_code = EXIT_INPUT_ERROR
    try:
        exit_code = command(args)
    except OSError as e:
        print(f"Error: cannot read {getattr(args, 'file', '')}: {e}", file=sys.stderr)
    except json.JSONDecodeError as e:
        print(f"Error: invalid JSON in {args.file}: {e}", file=sys.stderr)
    except ValidationError as e:
        print(f"Error: invalid request: {e}", file=sys.stderr)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
    log_command(args.command, exit_code, (time.monotonic() - t0) * 1000)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
