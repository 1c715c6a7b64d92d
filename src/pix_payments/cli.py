"""
Command-line interface for creating a single Pix charge.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from decimal import Decimal
from typing import Iterable, Sequence, Tuple

from .api import ConfigError, PaymentCommunicationError, create_charge_service
from .core.charges import ChargeResult
from .core.config import load_charge_settings, resolve_config
from .core.payloads import format_amount


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _amount(value: str) -> Decimal:
    try:
        return Decimal(format_amount(value))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _positive_int(value: str) -> int:
    try:
        seconds = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid number of seconds: {value!r}") from exc
    if seconds <= 0:
        raise argparse.ArgumentTypeError("Expiration must be greater than zero")
    return seconds


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pix-payments",
        description="Create a Pix immediate charge through Efí Pay and print its QR code",
    )
    parser.add_argument(
        "--amount",
        required=True,
        type=_amount,
        help="Charge amount in BRL (e.g. 150.00)",
    )
    parser.add_argument(
        "--expiration",
        type=_positive_int,
        default=3600,
        help="Seconds until the charge expires (default: 3600)",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing EFI_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full charge result as JSON",
    )
    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        resolve_config(env_file=args.env_file, overrides=overrides)
        load_charge_settings(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration (%s): %s", exc.kind.value, exc)
        return 1

    service = create_charge_service(env_file=args.env_file, overrides=overrides)
    try:
        result = service.create_charge(args.amount, args.expiration)
    except (ConfigError, PaymentCommunicationError) as exc:
        logging.error("Charge failed: %s", exc)
        return 1

    return _handle_result(result, as_json=args.json)


def _handle_result(result: ChargeResult, *, as_json: bool) -> int:
    logging.info("Pix charge created. Transaction id: %s", result.transaction_id)
    if as_json:
        print(json.dumps(result.as_dict(), indent=2))
    else:
        print(result.pix_copy_paste)
    return 0


def main() -> None:
    sys.exit(run_cli())
