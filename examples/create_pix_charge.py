"""
Minimal script that uses the public API to create a Pix charge.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from decimal import Decimal

from pix_payments import ConfigError, PaymentCommunicationError, create_pix_charge


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a Pix charge using the SDK API")
    parser.add_argument("amount", type=Decimal, help="Charge amount in BRL")
    parser.add_argument(
        "--expiration",
        type=int,
        default=3600,
        help="Seconds until the charge expires (default: 3600)",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing EFI_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    return parser.parse_args()


async def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        result = await create_pix_charge(
            args.amount, args.expiration, env_file=args.env_file
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1
    except PaymentCommunicationError as exc:
        logging.error("Charge failed: %s", exc)
        return 1

    print(json.dumps(result.as_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
