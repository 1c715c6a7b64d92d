"""
Helpers for constructing the request bodies sent to the Efí Pix API.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict

from .config import ChargeSettings

__all__ = [
    "ChargeRequest",
    "build_charge_body",
    "build_charge_request",
    "format_amount",
]

_CENTS = Decimal("0.01")


def _to_decimal(amount: Decimal | str | float | int) -> Decimal:
    if isinstance(amount, bool):
        raise ValueError("Amount must be a number, got a boolean")
    if isinstance(amount, float):
        amount = str(amount)
    try:
        return Decimal(amount)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValueError(f"Amount must be a valid decimal number, got {amount!r}") from exc


def format_amount(amount: Decimal | str | float | int) -> str:
    """
    Render ``amount`` with exactly two decimal digits, as the API expects.
    """
    value = _to_decimal(amount)
    if not value.is_finite():
        raise ValueError(f"Amount must be finite, got {amount!r}")
    try:
        quantized = value.quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Amount {amount!r} is too large to charge") from exc
    if quantized <= 0:
        raise ValueError("Charge amount must be greater than zero")
    return f"{quantized:.2f}"


@dataclass(frozen=True)
class ChargeRequest:
    expiration_seconds: int
    amount: str
    pix_key: str
    payer_note: str

    def to_body(self) -> Dict[str, Any]:
        return {
            "calendario": {"expiracao": str(self.expiration_seconds)},
            "valor": {"original": self.amount},
            "chave": self.pix_key,
            "solicitacaoPagador": self.payer_note,
        }


def build_charge_request(
    settings: ChargeSettings,
    amount: Decimal | str | float | int,
    expiration_seconds: int,
) -> ChargeRequest:
    """
    Build the immediate-charge request for ``amount``.

    ``expiration_seconds`` must be a positive integer. The payer note embeds
    the formatted amount so the payer sees the same value the API receives.
    """
    if isinstance(expiration_seconds, bool) or not isinstance(expiration_seconds, int):
        raise ValueError(
            f"Expiration must be an integer number of seconds, got {expiration_seconds!r}"
        )
    if expiration_seconds <= 0:
        raise ValueError("Expiration must be greater than zero seconds")

    formatted = format_amount(amount)
    return ChargeRequest(
        expiration_seconds=expiration_seconds,
        amount=formatted,
        pix_key=settings.pix_key,
        payer_note=settings.payer_note(formatted),
    )


def build_charge_body(
    settings: ChargeSettings,
    amount: Decimal | str | float | int,
    expiration_seconds: int,
) -> Dict[str, Any]:
    """Build the JSON body for ``pix_create_immediate_charge``."""
    return build_charge_request(settings, amount, expiration_seconds).to_body()
