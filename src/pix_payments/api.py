"""
Public, high-level helpers for creating Pix charges through Efí Pay.
"""

from __future__ import annotations

from decimal import Decimal
from functools import partial
from typing import Any, Callable, Dict, Mapping, Optional

from efipay import EfiPay

from .core.charges import ChargeResult, ClientFactory, PixChargeService
from .core.client import EfiPixClient
from .core.config import (
    ConfigError,
    ProviderClientConfig,
    load_charge_settings,
    resolve_config,
)
from .core.errors import PaymentCommunicationError

__all__ = [
    "ChargeResult",
    "ConfigError",
    "PaymentCommunicationError",
    "create_charge_service",
    "create_pix_charge",
    "create_pix_charge_sync",
    "create_pix_client",
]


def create_pix_client(
    *,
    config: Optional[ProviderClientConfig] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    sdk_factory: Callable[[Dict[str, Any]], Any] = EfiPay,
) -> EfiPixClient:
    """
    Construct an :class:`EfiPixClient`.

    Callers can either supply a ready-made :class:`ProviderClientConfig` or let
    the helper resolve one from environment data.
    """
    if config is not None:
        if any(item is not None and item != {} for item in (overrides, base)):
            raise ValueError(
                "Provide either a pre-built ProviderClientConfig or environment inputs, not both."
            )
        cfg = config
    else:
        cfg = resolve_config(env_file=env_file, overrides=overrides, base=base)
    return EfiPixClient(cfg, sdk_factory=sdk_factory)


def create_charge_service(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
    client_factory: ClientFactory = EfiPixClient,
) -> PixChargeService:
    """
    Build a :class:`PixChargeService` that re-reads the environment per charge.
    """
    sources = {"env_file": env_file, "base": base, "overrides": overrides}
    return PixChargeService(
        config_provider=partial(resolve_config, **sources),
        settings_provider=partial(load_charge_settings, **sources),
        client_factory=client_factory,
    )


async def create_pix_charge(
    amount: Decimal | str | float | int,
    expiration_seconds: int,
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
    client_factory: ClientFactory = EfiPixClient,
) -> ChargeResult:
    """
    Create a Pix charge and return its txid, copy-paste string and QR image.

    Raises :class:`ConfigError` when the environment is incomplete and
    :class:`PaymentCommunicationError` when the provider fails.
    """
    service = create_charge_service(
        env_file=env_file,
        base=base,
        overrides=overrides,
        client_factory=client_factory,
    )
    return await service.create_pix_charge(amount, expiration_seconds)


def create_pix_charge_sync(
    amount: Decimal | str | float | int,
    expiration_seconds: int,
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
    client_factory: ClientFactory = EfiPixClient,
) -> ChargeResult:
    """
    Blocking counterpart of :func:`create_pix_charge`.
    """
    service = create_charge_service(
        env_file=env_file,
        base=base,
        overrides=overrides,
        client_factory=client_factory,
    )
    return service.create_charge(amount, expiration_seconds)
