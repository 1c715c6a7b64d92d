"""
Orchestration of a Pix charge: create the charge, then fetch its QR code.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Dict, Optional

from .client import ChargeCreated, EfiPixClient, PixProvider
from .config import (
    ChargeSettings,
    ProviderClientConfig,
    load_charge_settings,
    resolve_config,
)
from .errors import PaymentCommunicationError, classify_provider_error
from .payloads import build_charge_request

__all__ = [
    "ChargeResult",
    "PixChargeService",
]

ConfigProvider = Callable[[], ProviderClientConfig]
SettingsProvider = Callable[[], ChargeSettings]
ClientFactory = Callable[[ProviderClientConfig], PixProvider]


@dataclass(frozen=True)
class ChargeResult:
    transaction_id: str
    pix_copy_paste: str
    qr_code_image: str

    def as_dict(self) -> Dict[str, str]:
        """Shape returned to the frontend."""
        return {
            "txid": self.transaction_id,
            "pixCopiaECola": self.pix_copy_paste,
            "imagemQrcode": self.qr_code_image,
        }


class PixChargeService:
    """
    Creates Pix charges through a freshly configured provider client.

    Configuration is resolved on every call through the injected providers, so
    certificate and credential checks always reflect the current environment.
    """

    def __init__(
        self,
        *,
        config_provider: Optional[ConfigProvider] = None,
        settings_provider: Optional[SettingsProvider] = None,
        client_factory: ClientFactory = EfiPixClient,
    ) -> None:
        self.config_provider = config_provider or resolve_config
        self.settings_provider = settings_provider or load_charge_settings
        self.client_factory = client_factory

    def create_charge(
        self,
        amount: Decimal | str | float | int,
        expiration_seconds: int,
    ) -> ChargeResult:
        """
        Create an immediate charge and return its txid and QR code.

        :class:`~pix_payments.core.config.ConfigError` and invalid input
        propagate unchanged. Any provider failure is logged and re-raised as
        :class:`PaymentCommunicationError`; a charge created before the QR
        lookup failed is only reported in the log.
        """
        config = self.config_provider()
        settings = self.settings_provider()
        request = build_charge_request(settings, amount, expiration_seconds)

        charge: Optional[ChargeCreated] = None
        try:
            client = self.client_factory(config)
            charge = client.create_immediate_charge(request.to_body())
            qrcode = client.generate_qrcode(charge)
        except Exception as exc:
            detail = classify_provider_error(exc)
            logging.error(
                "Error creating Efí charge (%s): %s", detail.kind, detail.describe()
            )
            if charge is not None:
                logging.error(
                    "Charge %s was created but its QR code could not be fetched",
                    charge.txid,
                )
            raise PaymentCommunicationError() from exc

        logging.info("Pix charge %s and QR code generated", charge.txid)
        return ChargeResult(
            transaction_id=charge.txid,
            pix_copy_paste=qrcode.pix_copy_paste,
            qr_code_image=qrcode.image,
        )

    async def create_pix_charge(
        self,
        amount: Decimal | str | float | int,
        expiration_seconds: int,
    ) -> ChargeResult:
        """Async variant of :meth:`create_charge`; the SDK call runs in a thread."""
        return await asyncio.to_thread(self.create_charge, amount, expiration_seconds)
