"""
Adapter around the Efí Pay SDK for the two Pix calls we make.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Protocol

from efipay import EfiPay

from .config import ProviderClientConfig
from .errors import ProviderResponseError, has_error_fields

__all__ = [
    "ChargeCreated",
    "EfiPixClient",
    "PixProvider",
    "QRCodeResult",
]


def _ensure_success(response: Any, operation: str) -> Dict[str, Any]:
    if not isinstance(response, Mapping):
        raise ProviderResponseError(
            f"Unexpected {operation} response type: {type(response).__name__}"
        )
    if has_error_fields(response):
        raise ProviderResponseError(f"{operation} was rejected by the provider", response)
    return dict(response)


@dataclass(frozen=True)
class ChargeCreated:
    txid: str
    location_id: Optional[int]
    pix_copy_paste: Optional[str]
    raw: Dict[str, Any]

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "ChargeCreated":
        txid = payload.get("txid")
        if not txid:
            raise ProviderResponseError("Charge response did not include a txid", payload)
        location = payload.get("loc")
        location_id = location.get("id") if isinstance(location, Mapping) else None
        return cls(
            txid=str(txid),
            location_id=location_id,
            pix_copy_paste=payload.get("pixCopiaECola"),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class QRCodeResult:
    pix_copy_paste: str
    image: str
    raw: Dict[str, Any]

    @classmethod
    def from_response(
        cls,
        payload: Mapping[str, Any],
        *,
        fallback_copy_paste: Optional[str] = None,
    ) -> "QRCodeResult":
        copy_paste = (
            payload.get("qrcode")
            or payload.get("pix_copia_e_cola")
            or payload.get("pixCopiaECola")
            or fallback_copy_paste
        )
        image = payload.get("imagemQrcode") or payload.get("imagem_qrcode")
        if not copy_paste or not image:
            raise ProviderResponseError("QR code response is incomplete", payload)
        return cls(pix_copy_paste=copy_paste, image=image, raw=dict(payload))


class PixProvider(Protocol):
    def create_immediate_charge(self, body: Dict[str, Any]) -> ChargeCreated:
        ...

    def generate_qrcode(self, charge: ChargeCreated) -> QRCodeResult:
        ...


class EfiPixClient:
    """
    Thin wrapper around one configured :class:`efipay.EfiPay` instance.
    """

    def __init__(
        self,
        config: ProviderClientConfig,
        *,
        sdk_factory: Callable[[Dict[str, Any]], Any] = EfiPay,
    ) -> None:
        self.config = config
        self.sdk = sdk_factory(config.sdk_options())

    def create_immediate_charge(self, body: Dict[str, Any]) -> ChargeCreated:
        logging.info("Sending immediate charge request to the Efí API")
        response = self.sdk.pix_create_immediate_charge(body=body)
        return ChargeCreated.from_response(
            _ensure_success(response, "pix_create_immediate_charge")
        )

    def generate_qrcode(self, charge: ChargeCreated) -> QRCodeResult:
        """
        Fetch the QR code of a charge returned by :meth:`create_immediate_charge`.

        The v2 API addresses QR codes by the charge's location id; the txid is
        only used when the create response carried no ``loc``.
        """
        location = charge.location_id if charge.location_id is not None else charge.txid
        response = self.sdk.pix_generate_qrcode(params={"id": location})
        return QRCodeResult.from_response(
            _ensure_success(response, "pix_generate_qrcode"),
            fallback_copy_paste=charge.pix_copy_paste,
        )
