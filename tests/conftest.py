from typing import Any, Dict, List

import pytest

from pix_payments.core.client import ChargeCreated, QRCodeResult


@pytest.fixture
def certificate(tmp_path):
    path = tmp_path / "efi-cert.pem"
    path.write_text("-----BEGIN CERTIFICATE-----\nAAAA\n-----END CERTIFICATE-----\n")
    return str(path)


@pytest.fixture
def sandbox_env(certificate) -> Dict[str, str]:
    return {
        "EFI_ENVIRONMENT": "development",
        "EFI_CERTIFICATE_PATH": certificate,
        "EFI_HOMOLOG_CLIENT_ID": "Client_Id_homolog",
        "EFI_HOMOLOG_CLIENT_SECRET": "Client_Secret_homolog",
        "EFI_PROD_CLIENT_ID": "Client_Id_prod",
        "EFI_PROD_CLIENT_SECRET": "Client_Secret_prod",
        "EFI_PIX_KEY": "chave-pix@example.com",
    }


@pytest.fixture
def production_env(sandbox_env) -> Dict[str, str]:
    return {**sandbox_env, "EFI_ENVIRONMENT": "production"}


class FakeSdk:
    """Stands in for ``efipay.EfiPay``; records calls and replays responses."""

    def __init__(self, options, charge_response=None, qrcode_response=None):
        self.options = options
        self.charge_response = charge_response
        self.qrcode_response = qrcode_response
        self.calls: List[tuple] = []

    def pix_create_immediate_charge(self, body):
        self.calls.append(("create", body))
        if isinstance(self.charge_response, Exception):
            raise self.charge_response
        return self.charge_response

    def pix_generate_qrcode(self, params):
        self.calls.append(("qrcode", params))
        if isinstance(self.qrcode_response, Exception):
            raise self.qrcode_response
        return self.qrcode_response


class FakeProvider:
    """A ``PixProvider`` double used by orchestrator tests."""

    def __init__(self, config, *, txid="TXID123", qrcode=None, create_error=None, qrcode_error=None):
        self.config = config
        self.txid = txid
        self.qrcode = qrcode or {
            "qrcode": "00020126...",
            "imagemQrcode": "data:image/png;base64,AAA",
        }
        self.create_error = create_error
        self.qrcode_error = qrcode_error
        self.bodies: List[Dict[str, Any]] = []
        self.qrcode_requests: List[ChargeCreated] = []

    def create_immediate_charge(self, body):
        self.bodies.append(body)
        if self.create_error is not None:
            raise self.create_error
        return ChargeCreated.from_response({"txid": self.txid, "loc": {"id": 7}})

    def generate_qrcode(self, charge):
        self.qrcode_requests.append(charge)
        if self.qrcode_error is not None:
            raise self.qrcode_error
        return QRCodeResult.from_response(self.qrcode)


@pytest.fixture
def fake_sdk_factory():
    created: List[FakeSdk] = []

    def make(charge_response=None, qrcode_response=None):
        def factory(options):
            sdk = FakeSdk(options, charge_response, qrcode_response)
            created.append(sdk)
            return sdk

        factory.created = created
        return factory

    return make


@pytest.fixture
def provider_factory():
    """Returns a client factory that builds ``FakeProvider`` instances."""
    created: List[FakeProvider] = []

    def make(**kwargs):
        def factory(config):
            provider = FakeProvider(config, **kwargs)
            created.append(provider)
            return provider

        factory.created = created
        return factory

    return make
