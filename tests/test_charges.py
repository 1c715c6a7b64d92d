import asyncio
import logging
import os

import pytest
import requests

from pix_payments import (
    ChargeResult,
    ConfigError,
    ConfigErrorKind,
    PaymentCommunicationError,
    ProviderResponseError,
    create_charge_service,
    create_pix_charge,
    create_pix_charge_sync,
)


def test_end_to_end_with_mocked_provider(sandbox_env, provider_factory):
    factory = provider_factory(txid="TXID123")

    result = asyncio.run(
        create_pix_charge(150.00, 3600, env_file=None, base=sandbox_env, client_factory=factory)
    )

    assert result == ChargeResult(
        transaction_id="TXID123",
        pix_copy_paste="00020126...",
        qr_code_image="data:image/png;base64,AAA",
    )
    assert result.as_dict() == {
        "txid": "TXID123",
        "pixCopiaECola": "00020126...",
        "imagemQrcode": "data:image/png;base64,AAA",
    }
    provider = factory.created[0]
    assert provider.bodies == [
        {
            "calendario": {"expiracao": "3600"},
            "valor": {"original": "150.00"},
            "chave": "chave-pix@example.com",
            "solicitacaoPagador": "Pedido R$150.00",
        }
    ]
    assert provider.qrcode_requests[0].txid == "TXID123"


def test_each_charge_builds_a_fresh_client(sandbox_env, provider_factory):
    factory = provider_factory()
    service = create_charge_service(env_file=None, base=sandbox_env, client_factory=factory)

    service.create_charge(10, 60)
    service.create_charge(20, 60)

    assert len(factory.created) == 2
    assert factory.created[0] is not factory.created[1]


def test_provider_description_is_not_leaked(sandbox_env, provider_factory, caplog):
    secret_detail = "Invalid or inactive credentials"
    factory = provider_factory(
        create_error=ProviderResponseError(
            "rejected", {"error": "invalid_client", "error_description": secret_detail}
        )
    )

    with caplog.at_level(logging.ERROR):
        with pytest.raises(PaymentCommunicationError) as excinfo:
            create_pix_charge_sync(10, 3600, env_file=None, base=sandbox_env, client_factory=factory)

    assert secret_detail not in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ProviderResponseError)
    assert secret_detail in caplog.text
    assert factory.created[0].qrcode_requests == []


def test_transport_failure_becomes_payment_error(sandbox_env, provider_factory):
    factory = provider_factory(create_error=requests.ConnectionError("reset"))

    with pytest.raises(PaymentCommunicationError):
        create_pix_charge_sync(10, 3600, env_file=None, base=sandbox_env, client_factory=factory)


def test_qrcode_failure_fails_the_whole_charge(sandbox_env, provider_factory, caplog):
    factory = provider_factory(
        txid="TXORPHAN", qrcode_error=ProviderResponseError("boom", {"detail": "QR indisponível"})
    )

    with caplog.at_level(logging.ERROR):
        with pytest.raises(PaymentCommunicationError):
            create_pix_charge_sync(10, 3600, env_file=None, base=sandbox_env, client_factory=factory)

    assert "TXORPHAN" in caplog.text


def test_missing_certificate_fails_before_network(sandbox_env, provider_factory, tmp_path):
    env = {**sandbox_env, "EFI_CERTIFICATE_PATH": str(tmp_path / "missing.pem")}
    factory = provider_factory()

    with pytest.raises(ConfigError) as excinfo:
        asyncio.run(
            create_pix_charge(10, 3600, env_file=None, base=env, client_factory=factory)
        )

    assert excinfo.value.kind is ConfigErrorKind.CERTIFICATE_NOT_FOUND
    assert factory.created == []


def test_config_is_resolved_on_every_call(sandbox_env, provider_factory, certificate):
    factory = provider_factory()
    service = create_charge_service(env_file=None, base=sandbox_env, client_factory=factory)
    service.create_charge(10, 60)

    os.remove(certificate)

    with pytest.raises(ConfigError):
        service.create_charge(10, 60)
    assert len(factory.created) == 1


def test_invalid_input_fails_before_network(sandbox_env, provider_factory):
    factory = provider_factory()

    with pytest.raises(ValueError):
        create_pix_charge_sync(0, 3600, env_file=None, base=sandbox_env, client_factory=factory)
    with pytest.raises(ValueError):
        create_pix_charge_sync(10, 0, env_file=None, base=sandbox_env, client_factory=factory)

    assert factory.created == []


def test_invalid_note_template_fails_before_network(sandbox_env, provider_factory):
    env = {**sandbox_env, "EFI_PAYER_NOTE_TEMPLATE": "Pedido {pedido} R${amount}"}
    factory = provider_factory()

    with pytest.raises(ConfigError) as excinfo:
        create_pix_charge_sync(10, 3600, env_file=None, base=env, client_factory=factory)

    assert excinfo.value.kind is ConfigErrorKind.INVALID_PAYER_NOTE_TEMPLATE
    assert factory.created == []
