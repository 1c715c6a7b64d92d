"""
Configuration objects and helpers for the Efí Pix client.
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .environment import PaymentEnvironment, build_environment

__all__ = [
    "ChargeSettings",
    "ConfigError",
    "ConfigErrorKind",
    "DEFAULT_PAYER_NOTE_TEMPLATE",
    "ProviderClientConfig",
    "ProviderCredentials",
    "load_charge_settings",
    "resolve_config",
]

CERTIFICATE_PATH_KEY = "EFI_CERTIFICATE_PATH"
PIX_KEY = "EFI_PIX_KEY"
PAYER_NOTE_TEMPLATE_KEY = "EFI_PAYER_NOTE_TEMPLATE"

DEFAULT_PAYER_NOTE_TEMPLATE = "Pedido R${amount}"

_CREDENTIAL_KEYS = {
    True: ("EFI_PROD_CLIENT_ID", "EFI_PROD_CLIENT_SECRET"),
    False: ("EFI_HOMOLOG_CLIENT_ID", "EFI_HOMOLOG_CLIENT_SECRET"),
}


class ConfigErrorKind(str, Enum):
    MISSING_CERTIFICATE_PATH = "missing_certificate_path"
    CERTIFICATE_NOT_FOUND = "certificate_not_found"
    MISSING_CREDENTIALS = "missing_credentials"
    MISSING_PIX_KEY = "missing_pix_key"
    INVALID_PAYER_NOTE_TEMPLATE = "invalid_payer_note_template"


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""

    def __init__(self, kind: ConfigErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class ProviderCredentials:
    client_id: str
    client_secret: str = field(repr=False)

    @classmethod
    def from_environment(cls, environment: PaymentEnvironment) -> "ProviderCredentials":
        production = environment.is_production
        id_key, secret_key = _CREDENTIAL_KEYS[production]
        client_id = environment.value(id_key)
        client_secret = environment.value(secret_key)
        if client_id is None or client_secret is None:
            label = "production" if production else "homologation"
            raise ConfigError(
                ConfigErrorKind.MISSING_CREDENTIALS,
                f"Efí {label} credentials ({id_key}, {secret_key}) are not set",
            )
        return cls(client_id=client_id, client_secret=client_secret)


@dataclass(frozen=True)
class ProviderClientConfig:
    client_id: str
    client_secret: str = field(repr=False)
    sandbox: bool
    certificate_path: str

    @property
    def mode(self) -> str:
        return "sandbox" if self.sandbox else "production"

    def sdk_options(self) -> Dict[str, Any]:
        """
        Return the option mapping accepted by :class:`efipay.EfiPay`.
        """
        return {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "sandbox": self.sandbox,
            "certificate": self.certificate_path,
        }

    @classmethod
    def from_environment(cls, environment: PaymentEnvironment) -> "ProviderClientConfig":
        sandbox = not environment.is_production

        certificate_path = environment.value(CERTIFICATE_PATH_KEY)
        if certificate_path is None:
            raise ConfigError(
                ConfigErrorKind.MISSING_CERTIFICATE_PATH,
                f"{CERTIFICATE_PATH_KEY} is not set",
            )
        if not Path(certificate_path).is_file():
            logging.error("Efí certificate file not found at %s", certificate_path)
            raise ConfigError(
                ConfigErrorKind.CERTIFICATE_NOT_FOUND,
                f"Certificate file not found; check {CERTIFICATE_PATH_KEY}",
            )

        credentials = ProviderCredentials.from_environment(environment)
        config = cls(
            client_id=credentials.client_id,
            client_secret=credentials.client_secret,
            sandbox=sandbox,
            certificate_path=certificate_path,
        )
        logging.info(
            "Initializing Efí SDK in %s mode. Client ID: %s",
            config.mode,
            "set" if config.client_id else "NOT SET",
        )
        return config


@dataclass(frozen=True)
class ChargeSettings:
    pix_key: str
    payer_note_template: str = DEFAULT_PAYER_NOTE_TEMPLATE

    def payer_note(self, formatted_amount: str) -> str:
        return self.payer_note_template.format(amount=formatted_amount)

    @classmethod
    def from_environment(cls, environment: PaymentEnvironment) -> "ChargeSettings":
        pix_key = environment.value(PIX_KEY)
        if pix_key is None:
            raise ConfigError(ConfigErrorKind.MISSING_PIX_KEY, f"{PIX_KEY} is not set")
        template = environment.value(PAYER_NOTE_TEMPLATE_KEY) or DEFAULT_PAYER_NOTE_TEMPLATE
        _validate_note_template(template)
        return cls(pix_key=pix_key, payer_note_template=template)


def _validate_note_template(template: str) -> None:
    """The note must render with ``amount`` alone and show it verbatim."""
    sample = "1234.56"
    try:
        parsed = string.Formatter().parse(template)
        fields = {name for _, name, _, _ in parsed if name is not None}
        rendered = template.format(amount=sample)
    except (KeyError, IndexError, AttributeError, ValueError) as exc:
        raise ConfigError(
            ConfigErrorKind.INVALID_PAYER_NOTE_TEMPLATE,
            f"{PAYER_NOTE_TEMPLATE_KEY} must only use the {{amount}} placeholder",
        ) from exc
    if fields != {"amount"} or sample not in rendered:
        raise ConfigError(
            ConfigErrorKind.INVALID_PAYER_NOTE_TEMPLATE,
            f"{PAYER_NOTE_TEMPLATE_KEY} must contain the {{amount}} placeholder",
        )


def resolve_config(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ProviderClientConfig:
    """
    Resolve the provider client configuration from the current environment.

    The certificate file is checked on every call and the credential pair is
    picked according to ``EFI_ENVIRONMENT``. Fails with :class:`ConfigError`
    before any network activity.
    """
    environment = build_environment(env_file=env_file, base=base, overrides=overrides)
    return ProviderClientConfig.from_environment(environment)


def load_charge_settings(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ChargeSettings:
    environment = build_environment(env_file=env_file, base=base, overrides=overrides)
    return ChargeSettings.from_environment(environment)
