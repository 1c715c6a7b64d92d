"""
Core primitives that implement the Pix charge lifecycle.
"""

from .charges import ChargeResult, PixChargeService
from .client import ChargeCreated, EfiPixClient, PixProvider, QRCodeResult
from .config import (
    ChargeSettings,
    ConfigError,
    ConfigErrorKind,
    ProviderClientConfig,
    ProviderCredentials,
    load_charge_settings,
    resolve_config,
)
from .environment import PaymentEnvironment, build_environment, load_env_file
from .errors import (
    DescriptionError,
    FieldErrors,
    PaymentCommunicationError,
    ProviderError,
    ProviderResponseError,
    UnknownError,
    classify_provider_error,
)
from .payloads import (
    ChargeRequest,
    build_charge_body,
    build_charge_request,
    format_amount,
)

__all__ = [
    "ChargeCreated",
    "ChargeRequest",
    "ChargeResult",
    "ChargeSettings",
    "ConfigError",
    "ConfigErrorKind",
    "DescriptionError",
    "EfiPixClient",
    "FieldErrors",
    "PaymentCommunicationError",
    "PaymentEnvironment",
    "PixChargeService",
    "PixProvider",
    "ProviderClientConfig",
    "ProviderCredentials",
    "ProviderError",
    "ProviderResponseError",
    "QRCodeResult",
    "UnknownError",
    "build_charge_body",
    "build_charge_request",
    "build_environment",
    "classify_provider_error",
    "format_amount",
    "load_charge_settings",
    "load_env_file",
    "resolve_config",
]
