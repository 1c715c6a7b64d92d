"""
Public facade for the Efí Pix charge helper package.

The module re-exports the most useful pieces for integrators so they can
``from pix_payments import ...`` without navigating the package.
"""

from .api import (
    create_charge_service,
    create_pix_charge,
    create_pix_charge_sync,
    create_pix_client,
)
from .core import (
    ChargeCreated,
    ChargeRequest,
    ChargeResult,
    ChargeSettings,
    ConfigError,
    ConfigErrorKind,
    DescriptionError,
    EfiPixClient,
    FieldErrors,
    PaymentCommunicationError,
    PaymentEnvironment,
    PixChargeService,
    PixProvider,
    ProviderClientConfig,
    ProviderCredentials,
    ProviderError,
    ProviderResponseError,
    QRCodeResult,
    UnknownError,
    build_charge_body,
    build_charge_request,
    build_environment,
    classify_provider_error,
    format_amount,
    load_charge_settings,
    load_env_file,
    resolve_config,
)

__all__ = (
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
    "create_charge_service",
    "create_pix_charge",
    "create_pix_charge_sync",
    "create_pix_client",
    "format_amount",
    "load_charge_settings",
    "load_env_file",
    "resolve_config",
)
