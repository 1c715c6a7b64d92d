"""
Error types raised by the Pix helpers and normalization of provider failures.

The Efí SDK surfaces failures in several shapes: OAuth errors carry an
``error_description``, the Pix API returns ``detail``/``violacoes`` problem
documents, older endpoints send ``erros`` or ``mensagem``, and transport
failures arrive as ``requests`` exceptions. :func:`classify_provider_error`
folds all of them into a :data:`ProviderError` so callers log them one way.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union

import requests

__all__ = [
    "DescriptionError",
    "FieldErrors",
    "PaymentCommunicationError",
    "ProviderError",
    "ProviderResponseError",
    "UnknownError",
    "classify_provider_error",
    "has_error_fields",
]

_DESCRIPTION_KEYS = ("error_description", "detail", "mensagem", "message")
_FIELD_ERROR_KEYS = ("erros", "violacoes")
_ERROR_MARKERS = _DESCRIPTION_KEYS + _FIELD_ERROR_KEYS + ("error", "nome")


class PaymentCommunicationError(Exception):
    """Raised when the payment provider could not complete a charge."""

    default_message = "Failed to communicate with the payment API."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class ProviderResponseError(Exception):
    """
    The SDK returned a body describing an error instead of raising.
    """

    def __init__(self, message: str, payload: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = dict(payload or {})


@dataclass(frozen=True)
class DescriptionError:
    text: str
    kind: str = "description"

    def describe(self) -> str:
        return self.text


@dataclass(frozen=True)
class FieldErrors:
    errors: Tuple[Any, ...]
    kind: str = "field_errors"

    def describe(self) -> str:
        return "; ".join(_describe_field_error(item) for item in self.errors)


@dataclass(frozen=True)
class UnknownError:
    raw: Any
    kind: str = "unknown"

    def describe(self) -> str:
        if isinstance(self.raw, BaseException):
            return f"{type(self.raw).__name__}: {self.raw}"
        return repr(self.raw)


ProviderError = Union[DescriptionError, FieldErrors, UnknownError]


def _describe_field_error(item: Any) -> str:
    if not isinstance(item, Mapping):
        return str(item)
    field_name = item.get("propriedade") or item.get("chave") or item.get("campo")
    reason = item.get("razao") or item.get("mensagem") or item.get("message") or item
    if field_name:
        return f"{field_name}: {reason}"
    return str(reason)


def has_error_fields(payload: Any) -> bool:
    """Return True when ``payload`` looks like an error body from the API."""
    if not isinstance(payload, Mapping):
        return False
    return any(payload.get(key) for key in _ERROR_MARKERS)


def _classify_mapping(payload: Mapping[str, Any]) -> ProviderError:
    for key in _FIELD_ERROR_KEYS:
        errors = payload.get(key)
        if isinstance(errors, (list, tuple)) and errors:
            return FieldErrors(errors=tuple(errors))
    for key in _DESCRIPTION_KEYS:
        text = payload.get(key)
        if isinstance(text, str) and text.strip():
            return DescriptionError(text=text.strip())
    return UnknownError(raw=dict(payload))


def classify_provider_error(error: Any) -> ProviderError:
    """
    Normalize an exception or error body raised by the provider.
    """
    if isinstance(error, ProviderResponseError) and error.payload:
        return _classify_mapping(error.payload)
    if isinstance(error, requests.RequestException):
        response = error.response
        if response is not None:
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, Mapping):
                return _classify_mapping(body)
        return UnknownError(raw=error)
    if isinstance(error, Mapping):
        return _classify_mapping(error)
    for attribute in ("payload", "body"):
        candidate = getattr(error, attribute, None)
        if isinstance(candidate, Mapping) and candidate:
            return _classify_mapping(candidate)
    return UnknownError(raw=error)
