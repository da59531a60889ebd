# -*- coding: utf-8 -*-
"""
exceptions

Custom domain exceptions for the admin core.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Mapping


class AdminError(Exception):
    """Base class for admin-specific exceptions."""


class ConfigurationError(AdminError):
    """Raised when the model configuration is inconsistent."""


class ImportFormatError(AdminError):
    """Raised when an import file cannot be parsed."""


# --- HTTP-like domain errors -------------------------------------------------

class HTTPError(AdminError):
    """Base class for exceptions carrying an HTTP status code."""

    status_code: int = 500

    def __init__(self, detail: str | None = None, *, error: str | None = None) -> None:
        super().__init__(detail or "")
        self.detail = detail
        self.error = error


class BadRequestError(HTTPError):
    """Raised when a request fails validation or is malformed."""

    status_code = 400


class ValidationFailedError(BadRequestError):
    """Raised when a record violates schema constraints.

    ``errors`` maps each failing field to a human-readable message.
    """

    def __init__(
        self,
        detail: str | None = None,
        *,
        errors: Mapping[str, str] | None = None,
    ) -> None:
        self.errors: dict[str, str] = dict(errors or {})
        summary = "; ".join(f"{name}: {message}" for name, message in self.errors.items())
        super().__init__(detail or "Validation failed", error=summary or None)


class AuthenticationError(HTTPError):
    """Raised when a request carries no credentials."""

    status_code = 401


class PermissionDeniedError(HTTPError):
    """Raised when supplied credentials are rejected."""

    status_code = 403


class FeatureDisabledError(HTTPError):
    """Raised when an operation is not enabled for a model."""

    status_code = 403


class NotFoundError(HTTPError):
    """Raised when a requested resource is not found."""

    status_code = 404


class UnexpectedFailureError(HTTPError):
    """Raised when the store fails for reasons unrelated to the request."""

    status_code = 500


__all__ = [
    "AdminError",
    "AuthenticationError",
    "BadRequestError",
    "ConfigurationError",
    "FeatureDisabledError",
    "HTTPError",
    "ImportFormatError",
    "NotFoundError",
    "PermissionDeniedError",
    "UnexpectedFailureError",
    "ValidationFailedError",
]


# The End
