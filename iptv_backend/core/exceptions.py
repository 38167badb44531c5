# core/exceptions.py

"""
DOMAIN SERVICE ERRORS

Centralized error taxonomy shared by every service module.

Each error carries the HTTP status the API layer must answer with, so views
never have to map exceptions by hand (see core/exception_handler.py).
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception for all domain service failures."""

    status_code = 400

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ServiceValidationError(ServiceError):
    """Raised when an input value is missing, malformed or out of range."""

    status_code = 400


class NotFoundError(ServiceError):
    """Raised when a referenced client/produit/plateforme/recharge/vente does not exist."""

    status_code = 404


class ConflictError(ServiceError):
    """Raised when a write would violate a uniqueness rule."""

    status_code = 409


class InsufficientStockError(ServiceError):
    """Raised when a product cannot cover the requested quantity."""

    status_code = 400

    def __init__(self, *, available, requested, message: str | None = None):
        self.available = available
        self.requested = requested
        super().__init__(
            message
            or f"Insufficient stock. Available: {available}, Requested: {requested}"
        )


class InsufficientBalanceError(ServiceError):
    """Raised when a platform balance cannot cover a debit."""

    status_code = 400

    def __init__(self, *, available, required, unit: str = "", message: str | None = None):
        self.available = available
        self.required = required
        self.unit = unit
        unit_suffix = f" {unit}" if unit else ""
        super().__init__(
            message
            or (
                f"Insufficient platform balance. Available: {available}{unit_suffix}, "
                f"Required: {required}"
            )
        )
