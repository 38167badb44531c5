# core/exception_handler.py

"""
DRF EXCEPTION HANDLER (ENVELOPE)

Maps every failure to {"success": false, "error": "<message>"}:

- ServiceError subclasses -> their own status_code
- DRF errors (validation, auth, 404, 405, throttling) -> DRF status
- IntegrityError -> 409, ProtectedError -> 400
- anything else -> 500, logged with traceback
"""

from __future__ import annotations

import logging

from django.db import IntegrityError
from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.views import exception_handler

from core.exceptions import ServiceError
from core.responses import error_response

logger = logging.getLogger(__name__)


def _flatten_detail(detail) -> str:
    """
    Collapse DRF error details ({"field": ["msg"]}, ["msg"], "msg") into one line.
    """
    if isinstance(detail, dict):
        parts = []
        for field, value in detail.items():
            text = _flatten_detail(value)
            if field in ("non_field_errors", "detail"):
                parts.append(text)
            else:
                parts.append(f"{field}: {text}")
        return "; ".join(parts)

    if isinstance(detail, (list, tuple)):
        return " ".join(_flatten_detail(item) for item in detail)

    return str(detail)


def _missing_fields(detail) -> list[str]:
    if not isinstance(detail, dict):
        return []
    missing = []
    for field, errors in detail.items():
        codes = [getattr(e, "code", None) for e in errors] if isinstance(errors, list) else []
        if codes and all(code in ("required", "null", "blank") for code in codes):
            missing.append(field)
    return missing


def envelope_exception_handler(exc, context):
    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else None

    if isinstance(exc, ServiceError):
        logger.warning(
            "Service rejected request",
            extra={"view": view_name, "error": str(exc), "status": exc.status_code},
        )
        return error_response(str(exc), status=exc.status_code)

    if isinstance(exc, ProtectedError):
        return error_response(
            "Cannot delete a record that is still referenced",
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, IntegrityError):
        logger.warning("Integrity error", extra={"view": view_name, "error": str(exc)})
        return error_response(
            "Conflict with an existing record",
            status=status.HTTP_409_CONFLICT,
        )

    response = exception_handler(exc, context)

    if response is not None:
        detail = getattr(exc, "detail", response.data)
        missing = _missing_fields(detail) if isinstance(exc, DRFValidationError) else []
        if missing and len(missing) == len(detail):
            message = f"Missing required fields: {', '.join(missing)}"
        else:
            message = _flatten_detail(detail)
        response.data = {"success": False, "error": message}
        return response

    logger.exception("Unhandled API error", extra={"view": view_name})
    return error_response(
        "Internal server error",
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
