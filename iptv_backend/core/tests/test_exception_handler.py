# core/tests/test_exception_handler.py

from __future__ import annotations

from django.db import IntegrityError
from django.db.models import ProtectedError
from django.test import SimpleTestCase
from rest_framework import serializers, status
from rest_framework.exceptions import MethodNotAllowed, NotAuthenticated

from core.exception_handler import envelope_exception_handler
from core.exceptions import (
    ConflictError,
    InsufficientBalanceError,
    InsufficientStockError,
    NotFoundError,
    ServiceValidationError,
)


class _SaleInput(serializers.Serializer):
    quantite = serializers.IntegerField(min_value=1)
    prix_unitaire = serializers.DecimalField(max_digits=12, decimal_places=2)
    notes = serializers.CharField(required=False)


def _handle(exc):
    return envelope_exception_handler(exc, {"view": None})


class ServiceErrorMappingTests(SimpleTestCase):
    """
    GUARANTEES:
    - each domain error answers with its own status and message
    - the body is always {"success": false, "error": "..."}
    """

    def test_status_codes(self):
        cases = (
            (ServiceValidationError("bad"), 400),
            (NotFoundError("Client not found"), 404),
            (ConflictError("duplicate"), 409),
            (InsufficientStockError(available=1, requested=2), 400),
            (InsufficientBalanceError(available="5.00", required="9.00", unit="DZD"), 400),
        )
        for exc, expected in cases:
            with self.subTest(exc=type(exc).__name__):
                res = _handle(exc)
                self.assertEqual(res.status_code, expected)
                self.assertEqual(res.data, {"success": False, "error": str(exc)})

    def test_balance_message_carries_unit(self):
        res = _handle(InsufficientBalanceError(available="5.00", required="9.00", unit="points"))
        self.assertEqual(
            res.data["error"],
            "Insufficient platform balance. Available: 5.00 points, Required: 9.00",
        )


class DatabaseErrorMappingTests(SimpleTestCase):
    def test_protected_error_is_400(self):
        res = _handle(ProtectedError("protected", set()))
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(res.data["success"])

    def test_integrity_error_is_409(self):
        res = _handle(IntegrityError("UNIQUE constraint failed"))
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(res.data["error"], "Conflict with an existing record")


class DrfErrorMappingTests(SimpleTestCase):
    def _validation_error(self, data):
        serializer = _SaleInput(data=data)
        try:
            serializer.is_valid(raise_exception=True)
        except serializers.ValidationError as exc:
            return exc
        self.fail("expected a validation error")

    def test_only_missing_fields_are_summarized(self):
        res = _handle(self._validation_error({}))
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"], "Missing required fields: quantite, prix_unitaire")

    def test_mixed_errors_are_flattened(self):
        res = _handle(self._validation_error({"quantite": 0}))
        self.assertIn("quantite:", res.data["error"])
        self.assertIn("prix_unitaire:", res.data["error"])
        self.assertFalse(res.data["error"].startswith("Missing required fields"))

    def test_auth_and_method_errors_keep_drf_status(self):
        res = _handle(NotAuthenticated())
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(res.data["success"])

        res = _handle(MethodNotAllowed("PATCH"))
        self.assertEqual(res.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertEqual(res.data["error"], 'Method "PATCH" not allowed.')


class UnhandledErrorTests(SimpleTestCase):
    def test_unexpected_exception_is_500_and_logged(self):
        with self.assertLogs("core.exception_handler", level="ERROR"):
            res = _handle(RuntimeError("boom"))
        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(res.data, {"success": False, "error": "Internal server error"})
