# core/responses.py

"""
JSON RESPONSE ENVELOPE

Every API answer uses the same shape:

    {"success": true,  "data": ..., "message": "..."}
    {"success": false, "error": "..."}
"""

from __future__ import annotations

from rest_framework import status as http_status
from rest_framework.response import Response


def success_response(data=None, message: str | None = None, status: int = http_status.HTTP_200_OK):
    payload = {"success": True, "data": data}
    if message:
        payload["message"] = message
    return Response(payload, status=status)


def error_response(error: str, status: int = http_status.HTTP_400_BAD_REQUEST):
    return Response({"success": False, "error": error}, status=status)
