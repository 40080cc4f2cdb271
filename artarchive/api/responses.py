"""JSON envelopes shared by the API views."""

from typing import Any, Optional

from django.http import JsonResponse
from pydantic import ValidationError

UNAUTHORIZED = "UNAUTHORIZED"
VALIDATION_ERROR = "VALIDATION_ERROR"
NOT_FOUND = "NOT_FOUND"
DESCRIPTION_EXISTS = "DESCRIPTION_EXISTS"
OPENAI_CONFIG_ERROR = "OPENAI_CONFIG_ERROR"
RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
DB_ERROR = "DB_ERROR"
TRANSLATION_UNAVAILABLE = "TRANSLATION_UNAVAILABLE"
TRANSLATION_FAILED = "TRANSLATION_FAILED"
INTERNAL_ERROR = "INTERNAL_ERROR"


def success_response(data: Any, status: int = 200) -> JsonResponse:
    return JsonResponse({"success": True, "data": data}, status=status)


def error_response(
    code: str,
    message: str,
    status: int,
    details: Optional[Any] = None,
) -> JsonResponse:
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return JsonResponse({"success": False, "error": error}, status=status)


def validation_error_response(exc: ValidationError) -> JsonResponse:
    """400 response listing each invalid field and why."""
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return error_response(VALIDATION_ERROR, "Invalid request body", 400, details)


def unauthorized_response() -> JsonResponse:
    return error_response(UNAUTHORIZED, "Staff authentication required", 401)
