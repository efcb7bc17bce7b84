from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from typing import Optional

from .application.results import AuthResult, ErrorKind

ERROR_MESSAGES = {
    ErrorKind.INVALID_INPUT: "Invalid input.",
    ErrorKind.INVALID_PHONE_FORMAT: "Invalid phone number.",
    ErrorKind.INVALID_CODE_FORMAT: "Code must be 6 digits.",
    ErrorKind.FIRST_NAME_REQUIRED: "First name is required.",
    ErrorKind.FIRST_NAME_TOO_LONG: "First name must be 50 characters or less.",
    ErrorKind.LAST_NAME_TOO_LONG: "Last name must be 50 characters or less.",
    ErrorKind.RATE_LIMITED: "Too many attempts. Please try again later.",
    ErrorKind.INVALID_OR_EXPIRED_CODE: "Invalid or expired code.",
    ErrorKind.PHONE_NOT_VERIFIED: "Phone number not verified.",
    ErrorKind.ACCOUNT_EXISTS: "Account already exists.",
    ErrorKind.TRANSIENT_FAILURE: "Something went wrong. Please try again.",
}

ERROR_STATUS_CODES = {
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.PHONE_NOT_VERIFIED: 403,
    ErrorKind.ACCOUNT_EXISTS: 409,
    ErrorKind.TRANSIENT_FAILURE: 503,
}


def error_message(kind: ErrorKind) -> str:
    return ERROR_MESSAGES[kind]


def status_code_for(kind: Optional[ErrorKind]) -> int:
    if kind is None:
        return 200
    return ERROR_STATUS_CODES.get(kind, 400)


def create_error_response(error_message: str, error_code: Optional[str] = None) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "error": error_message,
        "error_code": error_code,
        "user_id": None,
        "existing_user": None,
    }


def result_to_response(result: AuthResult) -> dict:
    """Render a core result in the caller-facing shape; tokens stay out of bodies."""
    if not result.success:
        return create_error_response(error_message(result.error), result.error.value)
    return {
        "success": True,
        "error": None,
        "error_code": None,
        "user_id": result.user_id,
        "existing_user": result.existing_user,
    }


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies get the same envelope as any other invalid input"""
    kind = ErrorKind.INVALID_INPUT
    return JSONResponse(
        status_code=status_code_for(kind),
        content=create_error_response(error_message(kind), kind.value),
    )
