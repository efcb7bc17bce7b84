from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    INVALID_PHONE_FORMAT = "invalid_phone_format"
    INVALID_CODE_FORMAT = "invalid_code_format"
    FIRST_NAME_REQUIRED = "first_name_required"
    FIRST_NAME_TOO_LONG = "first_name_too_long"
    LAST_NAME_TOO_LONG = "last_name_too_long"
    RATE_LIMITED = "rate_limited"
    INVALID_OR_EXPIRED_CODE = "invalid_or_expired_code"
    PHONE_NOT_VERIFIED = "phone_not_verified"
    ACCOUNT_EXISTS = "account_exists"
    TRANSIENT_FAILURE = "transient_failure"


@dataclass
class AuthResult:
    """Outcome of an onboarding operation.

    ``session_token`` is set when the caller should establish a session for
    ``user_id``; it is handed to the session cookie, never to a response body.
    """
    success: bool
    error: Optional[ErrorKind] = None
    user_id: Optional[str] = None
    existing_user: Optional[bool] = None
    session_token: Optional[str] = None

    @classmethod
    def ok(cls, **kwargs) -> "AuthResult":
        return cls(success=True, **kwargs)

    @classmethod
    def fail(cls, error: ErrorKind) -> "AuthResult":
        return cls(success=False, error=error)
