from .auth import (
    SendCodeRequest, VerifyCodeRequest, CreateProfileRequest,
    AuthResponse, SessionResponse, UserResponse,
)

__all__ = [
    "SendCodeRequest",
    "VerifyCodeRequest",
    "CreateProfileRequest",
    "AuthResponse",
    "SessionResponse",
    "UserResponse",
]
