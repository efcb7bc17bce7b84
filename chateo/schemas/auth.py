# chateo/schemas/auth.py
from pydantic import BaseModel, Field
from typing import Optional


class SendCodeRequest(BaseModel):
    phone_number: str = Field(..., description="Phone number in E.164 format, e.g. +12125551234")


class VerifyCodeRequest(BaseModel):
    phone_number: str = Field(..., description="Phone number in E.164 format")
    code: str = Field(..., description="6-digit verification code")


class CreateProfileRequest(BaseModel):
    phone_number: str = Field(..., description="Verified phone number in E.164 format")
    first_name: str = Field(..., description="Up to 50 characters")
    last_name: Optional[str] = Field(None, description="Up to 50 characters")


class AuthResponse(BaseModel):
    success: bool
    error: Optional[str] = None
    error_code: Optional[str] = None
    user_id: Optional[str] = None
    existing_user: Optional[bool] = None


class SessionResponse(BaseModel):
    user_id: str


class UserResponse(BaseModel):
    id: str
    phone_number: str
    first_name: str
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    online_status: bool = False
