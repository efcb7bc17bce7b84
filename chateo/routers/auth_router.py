# chateo/routers/auth_router.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import JSONResponse
from sqlmodel import Session

from ..application.results import AuthResult
from ..application.services import VerificationService, SessionService, ProfileService
from ..database import get_session
from ..dependencies import (
    get_verification_service,
    get_profile_service,
    get_session_service,
    get_current_user_id,
)
from ..exceptions import result_to_response, status_code_for
from ..infrastructure.persistence.sqlalchemy.repositories.user_repository_sql import SqlUserRepository
from ..schemas import (
    SendCodeRequest, VerifyCodeRequest, CreateProfileRequest,
    AuthResponse, SessionResponse, UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _render(result: AuthResult, session_service: SessionService, success_status: int = 200) -> JSONResponse:
    status_code = success_status if result.success else status_code_for(result.error)
    response = JSONResponse(status_code=status_code, content=result_to_response(result))
    if result.success and result.session_token:
        session_service.set_session_cookie(response, result.session_token)
    return response


@router.post("/send-code", response_model=AuthResponse)
def send_code(
    body: SendCodeRequest,
    service: VerificationService = Depends(get_verification_service),
    session_service: SessionService = Depends(get_session_service),
):
    return _render(service.request_code(body.phone_number), session_service)


@router.post("/resend-code", response_model=AuthResponse)
def resend_code(
    body: SendCodeRequest,
    service: VerificationService = Depends(get_verification_service),
    session_service: SessionService = Depends(get_session_service),
):
    return _render(service.resend_code(body.phone_number), session_service)


@router.post("/verify-code", response_model=AuthResponse)
def verify_code(
    body: VerifyCodeRequest,
    service: VerificationService = Depends(get_verification_service),
    session_service: SessionService = Depends(get_session_service),
):
    result = service.check_code(body.phone_number, body.code)
    return _render(result, session_service)


@router.post("/profile", response_model=AuthResponse, status_code=201)
def create_profile(
    body: CreateProfileRequest,
    service: ProfileService = Depends(get_profile_service),
    session_service: SessionService = Depends(get_session_service),
):
    result = service.create_profile(body.phone_number, body.first_name, body.last_name)
    return _render(result, session_service, success_status=201)


@router.get("/session", response_model=SessionResponse)
def read_session(user_id: str = Depends(get_current_user_id)):
    return SessionResponse(user_id=user_id)


@router.get("/me", response_model=UserResponse)
def read_current_user(
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    user = SqlUserRepository(session).get_by_id(user_id)
    if user is None:
        # Valid signature but the account is gone
        raise HTTPException(status_code=401, detail="Not authenticated")
    return UserResponse(
        id=user.id,
        phone_number=user.phone_number,
        first_name=user.first_name,
        last_name=user.last_name,
        profile_image_url=user.profile_image_url,
        online_status=user.online_status,
    )


@router.post("/logout", response_model=AuthResponse)
def logout(
    response: Response,
    session_service: SessionService = Depends(get_session_service),
):
    session_service.clear_session(response)
    return AuthResponse(success=True)
