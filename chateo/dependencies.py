from functools import lru_cache
from fastapi import Depends, HTTPException, Request
from sqlmodel import Session

from .core.config import settings
from .database import get_session
from .application.ports.verify_provider import VerifyProvider
from .application.services import VerificationService, SessionService, ProfileService
from .infrastructure.audit.std_logger import StdAuditLogger
from .infrastructure.otp.twilio_provider import TwilioVerifyProvider
from .infrastructure.rate_limit.attempt_rate_limiter import AttemptRateLimiter
from .infrastructure.persistence.sqlalchemy.repositories.verification_repository_sql import SqlVerificationRepository
from .infrastructure.persistence.sqlalchemy.repositories.user_repository_sql import SqlUserRepository


@lru_cache()
def get_session_service() -> SessionService:
    return SessionService(settings=settings)


@lru_cache()
def get_verify_provider() -> VerifyProvider:
    return TwilioVerifyProvider()


@lru_cache()
def get_audit_logger() -> StdAuditLogger:
    return StdAuditLogger()


def get_verification_service(
    session: Session = Depends(get_session),
    verify_provider: VerifyProvider = Depends(get_verify_provider),
    session_service: SessionService = Depends(get_session_service),
    audit_logger: StdAuditLogger = Depends(get_audit_logger),
) -> VerificationService:
    verification_repo = SqlVerificationRepository(session)
    return VerificationService(
        verification_repo=verification_repo,
        user_repo=SqlUserRepository(session),
        verify_provider=verify_provider,
        rate_limiter=AttemptRateLimiter(verification_repo),
        session_service=session_service,
        audit_logger=audit_logger,
        window_minutes=settings.RATE_LIMIT_WINDOW_MINUTES,
        max_codes_per_window=settings.MAX_CODES_PER_WINDOW,
        code_expiry_minutes=settings.CODE_EXPIRY_MINUTES,
        channel=settings.VERIFY_CHANNEL,
    )


def get_profile_service(
    session: Session = Depends(get_session),
    session_service: SessionService = Depends(get_session_service),
    audit_logger: StdAuditLogger = Depends(get_audit_logger),
) -> ProfileService:
    return ProfileService(
        user_repo=SqlUserRepository(session),
        verification_repo=SqlVerificationRepository(session),
        session_service=session_service,
        audit_logger=audit_logger,
    )


def get_current_user_id(
    request: Request,
    session_service: SessionService = Depends(get_session_service),
) -> str:
    user_id = session_service.get_session_user_id(request)
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user_id
