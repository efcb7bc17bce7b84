from typing import Optional, Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
import logging

from ..ports.verification_repo import VerificationRepository
from ..ports.user_repo import UserRepository
from ..ports.verify_provider import VerifyProvider, APPROVED
from ..ports.rate_limiter import RateLimiter
from ..ports.audit_logger import AuditLogger
from ..results import AuthResult, ErrorKind
from ..validation import is_valid_e164, is_valid_otp
from .session_service import SessionService

logger = logging.getLogger(__name__)


@dataclass
class VerificationService:
    """Send, resend and check one-time codes for a phone number.

    Codes are generated and compared by the hosted verify provider. Local
    attempt rows only drive the send quota and record which phones passed a
    check, so the provider's approval is authoritative.
    """
    verification_repo: VerificationRepository
    user_repo: UserRepository
    verify_provider: VerifyProvider
    rate_limiter: RateLimiter
    session_service: SessionService
    audit_logger: Optional[AuditLogger] = None
    window_minutes: int = 10
    max_codes_per_window: int = 5
    code_expiry_minutes: int = 10
    channel: str = "sms"
    now: Callable[[], datetime] = field(default=datetime.utcnow)

    def request_code(self, phone_number: str) -> AuthResult:
        return self._send(phone_number, action="code_requested")

    def resend_code(self, phone_number: str) -> AuthResult:
        # Same quota as the first send: the window is per phone, not per attempt.
        return self._send(phone_number, action="code_resent")

    def _send(self, phone_number: str, action: str) -> AuthResult:
        if not isinstance(phone_number, str):
            return AuthResult.fail(ErrorKind.INVALID_INPUT)
        phone = phone_number.strip()
        if not is_valid_e164(phone):
            return AuthResult.fail(ErrorKind.INVALID_PHONE_FORMAT)

        try:
            if not self.rate_limiter.allow(phone, self.max_codes_per_window, self.window_minutes * 60):
                logger.warning("Verification rate limit reached")
                self._audit(action, phone, success=False, details={"reason": ErrorKind.RATE_LIMITED.value})
                return AuthResult.fail(ErrorKind.RATE_LIMITED)

            created_at = self.now()
            expires_at = created_at + timedelta(minutes=self.code_expiry_minutes)
            attempt = self.verification_repo.create(phone, created_at, expires_at)
            self.verify_provider.start_verification(phone, self.channel)
        except Exception:
            logger.exception(f"{action} failed")
            return AuthResult.fail(ErrorKind.TRANSIENT_FAILURE)

        self._audit(action, phone, details={"attempt_id": attempt.id})
        return AuthResult.ok()

    def check_code(self, phone_number: str, code: str) -> AuthResult:
        if not isinstance(phone_number, str) or not isinstance(code, str):
            return AuthResult.fail(ErrorKind.INVALID_INPUT)
        phone = phone_number.strip()
        code = code.strip()
        if not is_valid_e164(phone):
            return AuthResult.fail(ErrorKind.INVALID_PHONE_FORMAT)
        if not is_valid_otp(code):
            return AuthResult.fail(ErrorKind.INVALID_CODE_FORMAT)

        try:
            status = self.verify_provider.check_verification(phone, code)
            if status != APPROVED:
                self._audit("code_checked", phone, success=False, details={"status": status})
                return AuthResult.fail(ErrorKind.INVALID_OR_EXPIRED_CODE)

            attempt = self.verification_repo.find_latest_pending(phone, self.now())
            if attempt:
                self.verification_repo.mark_verified(attempt.id)
            else:
                logger.info("Approved code with no pending attempt on record")

            user = self.user_repo.get_by_phone(phone)
            if user is None:
                self._audit("code_checked", phone)
                return AuthResult.ok(existing_user=False)

            token = self.session_service.create_session_token(user.id)
        except Exception:
            logger.exception("check_code failed")
            return AuthResult.fail(ErrorKind.TRANSIENT_FAILURE)

        self._audit("code_checked", phone, user_id=user.id)
        return AuthResult.ok(existing_user=True, user_id=user.id, session_token=token)

    def _audit(self, action: str, phone: str, **kwargs) -> None:
        if self.audit_logger is not None:
            self.audit_logger.log(action, phone, **kwargs)
