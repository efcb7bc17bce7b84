from dataclasses import dataclass
from typing import Optional
import logging

from ..ports.user_repo import UserRepository
from ..ports.verification_repo import VerificationRepository
from ..ports.audit_logger import AuditLogger
from ..results import AuthResult, ErrorKind
from ..validation import is_valid_e164
from .session_service import SessionService

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 50


@dataclass
class ProfileService:
    user_repo: UserRepository
    verification_repo: VerificationRepository
    session_service: SessionService
    audit_logger: Optional[AuditLogger] = None

    def create_profile(self, phone_number: str, first_name: str, last_name: Optional[str] = None) -> AuthResult:
        """Create the user for a verified phone and mint its first session.

        Checks run in order and stop at the first failure: input types, phone
        format, names, verified attempt, then existing account. Not safe to
        retry blindly after a transient failure; the account may exist.
        """
        if not isinstance(phone_number, str) or not isinstance(first_name, str):
            return AuthResult.fail(ErrorKind.INVALID_INPUT)
        if last_name is not None and not isinstance(last_name, str):
            return AuthResult.fail(ErrorKind.INVALID_INPUT)

        phone = phone_number.strip()
        first = first_name.strip()
        last = last_name.strip() if last_name is not None else None

        if not is_valid_e164(phone):
            return AuthResult.fail(ErrorKind.INVALID_PHONE_FORMAT)
        if not first:
            return AuthResult.fail(ErrorKind.FIRST_NAME_REQUIRED)
        if len(first) > NAME_MAX_LENGTH:
            return AuthResult.fail(ErrorKind.FIRST_NAME_TOO_LONG)
        if last and len(last) > NAME_MAX_LENGTH:
            return AuthResult.fail(ErrorKind.LAST_NAME_TOO_LONG)

        try:
            if not self.verification_repo.has_verified(phone):
                return AuthResult.fail(ErrorKind.PHONE_NOT_VERIFIED)
            if self.user_repo.get_by_phone(phone) is not None:
                return AuthResult.fail(ErrorKind.ACCOUNT_EXISTS)

            user = self.user_repo.create(phone, first, last or None)
            token = self.session_service.create_session_token(user.id)
        except Exception:
            logger.exception("create_profile failed")
            return AuthResult.fail(ErrorKind.TRANSIENT_FAILURE)

        if self.audit_logger is not None:
            self.audit_logger.log("profile_created", phone, user_id=user.id)
        return AuthResult.ok(user_id=user.id, existing_user=False, session_token=token)
