from .verification_service import VerificationService
from .session_service import SessionService
from .profile_service import ProfileService

__all__ = ["VerificationService", "SessionService", "ProfileService"]
