from typing import Protocol, Optional
from dataclasses import dataclass
from datetime import datetime


@dataclass
class VerificationAttemptDto:
    id: str
    phone_number: str
    code: Optional[str]
    verified: bool
    expires_at: datetime
    created_at: datetime


class VerificationRepository(Protocol):
    def count_since(self, phone_number: str, since: datetime) -> int:
        ...

    def create(self, phone_number: str, created_at: datetime, expires_at: datetime, code: Optional[str] = None) -> VerificationAttemptDto:
        ...

    def find_latest_pending(self, phone_number: str, now: datetime) -> Optional[VerificationAttemptDto]:
        """Most recent unverified attempt whose expiry is not before ``now``."""
        ...

    def mark_verified(self, attempt_id: str) -> None:
        ...

    def has_verified(self, phone_number: str) -> bool:
        ...
