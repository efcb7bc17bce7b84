from datetime import datetime, timedelta
from typing import Callable

from ...application.ports.rate_limiter import RateLimiter
from ...application.ports.verification_repo import VerificationRepository


class AttemptRateLimiter(RateLimiter):
    """Rolling-window limiter over stored verification attempts.

    Nothing is recorded here; creating the attempt row is what consumes quota.
    Two concurrent requests can both pass before either row is visible.
    """

    def __init__(self, verification_repo: VerificationRepository, now: Callable[[], datetime] = datetime.utcnow) -> None:
        self.verification_repo = verification_repo
        self._now = now

    def allow(self, key: str, max_requests: int, window_seconds: int) -> bool:
        window_start = self._now() - timedelta(seconds=window_seconds)
        count = self.verification_repo.count_since(key, window_start)
        return count < max_requests
