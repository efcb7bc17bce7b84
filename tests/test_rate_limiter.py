from datetime import datetime, timedelta

from chateo.infrastructure.rate_limit.attempt_rate_limiter import AttemptRateLimiter


class FakeCounts:
    def __init__(self, created):
        self.created = created
        self.queries = []

    def count_since(self, phone_number, since):
        self.queries.append((phone_number, since))
        return len([t for p, t in self.created if p == phone_number and t >= since])


def test_attempt_rate_limiter_allows_then_blocks():
    now = datetime(2026, 1, 1, 12, 0)
    repo = FakeCounts([("k1", now - timedelta(minutes=1))])
    rl = AttemptRateLimiter(repo, now=lambda: now)
    assert rl.allow("k1", max_requests=2, window_seconds=60 * 10) is True
    repo.created.append(("k1", now))
    assert rl.allow("k1", max_requests=2, window_seconds=60 * 10) is False


def test_attempt_rate_limiter_does_not_record():
    now = datetime(2026, 1, 1, 12, 0)
    repo = FakeCounts([])
    rl = AttemptRateLimiter(repo, now=lambda: now)
    for _ in range(5):
        assert rl.allow("k1", max_requests=1, window_seconds=60) is True


def test_attempt_rate_limiter_window_start():
    now = datetime(2026, 1, 1, 12, 0)
    repo = FakeCounts([("k1", now - timedelta(minutes=11))])
    rl = AttemptRateLimiter(repo, now=lambda: now)
    assert rl.allow("k1", max_requests=1, window_seconds=600) is True
    assert repo.queries == [("k1", now - timedelta(minutes=10))]
