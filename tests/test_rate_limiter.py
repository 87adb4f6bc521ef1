import time

from recruitment.config import settings
from recruitment.core.rate_limiter import InMemoryRateLimiter, limit_for


def test_rate_limiter_allows_then_blocks_then_recovers():
    limiter = InMemoryRateLimiter()
    key = "ip:/api/auth/login"

    ok1, retry1 = limiter.allow(key, limit=2, window_seconds=1)
    ok2, retry2 = limiter.allow(key, limit=2, window_seconds=1)
    ok3, retry3 = limiter.allow(key, limit=2, window_seconds=1)

    assert ok1 is True and retry1 == 0
    assert ok2 is True and retry2 == 0
    assert ok3 is False
    assert retry3 >= 1

    time.sleep(1.05)
    ok4, retry4 = limiter.allow(key, limit=2, window_seconds=1)
    assert ok4 is True
    assert retry4 == 0


def test_rate_limiter_reset_clears_state():
    limiter = InMemoryRateLimiter()
    limiter.allow("k", limit=1, window_seconds=60)
    assert limiter.allow("k", limit=1, window_seconds=60)[0] is False
    limiter.reset()
    assert limiter.allow("k", limit=1, window_seconds=60)[0] is True


def test_limit_for_maps_guarded_routes():
    assert limit_for("POST", "/api/auth/login", settings) == settings.rate_limit_auth_per_min
    assert limit_for("post", "/api/users/register/", settings) == settings.rate_limit_auth_per_min
    assert limit_for("POST", "/api/job-application", settings) == settings.rate_limit_upload_per_min
    assert limit_for("GET", "/api/job-application", settings) is None
    assert limit_for("GET", "/api/jobs", settings) is None
