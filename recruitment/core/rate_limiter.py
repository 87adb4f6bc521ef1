import threading
import time


class InMemoryRateLimiter:
    """
    Fixed-window request counter keyed by client and path.
    State lives in process memory, so limits apply per worker.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state: dict[str, tuple[int, float]] = {}

    def allow(self, key: str, limit: int, window_seconds: int) -> tuple[bool, int]:
        """
        Returns (allowed, retry_after_seconds).
        """
        now = time.time()
        with self._lock:
            count, window_start = self._state.get(key, (0, now))
            if now - window_start >= window_seconds:
                count, window_start = 0, now
            if count >= limit:
                return False, max(1, int(window_seconds - (now - window_start)))
            self._state[key] = (count + 1, window_start)
            return True, 0

    def reset(self) -> None:
        with self._lock:
            self._state.clear()


rate_limiter = InMemoryRateLimiter()

# (method, path) pairs guarded by the middleware, mapped to the settings field holding the limit.
LIMITED_ROUTES = {
    ("POST", "/api/auth/login"): "rate_limit_auth_per_min",
    ("POST", "/api/users/register"): "rate_limit_auth_per_min",
    ("POST", "/api/job-application"): "rate_limit_upload_per_min",
    ("POST", "/api/applicant/profile/documents"): "rate_limit_upload_per_min",
}


def limit_for(method: str, path: str, config) -> int | None:
    field = LIMITED_ROUTES.get((method.upper(), path.rstrip("/") or "/"))
    if field is None:
        return None
    return getattr(config, field)
