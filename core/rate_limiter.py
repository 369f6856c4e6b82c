# core/rate_limiter.py

from typing import Dict, NamedTuple, Optional, Tuple
from fastapi import HTTPException, Request
from collections import defaultdict
import time


class RateLimit(NamedTuple):
    max_requests: int
    window_seconds: int


# Credential guessing is throttled per account, sign-up floods per client
LOGIN_LIMIT = RateLimit(max_requests=10, window_seconds=60)
REGISTER_LIMIT = RateLimit(max_requests=5, window_seconds=900)


# In-memory, per-process sliding window
_attempts: Dict[str, list] = defaultdict(list)
_windows: Dict[str, int] = {}
_last_sweep = 0.0

# Idle identifiers are dropped at most this often
SWEEP_INTERVAL_SECONDS = 60


def _evict_expired(now: float) -> None:
    """Forget identifiers whose newest attempt has left their window."""
    global _last_sweep
    if now - _last_sweep < SWEEP_INTERVAL_SECONDS:
        return
    _last_sweep = now

    for identifier in list(_attempts):
        timestamps = _attempts[identifier]
        window = _windows.get(identifier, 0)
        if not timestamps or timestamps[-1] <= now - window:
            del _attempts[identifier]
            _windows.pop(identifier, None)


def check_rate_limit(identifier: str, limit: RateLimit, now: Optional[float] = None) -> Tuple[bool, int]:
    """
    Record one attempt for identifier if the window still has room.

    Returns:
        Tuple of (allowed: bool, remaining: int)
    """
    if now is None:
        now = time.time()
    _evict_expired(now)

    window_start = now - limit.window_seconds
    recent = [ts for ts in _attempts[identifier] if ts > window_start]
    _windows[identifier] = limit.window_seconds

    if len(recent) >= limit.max_requests:
        _attempts[identifier] = recent
        return False, 0

    recent.append(now)
    _attempts[identifier] = recent
    return True, limit.max_requests - len(recent)


def reset_rate_limits():
    global _last_sweep
    _attempts.clear()
    _windows.clear()
    _last_sweep = 0.0


def client_identifier(request: Request) -> str:
    client_ip = request.client.host if request.client else "unknown"

    # Behind a proxy the first forwarded address is the original client
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()

    return f"ip:{client_ip}"


def account_identifier(email: str) -> str:
    return f"account:{email.strip().lower()}"


def require_rate_limit(request: Request, limit: RateLimit, identifier: Optional[str] = None) -> int:
    """
    Raises HTTPException 429 once identifier (default: client IP) used up its window.
    """
    if identifier is None:
        identifier = client_identifier(request)

    allowed, remaining = check_rate_limit(identifier, limit)

    if not allowed:
        raise HTTPException(
            status_code=429,
            detail=(
                f"Too many attempts. Maximum {limit.max_requests} "
                f"per {limit.window_seconds} seconds."
            ),
            headers={
                "X-RateLimit-Limit": str(limit.max_requests),
                "X-RateLimit-Window": str(limit.window_seconds),
                "Retry-After": str(limit.window_seconds),
            },
        )

    return remaining
