from __future__ import annotations

import threading
import time
from typing import Dict, Tuple

from fastapi import Request

from .errors import RateLimitedError


class RateLimiter:
    """Fixed-window hit counter keyed by scope and client address. A limit of 0 disables it."""

    def __init__(self, limit: int, window_seconds: int) -> None:
        self.limit = limit
        self.window_seconds = max(1, window_seconds)
        self._hits: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    def check(self, key: str) -> None:
        if self.limit <= 0:
            return
        now = time.time()
        with self._lock:
            count, reset = self._hits.get(key, (0, now + self.window_seconds))
            if now > reset:
                count = 0
                reset = now + self.window_seconds
            count += 1
            self._hits[key] = (count, reset)
            if count > self.limit:
                raise RateLimitedError("Too many requests. Please try again shortly.")

    def hit(self, request: Request, scope: str) -> None:
        self.check(f"{scope}:{_client_ip(request)}")


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"
