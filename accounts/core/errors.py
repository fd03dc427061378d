"""
Error taxonomy for the accounts API.

Services raise these exceptions; the HTTP boundary turns them into responses
using STATUS_BY_KIND, the single kind-to-status table.
"""

from __future__ import annotations

from typing import Any, Optional


class AccountsError(Exception):
    """Base class for every error surfaced to API clients."""

    kind = "internal"

    def __init__(self, message: str, data: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.data = data


class ValidationError(AccountsError):
    """Field-level input violations; ``data`` maps field name to details."""

    kind = "validation"


class DuplicateKeyError(AccountsError):
    kind = "duplicate"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(AccountsError):
    kind = "not_found"


class InvalidCredentialsError(AccountsError):
    kind = "unauthorized"


class RateLimitedError(AccountsError):
    kind = "rate_limited"


class StoreError(AccountsError):
    """Unexpected persistence failure. The message is safe to show clients."""

    kind = "store"


STATUS_BY_KIND = {
    "validation": 400,
    "duplicate": 400,
    "unauthorized": 401,
    "not_found": 404,
    "rate_limited": 429,
    "store": 500,
    "internal": 500,
}


def status_for(exc: AccountsError) -> int:
    return STATUS_BY_KIND.get(exc.kind, 500)
