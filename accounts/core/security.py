"""Credential codec: password hashing and verification."""

from __future__ import annotations

from typing import Protocol

from argon2 import PasswordHasher as Argon2Hasher, exceptions as argon_exc


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, digest: str | None) -> bool: ...


class Argon2PasswordHasher:
    """Argon2id hashing with fixed cost parameters chosen at construction."""

    def __init__(self, **params) -> None:
        self._ph = Argon2Hasher(**params)

    def hash(self, password: str) -> str:
        return self._ph.hash(password)

    def verify(self, password: str, digest: str | None) -> bool:
        if not digest or password is None:
            return False
        try:
            return self._ph.verify(digest, password)
        except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHash):
            return False
