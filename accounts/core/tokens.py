"""Bearer token issuer backed by Authlib's JOSE implementation."""

from __future__ import annotations

import time
from typing import Any, Protocol

from authlib.jose import JoseError, jwt

from .errors import InvalidCredentialsError

BEARER_PREFIX = "Bearer "


class TokenIssuer(Protocol):
    def sign(self, claims: dict[str, Any]) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...


class JwtTokenIssuer:
    """Sign and verify HS256 tokens with a server-held secret.

    With ``ttl_seconds`` at 0 the token carries only the given claims and never
    expires; otherwise ``iat`` and ``exp`` are added.
    """

    def __init__(self, secret: str, *, ttl_seconds: int = 0, algorithm: str = "HS256") -> None:
        if not secret:
            raise ValueError("Token signing secret not configured")
        self._secret = secret
        self.ttl_seconds = ttl_seconds
        self.algorithm = algorithm

    def sign(self, claims: dict[str, Any]) -> str:
        payload = dict(claims)
        if self.ttl_seconds > 0:
            now = int(time.time())
            payload["iat"] = now
            payload["exp"] = now + self.ttl_seconds
        header = {"alg": self.algorithm, "typ": "JWT"}
        token = jwt.encode(header, payload, self._secret)
        return token.decode() if isinstance(token, bytes) else token

    def decode(self, token: str) -> dict[str, Any]:
        raw = (token or "").strip()
        if raw.startswith(BEARER_PREFIX):
            raw = raw[len(BEARER_PREFIX) :]
        try:
            claims = jwt.decode(raw, self._secret)
            claims.validate()
        except (JoseError, ValueError) as exc:
            raise InvalidCredentialsError("Invalid token") from exc
        return dict(claims)


def bearer_header(token: str) -> dict[str, str]:
    return {"Authorization": f"{BEARER_PREFIX}{token}"}
