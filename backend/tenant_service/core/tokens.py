"""Signed JWT issuance and validation.

Access and refresh tokens share one structure and one HMAC secret; they differ
only by their time-to-live. The subject is the composite ``"<tenantId>:<email>"``
username.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt

from tenant_service.core.errors import InvalidTokenError


logger = logging.getLogger(__name__)

_RESERVED_CLAIMS = ("sub", "iat", "exp")


@dataclass(frozen=True)
class TokenClaims:
    subject: str
    issued_at: datetime
    expires_at: datetime
    extra: dict[str, Any] = field(default_factory=dict)


class TokenService:
    def __init__(
        self,
        secret: str,
        access_ttl_ms: int,
        refresh_ttl_ms: int,
        algorithm: str = "HS256",
    ):
        if not secret:
            raise ValueError("JWT secret cannot be empty")
        if access_ttl_ms < 0 or refresh_ttl_ms < access_ttl_ms:
            raise ValueError("refresh TTL must be >= access TTL and both non-negative")
        self._secret = secret
        self._algorithm = algorithm
        self.access_ttl_ms = access_ttl_ms
        self.refresh_ttl_ms = refresh_ttl_ms

    def issue_access_token(self, subject: str, extra_claims: Optional[dict[str, Any]] = None) -> str:
        return self._issue(subject, self.access_ttl_ms, extra_claims)

    def issue_refresh_token(self, subject: str) -> str:
        return self._issue(subject, self.refresh_ttl_ms, None)

    def _issue(self, subject: str, ttl_ms: int, extra_claims: Optional[dict[str, Any]]) -> str:
        now = datetime.now(timezone.utc)
        payload: dict[str, Any] = dict(extra_claims or {})
        payload.update(
            {
                "sub": subject,
                "iat": now,
                "exp": now + timedelta(milliseconds=ttl_ms),
            }
        )
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> TokenClaims:
        """Verify the signature and return the claims; expiry is not checked here."""
        if not token or not isinstance(token, str):
            raise InvalidTokenError("Token is empty")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "require": list(_RESERVED_CLAIMS)},
            )
        except jwt.PyJWTError as exc:
            logger.debug("Token rejected: %s", type(exc).__name__)
            raise InvalidTokenError(f"Invalid token: {exc}") from exc
        return TokenClaims(
            subject=payload["sub"],
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            extra={k: v for k, v in payload.items() if k not in _RESERVED_CLAIMS},
        )

    def try_decode(self, token: Optional[str]) -> Optional[TokenClaims]:
        """Like decode(), but returns None instead of raising for a bad token."""
        try:
            return self.decode(token)
        except InvalidTokenError:
            return None

    def extract_subject(self, token: str) -> str:
        return self.decode(token).subject

    def extract_expiration(self, token: str) -> datetime:
        return self.decode(token).expires_at

    def extract_claim(self, token: str, name: str) -> Any:
        claims = self.decode(token)
        if name == "sub":
            return claims.subject
        if name == "iat":
            return claims.issued_at
        if name == "exp":
            return claims.expires_at
        return claims.extra.get(name)

    def is_expired(self, token: str) -> bool:
        return _expired(self.decode(token))

    def is_structurally_valid(self, token: Optional[str]) -> bool:
        claims = self.try_decode(token)
        return claims is not None and not _expired(claims)

    def validate_for(self, token: Optional[str], expected_subject: str) -> bool:
        claims = self.try_decode(token)
        return claims is not None and not _expired(claims) and claims.subject == expected_subject


def _expired(claims: TokenClaims) -> bool:
    return datetime.now(timezone.utc) >= claims.expires_at
