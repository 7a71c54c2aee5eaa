"""
Identity resolution: verify a bearer token issued by the external identity
provider and map its subject onto an internal User row, creating the row on
first contact.
"""

import logging
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import httpx
from jose import jwt
from jose.exceptions import JOSEError

from passport.config import get_settings
from passport.exceptions import AuthenticationError, ConflictError
from passport.models import User
from passport.repositories import Repository

logger = logging.getLogger(__name__)
audit = logging.getLogger("passport.audit")


def _text(value) -> Optional[str]:
    # user_metadata is user-editable at the provider; non-strings count as absent
    return value if isinstance(value, str) and value else None


@dataclass
class IdentityClaims:
    """The verified subject plus whatever profile claims the token carried."""
    subject: str
    email: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "IdentityClaims":
        metadata = payload.get("user_metadata")
        if not isinstance(metadata, dict):
            metadata = {}
        return cls(
            subject=payload["sub"],
            email=_text(payload.get("email")),
            username=_text(metadata.get("username")),
            first_name=_text(metadata.get("firstName")) or _text(metadata.get("first_name")),
            last_name=_text(metadata.get("lastName")) or _text(metadata.get("last_name")),
            role=_text(metadata.get("role")),
        )


class IdentityVerifier:
    """Verifies tokens with a shared secret or the provider's JWKS document."""

    def __init__(
        self,
        jwks_url: str = "",
        jwt_secret: str = "",
        issuer: Optional[str] = None,
        audience: Optional[str] = None,
        algorithms: Optional[list] = None,
        cache_seconds: int = 600,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.jwks_url = jwks_url
        self.jwt_secret = jwt_secret
        self.issuer = issuer
        self.audience = audience
        self.algorithms = algorithms or ["RS256", "ES256", "HS256"]
        self.cache_seconds = cache_seconds
        self._transport = transport
        self._jwks: Optional[dict] = None
        self._jwks_expiry: float = 0

    async def verify(self, token: str) -> IdentityClaims:
        key = await self._signing_key()
        try:
            payload = jwt.decode(
                token,
                key,
                algorithms=self.algorithms,
                issuer=self.issuer,
                audience=self.audience,
                options={"verify_aud": self.audience is not None},
            )
        except JOSEError as e:
            logger.info("Token rejected: %s", e)
            raise AuthenticationError("Invalid or expired token") from e

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise AuthenticationError("Token missing subject")
        return IdentityClaims.from_payload(payload)

    async def _signing_key(self):
        if self.jwt_secret:
            return self.jwt_secret
        if not self.jwks_url:
            raise AuthenticationError("Identity provider is not configured")
        if self._jwks and time.monotonic() < self._jwks_expiry:
            return self._jwks

        try:
            async with httpx.AsyncClient(timeout=10.0, transport=self._transport) as client:
                response = await client.get(self.jwks_url)
                response.raise_for_status()
                jwks = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Could not fetch JWKS from %s: %s", self.jwks_url, e)
            raise AuthenticationError("Identity provider unreachable") from e

        self._jwks = jwks
        self._jwks_expiry = time.monotonic() + self.cache_seconds
        return jwks


@lru_cache()
def get_identity_verifier() -> IdentityVerifier:
    settings = get_settings()
    return IdentityVerifier(
        jwks_url=settings.auth_jwks_url,
        jwt_secret=settings.auth_jwt_secret,
        issuer=settings.auth_issuer,
        audience=settings.auth_audience,
        algorithms=settings.auth_algorithms,
        cache_seconds=settings.auth_jwks_cache_seconds,
    )


async def _new_user_fields(repo: Repository, claims: IdentityClaims) -> dict:
    short_id = claims.subject[:6]
    username = claims.username or (claims.email.split("@")[0] if claims.email else None) or f"user-{short_id}"
    if await repo.get_user_by_username(username):
        username = f"{username}-{short_id}"

    return {
        "username": username,
        "email": claims.email or f"{claims.subject}@placeholder.local",
        "first_name": claims.first_name or "User",
        "last_name": claims.last_name or "Account",
        # Only an exact "clinician" claim elevates; admin is never self-assigned
        "role": "clinician" if claims.role == "clinician" else "patient",
        "external_identity_ref": claims.subject,
    }


async def resolve_user(repo: Repository, claims: IdentityClaims) -> User:
    """Return the User mapped to this identity, provisioning it on first sight."""
    user = await repo.get_user_by_external_ref(claims.subject)
    if user:
        return user

    try:
        user = await repo.create(User, await _new_user_fields(repo, claims))
    except ConflictError:
        # Another request provisioned the same subject first
        user = await repo.get_user_by_external_ref(claims.subject)
        if user is None:
            raise
        return user

    audit.info("Provisioned user id=%s role=%s", user.id, user.role)
    return user
