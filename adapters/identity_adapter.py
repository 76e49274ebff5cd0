"""
Identity provider adapter.

Verifies access tokens issued by the hosted identity provider. Tokens are
HS256 JWTs signed with the project's shared secret; the ``sub`` claim is the
user identifier that owns meal records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from app.config import Settings
from app.exceptions import MissingCredentialError, UnauthenticatedError

logger = logging.getLogger("macrolog.identity")


@dataclass(frozen=True)
class AuthenticatedUser:
    """The caller resolved from a verified access token."""

    id: str
    email: Optional[str] = None
    claims: Optional[Dict[str, Any]] = None


class JWTIdentityProvider:
    """Resolve the current user from a bearer token."""

    def __init__(
        self,
        secret: str,
        audience: Optional[str] = "authenticated",
        algorithms: Sequence[str] = ("HS256",),
    ):
        if not secret:
            raise MissingCredentialError("Missing AUTH_JWT_SECRET")
        self._secret = secret
        self._audience = audience
        self._algorithms = list(algorithms)

    @classmethod
    def from_settings(cls, settings: Settings) -> "JWTIdentityProvider":
        return cls(
            secret=settings.auth_jwt_secret,
            audience=settings.auth_jwt_audience,
            algorithms=settings.auth_jwt_algorithms,
        )

    def verify_token(self, token: str) -> Dict[str, Any]:
        """Decode and verify a token, returning its claims."""
        options = {"require": ["sub", "exp"]}
        if not self._audience:
            options["verify_aud"] = False
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=self._algorithms,
                audience=self._audience,
                options=options,
            )
        except ExpiredSignatureError as e:
            raise UnauthenticatedError(details={"reason": "token expired"}) from e
        except InvalidTokenError as e:
            raise UnauthenticatedError(details={"reason": str(e)}) from e

    def get_current_user(self, authorization: Optional[str]) -> AuthenticatedUser:
        """
        Resolve the caller from an ``Authorization`` header value.

        Raises:
            UnauthenticatedError: header missing, not a bearer token, or token invalid
        """
        token = extract_bearer_token(authorization)
        if not token:
            raise UnauthenticatedError()

        claims = self.verify_token(token)
        user_id = str(claims.get("sub") or "")
        if not user_id:
            raise UnauthenticatedError(details={"reason": "empty subject"})

        logger.debug(f"identity_resolved user_id={user_id}")
        return AuthenticatedUser(id=user_id, email=claims.get("email"), claims=claims)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None
