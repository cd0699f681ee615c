#!/usr/bin/env python3
"""
Bearer token authentication.

Every API route depends on `get_current_user_id`, which reads the
`Authorization: Bearer <token>` header and resolves a caller id through a
TokenVerifier. The default verifier checks a JWT signature with PyJWT and
reads the first present id claim (sub, uid, user_id).
"""

import logging
from functools import lru_cache
from typing import Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config_loader import AuthConfig, get_config

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class InvalidTokenError(Exception):
    """Raised when a token cannot be verified."""
    pass


class TokenVerifier:
    """Verifies bearer tokens issued by the identity provider."""

    def __init__(self, config: Optional[AuthConfig] = None):
        self.config = config or AuthConfig()

    def verify(self, token: str) -> str:
        """
        Verify a token and return the caller id.

        Raises:
            InvalidTokenError: If the signature, expiry or claims are invalid.
        """
        if not self.config.jwt_secret:
            raise InvalidTokenError("No JWT secret configured")

        options = {"verify_aud": self.config.audience is not None}
        try:
            claims = jwt.decode(
                token,
                self.config.jwt_secret,
                algorithms=self.config.algorithms,
                audience=self.config.audience,
                options=options
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(str(e)) from e

        for claim in self.config.uid_claims:
            uid = claims.get(claim)
            if uid:
                return str(uid)

        raise InvalidTokenError("Token carries no user id claim")


@lru_cache()
def get_token_verifier() -> TokenVerifier:
    return TokenVerifier(get_config().auth)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier)
) -> str:
    """
    FastAPI dependency resolving the authenticated caller id.

    Raises:
        HTTPException: 401 "Unauthorized" without a bearer token,
            401 "Invalid token" when verification fails.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        return verifier.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning(f"Token verification failed: {e}")
        raise HTTPException(status_code=401, detail="Invalid token")
