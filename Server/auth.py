"""
GreenPlan Server - Authentication Utilities

This module provides authentication functionality including:
- JWT session token issuing and verification (TokenCodec)
- Authentication dependency for protected routes
- Token expiration handling

Security Requirements:
- Never store passwords as plain text (handled in managers/database_manager.py)
- Tokens are self-contained and valid for exactly one hour
- Verification failures never say which check failed
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pydantic import ValidationError

from config import Settings
from exceptions import ForbiddenError, InvalidTokenError, UnauthenticatedError
from models.auth import Identity

logger = logging.getLogger(__name__)

# Session tokens are not configurable: one hour from issuance
TOKEN_LIFETIME = timedelta(hours=1)

# Security scheme for FastAPI (errors are raised by AuthenticateRequest instead)
security = HTTPBearer(auto_error=False)


def UtcNow() -> datetime:
    """Default clock for the token codec"""
    return datetime.now(timezone.utc)


# ==================== Token Codec ====================

class TokenCodec:
    """
    Issues and verifies signed, time-limited session tokens

    The signing secret is injected at construction and never changes
    afterwards. There is no revocation list: a token stays valid for its
    full lifetime.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", clock: Callable[[], datetime] = UtcNow):
        """
        Initialize token codec

        Args:
            secret: Signing secret
            algorithm: JWT signing algorithm
            clock: Callable returning the current UTC time
        """
        self.secret = secret
        self.algorithm = algorithm
        self.clock = clock

    @classmethod
    def FromSettings(cls, settings: Settings) -> "TokenCodec":
        """Build a codec from server settings"""
        return cls(settings.jwt_secret, settings.jwt_algorithm)

    def Issue(self, identity: Identity) -> str:
        """
        Create a signed session token for an identity

        Args:
            identity: Verified identity (id, username, role)

        Returns:
            str: Encoded JWT token
        """
        issued_at = self.clock()
        expire = issued_at + TOKEN_LIFETIME

        to_encode = {
            "id": identity.id,
            "username": identity.username,
            "role": identity.role,
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def Verify(self, token: str) -> Identity:
        """
        Decode and validate a session token

        Expiry is checked against the codec clock rather than by the JWT
        library so that issuing and verifying share one notion of time.

        Args:
            token: JWT token string

        Returns:
            Identity: Identity claims carried by the token

        Raises:
            InvalidTokenError: If the token is tampered, malformed or expired
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False}
            )
        except JWTError:
            raise InvalidTokenError()

        expires_at = payload.get("exp")
        if not isinstance(expires_at, (int, float)) or isinstance(expires_at, bool):
            raise InvalidTokenError()
        if self.clock().timestamp() >= expires_at:
            raise InvalidTokenError()

        try:
            return Identity(
                id=payload["id"],
                username=payload["username"],
                role=payload["role"]
            )
        except (KeyError, ValidationError):
            raise InvalidTokenError()


# ==================== Authentication Dependencies ====================

def GetTokenCodec(request: Request) -> TokenCodec:
    """FastAPI dependency returning the codec created at startup"""
    return request.app.state.token_codec


def AuthenticateRequest(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_codec: TokenCodec = Depends(GetTokenCodec)
) -> Identity:
    """
    FastAPI dependency to authenticate the caller
    Verifies the bearer token and attaches the identity to the request

    Args:
        request: Incoming request
        credentials: HTTP Bearer token from Authorization header
        token_codec: Codec created at startup

    Returns:
        Identity: The verified identity

    Raises:
        UnauthenticatedError: If no bearer token was sent
        ForbiddenError: If the token does not verify
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()

    try:
        identity = token_codec.Verify(credentials.credentials)
    except InvalidTokenError:
        logger.warning(f"Rejected invalid token on {request.method} {request.url.path}")
        raise ForbiddenError()

    request.state.identity = identity
    return identity
