"""
Bearer token verification.

Resolves the authenticated owner id from a signed JWT. Tokens are issued by a
separate identity service; this module only verifies them.

Dependencies: fastapi, pyjwt, helios.configs
System role: Request authentication for owner-scoped routes
"""

import logging

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from helios.configs import Settings
from helios.configs.auth import AuthSettings
from helios.api.deps.dependencies import get_settings_dependency

logger = logging.getLogger(__name__)
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_owner(token: str, config: AuthSettings) -> str:
    """
    Verify a token and extract its owner id.

    The owner is read from the ``id`` claim, falling back to ``sub``.

    Raises:
        HTTPException: 401 if the token is expired, malformed or has no owner claim
    """
    try:
        data = jwt.decode(token, config.secret, algorithms=[config.algorithm])
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning("Rejected bearer token", extra={"error_type": type(e).__name__})
        raise _unauthorized("Token is not valid")

    owner = data.get("id") or data.get("sub")
    if not owner:
        raise _unauthorized("Token is not valid")
    return str(owner)


def get_current_owner(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings_dependency),
) -> str:
    """Resolve the authenticated owner id for the request."""
    if creds is None or not creds.credentials:
        raise _unauthorized("No token, authorization denied")
    return decode_owner(creds.credentials, settings.auth)
