"""
FastAPI dependencies for authentication and authorization.

`authenticate_jwt` runs for every request (it is installed as an app-wide
dependency) and stores the verified token claims on `request.state.user`.
It never fails: a missing, malformed or expired token just leaves the
request anonymous.

The `ensure_*` dependencies are the gates placed in front of individual
routes. They run left to right in a route's `dependencies` list and the
first one to raise UnauthorizedError stops the request.

Usage:
    @router.patch("/{username}", dependencies=[Depends(ensure_correct_user_or_admin)])
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.errors import UnauthorizedError
from app.core.security import claims_from_token

logger = logging.getLogger(__name__)

# Optional bearer scheme: absent/non-bearer headers yield None instead of 403
bearer_scheme = HTTPBearer(auto_error=False)


def authenticate_jwt(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[dict]:
    """Attach the caller's claims to the request if a valid token was sent."""
    claims = claims_from_token(credentials.credentials if credentials else None)
    if credentials and claims is None:
        logger.debug("Ignoring invalid bearer token")

    request.state.user = claims
    return claims


def ensure_logged_in(user: Optional[dict] = Depends(authenticate_jwt)) -> dict:
    """
    Require any authenticated user.

    Raises:
        UnauthorizedError: If no valid token was sent
    """
    if not user:
        raise UnauthorizedError()
    return user


def ensure_admin(user: Optional[dict] = Depends(authenticate_jwt)) -> dict:
    """
    Require an authenticated admin.

    Raises:
        UnauthorizedError: If not logged in or isAdmin is not exactly true
    """
    if not user or user.get("isAdmin") is not True:
        raise UnauthorizedError()
    return user


def ensure_correct_user_or_admin(
    username: str,
    user: Optional[dict] = Depends(authenticate_jwt),
) -> dict:
    """
    Require the user named in the `{username}` path segment, or an admin.

    Raises:
        UnauthorizedError: Otherwise
    """
    if not user:
        raise UnauthorizedError()
    if user.get("username") == username or user.get("isAdmin") is True:
        return user
    raise UnauthorizedError()
