from __future__ import annotations

import logging
from dataclasses import dataclass

import jwt
from fastapi import Depends, Header, HTTPException, status

from internai.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    id: str
    role: str = "student"
    via_header: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role == "admin" and not self.via_header


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=message)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def decode_token(token: str) -> CurrentUser:
    if not settings.jwt_secret:
        raise jwt.InvalidTokenError("JWT_SECRET is not configured")
    claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    user_id = claims.get("id") or claims.get("sub")
    if not user_id:
        raise jwt.InvalidTokenError("token has no subject")
    return CurrentUser(id=str(user_id), role=str(claims.get("role") or "student"))


def resolve_user(authorization: str | None, x_user_id: str | None) -> CurrentUser | None:
    """Return the caller identity, or None when no credentials were sent.

    A bearer token is tried first. ``X-User-ID`` is a Firebase UID accepted
    without verification; it is honoured only when TRUST_X_USER_ID is on,
    which assumes the service sits behind a trusted network edge.
    """
    token = _bearer_token(authorization)
    header_id = (x_user_id or "").strip() if settings.trust_x_user_id else ""

    if not token and not header_id:
        return None

    if token:
        try:
            return decode_token(token)
        except jwt.PyJWTError as exc:
            logger.info("auth_token_rejected: %s", exc)
            if not header_id:
                raise _unauthorized("Token is not valid") from exc

    return CurrentUser(id=header_id, via_header=True)


def get_current_user(
    authorization: str | None = Header(default=None),
    x_user_id: str | None = Header(default=None, alias="X-User-ID"),
) -> CurrentUser:
    user = resolve_user(authorization, x_user_id)
    if user is None:
        raise _unauthorized("No token or User ID, authorization denied")
    return user


def get_optional_user(
    authorization: str | None = Header(default=None),
    x_user_id: str | None = Header(default=None, alias="X-User-ID"),
) -> CurrentUser | None:
    try:
        return resolve_user(authorization, x_user_id)
    except HTTPException:
        return None


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied. Admin only.")
    return user
