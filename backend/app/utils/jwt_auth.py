from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthUser:
    user_id: str
    email: Optional[str] = None


def _secret() -> str:
    s = os.getenv("JWT_SECRET", "")
    if not s:
        # required outside tests; set it in the environment
        raise RuntimeError("JWT_SECRET is not set")
    return s


def _algo() -> str:
    return os.getenv("JWT_ALGORITHM", "HS256")


def _exp_minutes() -> int:
    try:
        return int(os.getenv("JWT_EXP_MINUTES", "15"))
    except ValueError:
        return 15


def _header_fallback_enabled() -> bool:
    return os.getenv("ALLOW_USER_HEADER", "true").lower() == "true"


def create_access_token(subject: str, email: Optional[str] = None) -> str:
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=_exp_minutes())
    payload = {"sub": subject, "iat": int(now.timestamp()), "exp": int(exp.timestamp())}
    if email:
        payload["email"] = email
    return jwt.encode(payload, _secret(), algorithm=_algo())


def decode_token(token: str) -> dict:
    return jwt.decode(token, _secret(), algorithms=[_algo()])


def _user_from_token(token: str) -> AuthUser:
    try:
        payload = decode_token(token)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")
    sub = payload.get("sub")
    if not sub:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return AuthUser(user_id=str(sub), email=payload.get("email"))


def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> AuthUser:
    """
    Require an authenticated user:
    - Prefer JWT (Authorization: Bearer ...)
    - Fall back to X-User-Id when ALLOW_USER_HEADER is on (tests/demo)
    """
    if creds is not None and creds.scheme.lower() == "bearer":
        return _user_from_token(creds.credentials)

    if x_user_id and _header_fallback_enabled():
        return AuthUser(user_id=x_user_id)

    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing credentials")


def get_optional_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> Optional[AuthUser]:
    """Same resolution as get_current_user, but anonymous or bad credentials give None."""
    try:
        return get_current_user(creds=creds, x_user_id=x_user_id)
    except HTTPException:
        return None


def get_user_id(user: AuthUser = Depends(get_current_user)) -> str:
    return user.user_id
