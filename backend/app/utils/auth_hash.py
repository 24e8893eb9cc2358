"""Password hashing helpers using passlib.

Used by the register/login flow:
- hash_password(plain: str) -> str
- verify_password(plain: str, hashed: str) -> bool

bcrypt is preferred. The cost can be set with the `BCRYPT_ROUNDS` environment
variable (int); when unset the backend default applies. If the bcrypt backend
cannot hash (missing or incompatible `bcrypt` package) the context falls back
to pbkdf2_sha256.
"""
from __future__ import annotations

import os
import warnings
from typing import Optional

from passlib.context import CryptContext


def _rounds_from_env() -> Optional[int]:
    raw = os.environ.get("BCRYPT_ROUNDS")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _build_context(rounds: Optional[int]) -> CryptContext:
    try:
        if rounds:
            ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
        else:
            ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")
        # force backend load now rather than on the first real password
        ctx.hash("probe")
        return ctx
    except Exception as exc:
        warnings.warn(
            "bcrypt backend not available or failed to initialize; falling back to pbkdf2_sha256. "
            f"Original error: {exc}",
            RuntimeWarning,
        )
    if rounds:
        return CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto", pbkdf2_sha256__rounds=rounds)
    return CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


pwd_context = _build_context(_rounds_from_env())


def hash_password(plain: str) -> str:
    """Hash a plaintext password and return the encoded hash string."""
    if plain is None:
        raise ValueError("Password must not be None")
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if ``plain`` matches the stored hash, False otherwise."""
    if plain is None or hashed is None:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False
