from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app import config
from app.models.auth import LoginRequest, MeResponse, RegisterRequest, RegisterResponse, TokenResponse
from app.storage.users_store import UsersStore
from app.utils.auth_hash import hash_password, verify_password
from app.utils.jwt_auth import AuthUser, create_access_token, get_current_user

log = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

users = UsersStore(config.data_dir())


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(req: RegisterRequest) -> RegisterResponse:
    if users.get_by_email(req.email) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User exists")

    try:
        rec = users.create(req.email, hash_password(req.password))
    except FileExistsError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User exists")

    log.info("user registered user=%s", rec.user_id)
    return RegisterResponse(user_id=rec.user_id, email=rec.email)


@router.post("/login", response_model=TokenResponse)
def login(req: LoginRequest) -> TokenResponse:
    rec = users.get_by_email(req.email)
    if rec is None or not verify_password(req.password, rec.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    return TokenResponse(access_token=create_access_token(subject=rec.user_id, email=rec.email))


@router.get("/me", response_model=MeResponse)
def me(user: AuthUser = Depends(get_current_user)) -> MeResponse:
    return MeResponse(user_id=user.user_id, email=user.email)
