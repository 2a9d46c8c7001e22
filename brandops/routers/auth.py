"""
Auth Router — Session login, logout and whoami.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from brandops.auth import SESSION_USER_KEY, get_current_user
from brandops.schemas import User, UserPublic
from brandops.services.auth_service import verify_password
from brandops.storage.base import Storage
from brandops.storage.factory import get_storage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


# ── Schemas ────────────────────────────────────────────────────────────

class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


# ── Endpoints ───────────────────────────────────────────────────────────

@router.post("/login", response_model=UserPublic)
async def login(payload: LoginRequest, request: Request, storage: Storage = Depends(get_storage)):
    """Check username and password; on success the session cookie carries the user id."""
    user = await storage.get_user_by_username(payload.username)
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info(f"Failed login for {payload.username!r}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    request.session[SESSION_USER_KEY] = user.id
    logger.info(f"User {user.username} logged in")
    return UserPublic.model_validate(user)


@router.get("/me", response_model=UserPublic)
async def me(user: User = Depends(get_current_user)):
    """Return the logged-in user."""
    return UserPublic.model_validate(user)


@router.post("/logout")
async def logout(request: Request):
    request.session.clear()
    return {"message": "Logged out successfully"}
