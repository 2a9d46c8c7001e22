"""
Users Router — User management (admin only).
"""

import logging
from fastapi import APIRouter, Depends

from brandops.auth import require_admin
from brandops.schemas import User, UserCreate, UserPublic
from brandops.storage.base import Storage
from brandops.storage.factory import get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserPublic, status_code=201)
async def create_user(
    payload: UserCreate,
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    """Create a dashboard login. Duplicate usernames are rejected with 409."""
    user = await storage.create_user(payload)
    logger.info(f"Admin {admin.username} created user {user.username}")
    return UserPublic.model_validate(user)
