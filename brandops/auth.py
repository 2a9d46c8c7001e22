"""
Authentication & Authorization — signed session cookie (starlette SessionMiddleware).

- POST /api/login stores the user id in the session; /api/logout clears it.
- Data routers are open unless REQUIRE_LOGIN is set, in which case they need a session.
- User management always requires an admin session.
"""

import logging
from fastapi import Depends, HTTPException, Request

from brandops.schemas import User
from brandops.storage.base import Storage
from brandops.storage.factory import get_storage

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


async def get_current_user(
    request: Request,
    storage: Storage = Depends(get_storage),
) -> User:
    """Require a logged-in session and return its User from storage."""
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = await storage.get_user(int(user_id))
    if user is None:
        # Session outlived its user
        request.session.clear()
        raise HTTPException(status_code=401, detail="User not found")
    return user


async def require_auth(request: Request, storage: Storage = Depends(get_storage)) -> None:
    """Gate for data routers; only enforced when REQUIRE_LOGIN is on."""
    if request.app.state.settings.require_login:
        await get_current_user(request, storage)


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Require current user to be admin."""
    if user.role != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
