"""Request-scoped dependencies shared by the routers."""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from ..models.domain import User
from ..persistence import AttendanceStore, get_store
from ..services.errors import AttendanceError
from ..services.locations import ShortLinkResolver
from ..services.users import require_admin


def http_error(exc: AttendanceError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.to_detail())


def get_resolver() -> ShortLinkResolver:
    return ShortLinkResolver()


def current_user(
    x_user_id: str = Header(..., description="Identifier of the signed-in user."),
    store: AttendanceStore = Depends(get_store),
) -> User:
    user = store.get_user(x_user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "unknown_user", "message": "Sign in again."},
        )
    return user


def admin_user(user: User = Depends(current_user)) -> User:
    try:
        require_admin(user)
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return user
