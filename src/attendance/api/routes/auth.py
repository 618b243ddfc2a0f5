"""Sign-in endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...persistence import AttendanceStore, get_store
from ...schemas.users import LoginRequest, UserModel
from ...services.errors import AttendanceError
from ...services.users import authenticate
from ..deps import http_error

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=UserModel, status_code=status.HTTP_200_OK)
def login(payload: LoginRequest, store: AttendanceStore = Depends(get_store)) -> UserModel:
    try:
        user = authenticate(store, payload.username, payload.password)
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return UserModel.from_domain(user)
