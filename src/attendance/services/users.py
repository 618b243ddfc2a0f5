"""User accounts, sign-in and capability checks."""

from __future__ import annotations

import logging
from typing import Optional

from ..models.domain import Permissions, User
from ..persistence.store import AttendanceStore
from .errors import CapabilityDenied, InvalidCredentials, InvalidRequest, NotFound

logger = logging.getLogger(__name__)

DEFAULT_ADMIN = User(id="1", username="admin", password="admin", is_admin=True)
DEFAULT_USERNAME = "user"
DEFAULT_PASSWORD = "123"


def ensure_default_users(store: AttendanceStore) -> list[User]:
    """Seed the default administrator into an empty user table."""
    users = store.list_users()
    if users:
        return users
    logger.info("No users found, creating default administrator account")
    admin = User(
        id=DEFAULT_ADMIN.id,
        username=DEFAULT_ADMIN.username,
        password=DEFAULT_ADMIN.password,
        is_admin=True,
    )
    store.add_user(admin)
    return [admin]


def authenticate(store: AttendanceStore, username: str, password: str) -> User:
    # Plaintext comparison against the stored record.
    for user in ensure_default_users(store):
        if user.username == username and user.password == password:
            return user
    logger.warning(f"Failed sign-in attempt for '{username}'")
    raise InvalidCredentials()


def get_user(store: AttendanceStore, user_id: str) -> User:
    user = store.get_user(user_id)
    if user is None:
        raise NotFound(f"User '{user_id}' not found.")
    return user


def require_admin(user: User) -> None:
    if not user.is_admin:
        raise CapabilityDenied("administration")


def require_capability(user: User, capability: str) -> None:
    if not getattr(user.effective_permissions(), capability):
        raise CapabilityDenied(capability)


def create_user(
    store: AttendanceStore,
    username: Optional[str] = None,
    password: Optional[str] = None,
    permissions: Optional[Permissions] = None,
) -> User:
    username = (username or "").strip() or DEFAULT_USERNAME
    if any(existing.username == username for existing in store.list_users()):
        raise InvalidRequest(f"Username '{username}' is already taken.")
    user = store.add_user(
        User(
            id="",
            username=username,
            password=password or DEFAULT_PASSWORD,
            is_admin=False,
            permissions=permissions,
        )
    )
    logger.info(f"Created user {user.id} ({user.username})")
    return user


def update_user(
    store: AttendanceStore,
    user_id: str,
    *,
    password: Optional[str] = None,
    permissions: Optional[Permissions] = None,
) -> User:
    user = get_user(store, user_id)
    if password:
        user.password = password
    if permissions is not None:
        user.permissions = permissions
    return store.update_user(user)


def delete_user(store: AttendanceStore, user_id: str) -> None:
    user = get_user(store, user_id)
    if user.is_admin:
        raise InvalidRequest("Administrator accounts cannot be deleted.")
    store.delete_user(user_id)
    logger.info(f"Deleted user {user_id}; branch configuration kept")
