import pytest

from src.attendance.config import settings
from src.attendance.models.domain import Permissions, User
from src.attendance.persistence.store import MemoryStore


@pytest.fixture(autouse=True)
def utc_calendar(monkeypatch: pytest.MonkeyPatch):
    # Calendar dates are computed in UTC so results do not depend on the host timezone.
    monkeypatch.setattr(settings, "timezone", "UTC")


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def admin(store: MemoryStore) -> User:
    return store.add_user(User(id="1", username="admin", password="admin", is_admin=True))


@pytest.fixture
def employee(store: MemoryStore) -> User:
    return store.add_user(
        User(
            id="u1",
            username="Ahmed",
            password="secret",
            permissions=Permissions(location_attendance=True, request_vacation=True),
        )
    )
