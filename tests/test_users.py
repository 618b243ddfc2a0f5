import pytest

from src.attendance.models.domain import BranchLocation, Permissions, User, UserLocationConfig
from src.attendance.services.branches import build_branch, replace_branches
from src.attendance.services.errors import (
    CapabilityDenied,
    CoordinateParseFailure,
    InvalidCredentials,
    InvalidRequest,
    NotFound,
)
from src.attendance.services.users import (
    authenticate,
    create_user,
    delete_user,
    ensure_default_users,
    require_admin,
    require_capability,
    update_user,
)


def test_missing_permissions_mean_baseline():
    legacy = User(id="9", username="old", password="x")
    permissions = legacy.effective_permissions()

    assert permissions.mark_attendance and permissions.view_history and permissions.view_my_logs
    assert permissions.location_attendance
    assert permissions.request_vacation
    assert not permissions.manage_vacations
    require_capability(legacy, "location_attendance")
    require_capability(legacy, "request_vacation")
    with pytest.raises(CapabilityDenied):
        require_capability(legacy, "manage_vacations")


def test_stored_permissions_fill_missing_flags():
    permissions = Permissions.from_record({"location_attendance": True})

    assert permissions.location_attendance is True
    assert permissions.mark_attendance is True
    assert permissions.manage_vacations is False
    assert Permissions.from_record(None) == Permissions.baseline()
    assert Permissions.from_record(permissions.to_record()) == permissions


def test_admin_has_every_capability():
    admin = User(id="1", username="admin", password="admin", is_admin=True, permissions=Permissions(mark_attendance=False))
    assert admin.effective_permissions() == Permissions.full()
    require_admin(admin)
    require_capability(admin, "manage_vacations")


def test_capability_checks(employee):
    require_capability(employee, "location_attendance")
    with pytest.raises(CapabilityDenied):
        require_capability(employee, "manage_vacations")
    with pytest.raises(CapabilityDenied):
        require_admin(employee)


def test_default_admin_is_seeded_once(store):
    users = ensure_default_users(store)

    assert [(user.id, user.username, user.is_admin) for user in users] == [("1", "admin", True)]
    assert len(ensure_default_users(store)) == 1


def test_authenticate(store, employee):
    assert authenticate(store, "Ahmed", "secret").id == "u1"
    with pytest.raises(InvalidCredentials):
        authenticate(store, "Ahmed", "wrong")
    with pytest.raises(InvalidCredentials):
        authenticate(store, "ahmed", "secret")


def test_authenticate_with_seeded_admin(store):
    assert authenticate(store, "admin", "admin").is_admin


def test_create_user_defaults_and_duplicates(store):
    user = create_user(store)

    assert user.id
    assert (user.username, user.password, user.is_admin) == ("user", "123", False)
    with pytest.raises(InvalidRequest):
        create_user(store, "user", "other")


def test_update_user(store, employee):
    updated = update_user(store, "u1", password="new", permissions=Permissions(request_vacation=False))

    assert updated.password == "new"
    assert store.get_user("u1").permissions.request_vacation is False
    assert update_user(store, "u1").password == "new"
    with pytest.raises(NotFound):
        update_user(store, "missing", password="x")


def test_delete_user_keeps_branch_config(store, employee, admin):
    branch = BranchLocation(id="b1", name="HQ", address="", latitude=30.0, longitude=31.0)
    store.save_location_config(UserLocationConfig(user_id="u1", branches=[branch]))

    delete_user(store, "u1")

    assert store.get_user("u1") is None
    assert store.get_location_config("u1").branches == [branch]
    with pytest.raises(InvalidRequest):
        delete_user(store, admin.id)
    with pytest.raises(NotFound):
        delete_user(store, "u1")


def test_build_branch_from_coordinates_or_link():
    explicit = build_branch(" HQ ", latitude=30.1, longitude=31.2, branch_id="b1")
    pasted = build_branch("Depot", location="https://www.google.com/maps/place/@29.97,31.13,15z")

    assert (explicit.id, explicit.name, explicit.latitude, explicit.longitude) == ("b1", "HQ", 30.1, 31.2)
    assert (pasted.latitude, pasted.longitude) == (29.97, 31.13)
    assert pasted.id


def test_build_branch_errors():
    with pytest.raises(InvalidRequest):
        build_branch("", latitude=1.0, longitude=2.0)
    with pytest.raises(InvalidRequest):
        build_branch("HQ")
    with pytest.raises(InvalidRequest):
        build_branch("HQ", latitude=float("nan"), longitude=2.0)
    with pytest.raises(CoordinateParseFailure):
        build_branch("HQ", location="next to the bakery")


def test_replace_branches(store, employee):
    first = build_branch("HQ", latitude=30.0, longitude=31.0, branch_id="b1")
    second = build_branch("Depot", latitude=30.5, longitude=31.5, branch_id="b2")

    replace_branches(store, "u1", [first, second])
    assert [branch.id for branch in store.get_location_config("u1").branches] == ["b1", "b2"]

    replace_branches(store, "u1", [second])
    assert [branch.id for branch in store.get_location_config("u1").branches] == ["b2"]

    with pytest.raises(InvalidRequest):
        replace_branches(store, "u1", [first, first])
    with pytest.raises(NotFound):
        replace_branches(store, "missing", [first])
