"""Supabase-backed implementation of the attendance store."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Optional

from supabase import Client

from ..models.domain import (
    AttendanceRecord,
    BranchLocation,
    Permissions,
    RecordType,
    User,
    UserLocationConfig,
    VacationRequest,
    VacationStatus,
)
from .store import new_id

logger = logging.getLogger(__name__)

USERS_TABLE = "users"
LOCATIONS_TABLE = "user_locations"
RECORDS_TABLE = "attendance_records"
VACATIONS_TABLE = "vacation_requests"


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def user_from_row(row: dict) -> User:
    raw_permissions = row.get("permissions")
    return User(
        id=str(row["id"]),
        username=str(row["username"]),
        password=str(row.get("password") or ""),
        is_admin=bool(row.get("is_admin")),
        permissions=Permissions.from_record(raw_permissions) if raw_permissions else None,
    )


def user_to_row(user: User) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "password": user.password,
        "is_admin": user.is_admin,
        "permissions": user.permissions.to_record() if user.permissions else None,
    }


def branch_from_row(row: dict) -> BranchLocation:
    return BranchLocation(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        address=str(row.get("address") or ""),
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
    )


def branch_to_row(branch: BranchLocation) -> dict:
    return {
        "id": branch.id,
        "name": branch.name,
        "address": branch.address,
        "latitude": branch.latitude,
        "longitude": branch.longitude,
    }


def record_from_row(row: dict) -> AttendanceRecord:
    accuracy = row.get("accuracy")
    return AttendanceRecord(
        id=str(row["id"]),
        user_id=str(row.get("user_id") or ""),
        user_name=str(row.get("user_name") or ""),
        date=_parse_timestamp(row["date"]),
        day_name=str(row.get("day_name") or ""),
        type=RecordType(row["type"]),
        is_private=bool(row.get("is_private")),
        branch_name=row.get("branch_name"),
        location_link=row.get("location_link"),
        accuracy=float(accuracy) if accuracy is not None else None,
    )


def record_to_row(record: AttendanceRecord) -> dict:
    return {
        "id": record.id,
        "user_id": record.user_id,
        "user_name": record.user_name,
        "date": record.date.isoformat(),
        "day_name": record.day_name,
        "type": record.type.value,
        "is_private": record.is_private,
        "branch_name": record.branch_name,
        "location_link": record.location_link,
        "accuracy": record.accuracy,
    }


def vacation_from_row(row: dict) -> VacationRequest:
    return VacationRequest(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        user_name=str(row.get("user_name") or ""),
        start_date=_parse_date(row["start_date"]),
        end_date=_parse_date(row.get("end_date") or row["start_date"]),
        return_date=_parse_date(row["return_date"]),
        days_count=int(row["days_count"]),
        status=VacationStatus(row["status"]),
        created_at=_parse_timestamp(row["created_at"]),
    )


def vacation_to_row(request: VacationRequest) -> dict:
    return {
        "id": request.id,
        "user_id": request.user_id,
        "user_name": request.user_name,
        "start_date": request.start_date.isoformat(),
        "end_date": request.end_date.isoformat(),
        "return_date": request.return_date.isoformat(),
        "days_count": request.days_count,
        "status": request.status.value,
        "created_at": request.created_at.isoformat(),
    }


class SupabaseStore:
    """Attendance store persisted in Supabase tables."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def _select(self, table: str, **filters: Any) -> list[dict]:
        query = self.client.table(table).select("*")
        for column, value in filters.items():
            query = query.eq(column, value)
        response = query.execute()
        return list(response.data or [])

    def _first(self, table: str, **filters: Any) -> Optional[dict]:
        rows = self._select(table, **filters)
        return rows[0] if rows else None

    def _skip_invalid(self, rows: list[dict], parser) -> list:
        items = []
        for row in rows:
            try:
                items.append(parser(row))
            except (KeyError, ValueError, TypeError) as e:
                logger.warning(f"Skipping invalid row {row.get('id')}: {e}")
        return items

    # Users

    def list_users(self) -> list[User]:
        return self._skip_invalid(self._select(USERS_TABLE), user_from_row)

    def get_user(self, user_id: str) -> Optional[User]:
        row = self._first(USERS_TABLE, id=user_id)
        return user_from_row(row) if row else None

    def add_user(self, user: User) -> User:
        user.id = user.id or new_id()
        self.client.table(USERS_TABLE).insert(user_to_row(user)).execute()
        return user

    def update_user(self, user: User) -> User:
        row = user_to_row(user)
        row.pop("id")
        self.client.table(USERS_TABLE).update(row).eq("id", user.id).execute()
        return user

    def delete_user(self, user_id: str) -> bool:
        # Location configs are kept.
        response = self.client.table(USERS_TABLE).delete().eq("id", user_id).execute()
        return bool(response.data)

    # Branch configuration

    def get_location_config(self, user_id: str) -> UserLocationConfig:
        row = self._first(LOCATIONS_TABLE, user_id=user_id)
        if not row:
            return UserLocationConfig(user_id=user_id)
        branches = self._skip_invalid(list(row.get("branches") or []), branch_from_row)
        return UserLocationConfig(user_id=user_id, branches=branches)

    def save_location_config(self, config: UserLocationConfig) -> UserLocationConfig:
        payload = {
            "user_id": config.user_id,
            "branches": [branch_to_row(branch) for branch in config.branches],
        }
        self.client.table(LOCATIONS_TABLE).upsert(payload, on_conflict="user_id").execute()
        return config

    # Attendance records

    def list_records(self) -> list[AttendanceRecord]:
        return self._skip_invalid(self._select(RECORDS_TABLE), record_from_row)

    def get_record(self, record_id: str) -> Optional[AttendanceRecord]:
        row = self._first(RECORDS_TABLE, id=record_id)
        return record_from_row(row) if row else None

    def append_record(self, record: AttendanceRecord) -> AttendanceRecord:
        record.id = record.id or new_id()
        self.client.table(RECORDS_TABLE).insert(record_to_row(record)).execute()
        return record

    def update_record_type(self, record_id: str, record_type: RecordType) -> Optional[AttendanceRecord]:
        response = (
            self.client.table(RECORDS_TABLE)
            .update({"type": record_type.value})
            .eq("id", record_id)
            .execute()
        )
        if not response.data:
            return None
        return record_from_row(response.data[0])

    def delete_record(self, record_id: str) -> bool:
        response = self.client.table(RECORDS_TABLE).delete().eq("id", record_id).execute()
        return bool(response.data)

    # Vacation requests

    def list_vacations(self) -> list[VacationRequest]:
        return self._skip_invalid(self._select(VACATIONS_TABLE), vacation_from_row)

    def get_vacation(self, vacation_id: str) -> Optional[VacationRequest]:
        row = self._first(VACATIONS_TABLE, id=vacation_id)
        return vacation_from_row(row) if row else None

    def add_vacation(self, request: VacationRequest) -> VacationRequest:
        request.id = request.id or new_id()
        self.client.table(VACATIONS_TABLE).insert(vacation_to_row(request)).execute()
        return request

    def update_vacation_status(self, vacation_id: str, status: VacationStatus) -> Optional[VacationRequest]:
        response = (
            self.client.table(VACATIONS_TABLE)
            .update({"status": status.value})
            .eq("id", vacation_id)
            .execute()
        )
        if not response.data:
            return None
        return vacation_from_row(response.data[0])
