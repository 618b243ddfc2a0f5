"""Storage contract and the in-process implementation."""

from __future__ import annotations

import copy
import threading
import uuid
from typing import Optional, Protocol

from ..models.domain import (
    AttendanceRecord,
    RecordType,
    User,
    UserLocationConfig,
    VacationRequest,
    VacationStatus,
)


def new_id() -> str:
    return uuid.uuid4().hex[:12]


class AttendanceStore(Protocol):
    """Key-value style storage used by the services.

    Writes are single-entity operations: whole-entity inserts, wholesale
    replacement of a user's branch list, and single-field updates.
    """

    def list_users(self) -> list[User]: ...

    def get_user(self, user_id: str) -> Optional[User]: ...

    def add_user(self, user: User) -> User: ...

    def update_user(self, user: User) -> User: ...

    def delete_user(self, user_id: str) -> bool: ...

    def get_location_config(self, user_id: str) -> UserLocationConfig: ...

    def save_location_config(self, config: UserLocationConfig) -> UserLocationConfig: ...

    def list_records(self) -> list[AttendanceRecord]: ...

    def get_record(self, record_id: str) -> Optional[AttendanceRecord]: ...

    def append_record(self, record: AttendanceRecord) -> AttendanceRecord: ...

    def update_record_type(self, record_id: str, record_type: RecordType) -> Optional[AttendanceRecord]: ...

    def delete_record(self, record_id: str) -> bool: ...

    def list_vacations(self) -> list[VacationRequest]: ...

    def get_vacation(self, vacation_id: str) -> Optional[VacationRequest]: ...

    def add_vacation(self, request: VacationRequest) -> VacationRequest: ...

    def update_vacation_status(self, vacation_id: str, status: VacationStatus) -> Optional[VacationRequest]: ...


class MemoryStore:
    """Process-local store used when no database is configured and in tests."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[str, User] = {}
        self._locations: dict[str, UserLocationConfig] = {}
        self._records: dict[str, AttendanceRecord] = {}
        self._vacations: dict[str, VacationRequest] = {}

    # Users

    def list_users(self) -> list[User]:
        with self._lock:
            return [copy.deepcopy(user) for user in self._users.values()]

    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return copy.deepcopy(user) if user else None

    def add_user(self, user: User) -> User:
        with self._lock:
            user.id = user.id or new_id()
            self._users[user.id] = copy.deepcopy(user)
            return user

    def update_user(self, user: User) -> User:
        with self._lock:
            self._users[user.id] = copy.deepcopy(user)
            return user

    def delete_user(self, user_id: str) -> bool:
        # Location configs are kept.
        with self._lock:
            return self._users.pop(user_id, None) is not None

    # Branch configuration

    def get_location_config(self, user_id: str) -> UserLocationConfig:
        with self._lock:
            config = self._locations.get(user_id)
            return copy.deepcopy(config) if config else UserLocationConfig(user_id=user_id)

    def save_location_config(self, config: UserLocationConfig) -> UserLocationConfig:
        with self._lock:
            self._locations[config.user_id] = copy.deepcopy(config)
            return config

    # Attendance records

    def list_records(self) -> list[AttendanceRecord]:
        with self._lock:
            return [copy.deepcopy(record) for record in self._records.values()]

    def get_record(self, record_id: str) -> Optional[AttendanceRecord]:
        with self._lock:
            record = self._records.get(record_id)
            return copy.deepcopy(record) if record else None

    def append_record(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._lock:
            record.id = record.id or new_id()
            self._records[record.id] = copy.deepcopy(record)
            return record

    def update_record_type(self, record_id: str, record_type: RecordType) -> Optional[AttendanceRecord]:
        with self._lock:
            record = self._records.get(record_id)
            if record is None:
                return None
            record.type = record_type
            return copy.deepcopy(record)

    def delete_record(self, record_id: str) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None

    # Vacation requests

    def list_vacations(self) -> list[VacationRequest]:
        with self._lock:
            return [copy.deepcopy(request) for request in self._vacations.values()]

    def get_vacation(self, vacation_id: str) -> Optional[VacationRequest]:
        with self._lock:
            request = self._vacations.get(vacation_id)
            return copy.deepcopy(request) if request else None

    def add_vacation(self, request: VacationRequest) -> VacationRequest:
        with self._lock:
            request.id = request.id or new_id()
            self._vacations[request.id] = copy.deepcopy(request)
            return request

    def update_vacation_status(self, vacation_id: str, status: VacationStatus) -> Optional[VacationRequest]:
        with self._lock:
            request = self._vacations.get(vacation_id)
            if request is None:
                return None
            request.status = status
            return copy.deepcopy(request)
