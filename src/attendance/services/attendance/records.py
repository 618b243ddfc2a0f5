"""Attendance marks, history and private logs."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from ...models.domain import AttendanceRecord, RecordType, User
from ...persistence.store import AttendanceStore
from ..errors import AlreadyRecorded, InvalidRequest, NotFound
from ..periods import day_name, format_date, group_by_period, local_date, period_label_for
from ..users import require_capability

logger = logging.getLogger(__name__)

# At most one of these per user per day.
DAILY_EXCLUSIVE_TYPES = frozenset({RecordType.ATTENDANCE, RecordType.VACATION, RecordType.MISSION})
LOCATION_TYPES = frozenset({RecordType.LOC_ATTENDANCE, RecordType.LOC_DEPARTURE})


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def new_record(user: User, record_type: RecordType, moment: datetime, **extra) -> AttendanceRecord:
    return AttendanceRecord(
        id="",
        user_id=user.id,
        user_name=user.username,
        date=moment,
        day_name=day_name(moment),
        type=record_type,
        **extra,
    )


def newest_first(records: Iterable[AttendanceRecord]) -> list[AttendanceRecord]:
    return sorted(records, key=lambda record: record.date, reverse=True)


def _matches_search(record: AttendanceRecord, term: Optional[str]) -> bool:
    if not term:
        return True
    return term.lower() in record.user_name.lower() or term in format_date(record.date)


def records_on(store: AttendanceStore, day: date) -> list[AttendanceRecord]:
    return [record for record in store.list_records() if local_date(record.date) == day]


def today_records(store: AttendanceStore, now: Optional[datetime] = None) -> list[AttendanceRecord]:
    return newest_first(records_on(store, local_date(now or utcnow())))


def add_record(
    store: AttendanceStore,
    user: User,
    record_type: RecordType,
    *,
    when: Optional[datetime] = None,
    is_private: bool = False,
    now: Optional[datetime] = None,
) -> AttendanceRecord:
    """Mark attendance, vacation or mission.

    Public marks are taken at the current time and only once per day. Private
    log entries may be back-dated.
    """
    if record_type in LOCATION_TYPES:
        raise InvalidRequest("Location attendance must go through the location check.")
    if when is not None and not is_private:
        raise InvalidRequest("Only private log entries can be back-dated.")

    require_capability(user, "view_my_logs" if is_private else "mark_attendance")
    moment = as_utc(when or now or utcnow())

    if not is_private:
        day = local_date(moment)
        for existing in records_on(store, day):
            if existing.user_id == user.id and existing.type in DAILY_EXCLUSIVE_TYPES:
                raise AlreadyRecorded(f"'{existing.type.value}' is already recorded for {format_date(day)}.")

    record = store.append_record(new_record(user, record_type, moment, is_private=is_private))
    logger.info(f"Recorded {record_type.name} for user {user.id}")
    return record


def history(store: AttendanceStore, search: Optional[str] = None) -> dict[str, list[AttendanceRecord]]:
    """Public records, newest first, grouped by period."""
    records = [
        record
        for record in store.list_records()
        if not record.is_private and _matches_search(record, search)
    ]
    return group_by_period(newest_first(records))


def history_for_period(store: AttendanceStore, label: str, search: Optional[str] = None) -> list[AttendanceRecord]:
    records = history(store, search).get(label)
    if records is None:
        raise NotFound(f"No records for period '{label}'.")
    return records


def my_logs(store: AttendanceStore, user: User, search: Optional[str] = None) -> dict[str, list[AttendanceRecord]]:
    require_capability(user, "view_my_logs")
    records = [
        record
        for record in store.list_records()
        if record.user_id == user.id and record.is_private and (not search or search in format_date(record.date))
    ]
    return group_by_period(newest_first(records))


def correct_record_type(store: AttendanceStore, record_id: str, record_type: RecordType) -> AttendanceRecord:
    record = store.update_record_type(record_id, record_type)
    if record is None:
        raise NotFound(f"Record '{record_id}' not found.")
    logger.info(f"Record {record_id} type corrected to {record_type.name}")
    return record


def delete_record(store: AttendanceStore, record_id: str) -> None:
    if not store.delete_record(record_id):
        raise NotFound(f"Record '{record_id}' not found.")


def current_period_label(now: Optional[datetime] = None) -> str:
    return period_label_for(now or utcnow())
