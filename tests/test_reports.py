from datetime import datetime, timezone

from src.attendance.models.domain import RecordType
from src.attendance.services.attendance import add_record
from src.attendance.services.reports import summarize_by_period

APRIL_PERIOD = "فترة: 21/4/2024 إلى 20/5/2024"
MAY_PERIOD = "فترة: 21/5/2024 إلى 20/6/2024"


def _at(day: int) -> datetime:
    return datetime(2024, 5, day, 9, 0, tzinfo=timezone.utc)


def test_counts_per_employee_and_period(store, employee, admin):
    add_record(store, employee, RecordType.ATTENDANCE, now=_at(2))
    add_record(store, employee, RecordType.MISSION, now=_at(3))
    add_record(store, admin, RecordType.VACATION, now=_at(3))
    add_record(store, employee, RecordType.ATTENDANCE, now=_at(22))
    add_record(store, employee, RecordType.MISSION, is_private=True, when=_at(4))

    summaries = summarize_by_period(store.list_records())

    assert [summary.period for summary in summaries] == [MAY_PERIOD, APRIL_PERIOD]
    april = summaries[1]
    assert [employee.user_name for employee in april.employees] == ["admin", "Ahmed"]
    ahmed = april.employees[1]
    assert ahmed.counts["ATTENDANCE"] == 1
    assert ahmed.counts["MISSION"] == 1
    assert ahmed.counts["LOC_ATTENDANCE"] == 0
    assert april.total == 3


def test_private_entries_and_period_filter(store, employee):
    add_record(store, employee, RecordType.ATTENDANCE, now=_at(2))
    add_record(store, employee, RecordType.MISSION, is_private=True, when=_at(4))

    summaries = summarize_by_period(store.list_records(), period=APRIL_PERIOD, include_private=True)

    assert len(summaries) == 1
    assert summaries[0].employees[0].counts["MISSION"] == 1
    assert summarize_by_period(store.list_records(), period=MAY_PERIOD) == []
