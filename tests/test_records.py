import io
from datetime import datetime, timezone

import pytest
from openpyxl import load_workbook

from src.attendance.models.domain import Permissions, RecordType, User
from src.attendance.services.attendance import (
    add_record,
    correct_record_type,
    current_period_label,
    delete_record,
    history,
    history_for_period,
    my_logs,
    today_records,
)
from src.attendance.services.errors import AlreadyRecorded, CapabilityDenied, InvalidRequest, NotFound
from src.attendance.services.export import EXPORT_HEADERS, export_filename, records_to_csv, records_to_xlsx

MAY_2 = datetime(2024, 5, 2, 8, 30, tzinfo=timezone.utc)
MAY_2_LATER = datetime(2024, 5, 2, 16, 0, tzinfo=timezone.utc)
MAY_3 = datetime(2024, 5, 3, 8, 30, tzinfo=timezone.utc)
MAY_25 = datetime(2024, 5, 25, 9, 0, tzinfo=timezone.utc)

APRIL_PERIOD = "فترة: 21/4/2024 إلى 20/5/2024"
MAY_PERIOD = "فترة: 21/5/2024 إلى 20/6/2024"


def test_public_mark_once_per_day(store, employee):
    add_record(store, employee, RecordType.ATTENDANCE, now=MAY_2)

    with pytest.raises(AlreadyRecorded):
        add_record(store, employee, RecordType.MISSION, now=MAY_2_LATER)

    add_record(store, employee, RecordType.VACATION, now=MAY_3)
    assert len(store.list_records()) == 2


def test_other_users_do_not_block(store, employee, admin):
    add_record(store, employee, RecordType.ATTENDANCE, now=MAY_2)
    add_record(store, admin, RecordType.ATTENDANCE, now=MAY_2)
    assert len(store.list_records()) == 2


def test_record_fields(store, employee):
    record = add_record(store, employee, RecordType.ATTENDANCE, now=MAY_2)

    assert record.id
    assert record.user_name == "Ahmed"
    assert record.day_name == "الخميس"
    assert record.date == MAY_2


def test_naive_timestamps_are_utc(store, employee):
    record = add_record(store, employee, RecordType.ATTENDANCE, now=datetime(2024, 5, 2, 8, 30))
    assert record.date == MAY_2


def test_private_logs_can_be_back_dated_and_repeat(store, employee):
    add_record(store, employee, RecordType.ATTENDANCE, now=MAY_2)
    add_record(store, employee, RecordType.MISSION, is_private=True, when=MAY_2_LATER)
    add_record(store, employee, RecordType.VACATION, is_private=True, when=MAY_2_LATER)

    assert len(store.list_records()) == 3


def test_private_entry_today_blocks_public_mark(store, employee):
    add_record(store, employee, RecordType.VACATION, is_private=True, when=MAY_2)

    with pytest.raises(AlreadyRecorded):
        add_record(store, employee, RecordType.ATTENDANCE, now=MAY_2_LATER)

    add_record(store, employee, RecordType.ATTENDANCE, now=MAY_3)
    assert len(store.list_records()) == 2


def test_public_marks_cannot_be_back_dated(store, employee):
    with pytest.raises(InvalidRequest):
        add_record(store, employee, RecordType.ATTENDANCE, when=MAY_2)


def test_location_types_are_rejected(store, employee):
    with pytest.raises(InvalidRequest):
        add_record(store, employee, RecordType.LOC_ATTENDANCE, now=MAY_2)


def test_mark_attendance_capability(store):
    user = store.add_user(User(id="u3", username="Sara", password="x", permissions=Permissions(mark_attendance=False)))
    with pytest.raises(CapabilityDenied):
        add_record(store, user, RecordType.ATTENDANCE, now=MAY_2)


def test_history_excludes_private_and_groups_by_period(store, employee, admin):
    add_record(store, employee, RecordType.ATTENDANCE, now=MAY_2)
    add_record(store, admin, RecordType.MISSION, now=MAY_25)
    add_record(store, employee, RecordType.MISSION, is_private=True, when=MAY_3)

    grouped = history(store)

    assert list(grouped) == [MAY_PERIOD, APRIL_PERIOD]
    assert [record.user_name for record in grouped[MAY_PERIOD]] == ["admin"]
    assert [record.user_name for record in grouped[APRIL_PERIOD]] == ["Ahmed"]


def test_history_search_by_name_or_date(store, employee, admin):
    add_record(store, employee, RecordType.ATTENDANCE, now=MAY_2)
    add_record(store, admin, RecordType.ATTENDANCE, now=MAY_25)

    assert list(history(store, "ahm")) == [APRIL_PERIOD]
    assert list(history(store, "25/5/2024")) == [MAY_PERIOD]
    assert history(store, "nobody") == {}


def test_history_for_unknown_period(store, employee):
    add_record(store, employee, RecordType.ATTENDANCE, now=MAY_2)
    with pytest.raises(NotFound):
        history_for_period(store, MAY_PERIOD)


def test_my_logs_only_private_own_entries(store, employee, admin):
    add_record(store, employee, RecordType.ATTENDANCE, now=MAY_2)
    add_record(store, employee, RecordType.MISSION, is_private=True, when=MAY_3)
    add_record(store, admin, RecordType.MISSION, is_private=True, when=MAY_3)

    logs = my_logs(store, employee)

    assert list(logs) == [APRIL_PERIOD]
    assert [(record.user_id, record.is_private) for record in logs[APRIL_PERIOD]] == [("u1", True)]
    assert my_logs(store, employee, "4/5/2024") == {}


def test_today_records(store, employee, admin):
    add_record(store, employee, RecordType.ATTENDANCE, now=MAY_2)
    add_record(store, admin, RecordType.ATTENDANCE, now=MAY_2_LATER)
    add_record(store, admin, RecordType.ATTENDANCE, now=MAY_3)

    today = today_records(store, now=datetime(2024, 5, 2, 20, 0, tzinfo=timezone.utc))

    assert [record.user_name for record in today] == ["admin", "Ahmed"]


def test_correct_and_delete(store, employee):
    record = add_record(store, employee, RecordType.ATTENDANCE, now=MAY_2)

    corrected = correct_record_type(store, record.id, RecordType.MISSION)
    assert corrected.type is RecordType.MISSION
    assert store.get_record(record.id).type is RecordType.MISSION

    delete_record(store, record.id)
    assert store.list_records() == []

    with pytest.raises(NotFound):
        delete_record(store, record.id)
    with pytest.raises(NotFound):
        correct_record_type(store, "missing", RecordType.ATTENDANCE)


def test_current_period_label():
    assert current_period_label(MAY_25) == MAY_PERIOD


def test_csv_export(store, employee):
    add_record(store, employee, RecordType.ATTENDANCE, now=MAY_2)

    content = records_to_csv(history_for_period(store, APRIL_PERIOD), APRIL_PERIOD)
    lines = content.split("\n")

    assert content.startswith("\ufeff")
    assert lines[0] == "\ufeff" + APRIL_PERIOD
    assert lines[1] == ",".join(EXPORT_HEADERS)
    assert lines[2] == "Ahmed,الخميس,2/5/2024,حضور"


def test_xlsx_export(store, employee):
    add_record(store, employee, RecordType.ATTENDANCE, now=MAY_2)

    payload = records_to_xlsx(history_for_period(store, APRIL_PERIOD), APRIL_PERIOD)
    sheet = load_workbook(io.BytesIO(payload)).active
    rows = [list(row) for row in sheet.iter_rows(values_only=True)]

    assert rows[0][0] == APRIL_PERIOD
    assert rows[1] == EXPORT_HEADERS
    assert rows[2] == ["Ahmed", "الخميس", "2/5/2024", "حضور"]


def test_export_filename_is_safe():
    name = export_filename(APRIL_PERIOD, "csv")
    assert name == "حضور_انصراف_فترة- 21-4-2024 إلى 20-5-2024.csv"
