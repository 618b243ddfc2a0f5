"""Serialize a period of attendance records into CSV/XLSX downloads."""

from __future__ import annotations

import csv
import io
import re
from typing import Sequence

from openpyxl import Workbook

from ...models.domain import AttendanceRecord
from ..periods import format_date

EXPORT_HEADERS = ["اسم الموظف", "اليوم", "التاريخ", "الحالة"]

_UNSAFE_FILENAME_CHARS = re.compile(r'[/\\?%*:|"<>]')


def _rows(records: Sequence[AttendanceRecord]) -> list[list[str]]:
    return [
        [record.user_name, record.day_name, format_date(record.date), record.type.value]
        for record in records
    ]


def export_filename(period_label: str, extension: str) -> str:
    return f"حضور_انصراف_{_UNSAFE_FILENAME_CHARS.sub('-', period_label)}.{extension}"


def records_to_csv(records: Sequence[AttendanceRecord], period_label: str) -> str:
    """CSV with a BOM so spreadsheet apps pick up UTF-8; first row is the period label."""
    buffer = io.StringIO()
    buffer.write("\ufeff")
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([period_label])
    writer.writerow(EXPORT_HEADERS)
    writer.writerows(_rows(records))
    return buffer.getvalue()


def records_to_xlsx(records: Sequence[AttendanceRecord], period_label: str) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Attendance"
    sheet.sheet_view.rightToLeft = True
    sheet.append([period_label])
    sheet.append(EXPORT_HEADERS)
    for row in _rows(records):
        sheet.append(row)

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
