"""Aggregated attendance counts per period and employee."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ...models.domain import AttendanceRecord, RecordType
from ..attendance.records import newest_first
from ..periods import group_by_period


@dataclass(slots=True)
class EmployeeSummary:
    user_id: str
    user_name: str
    counts: dict[str, int] = field(default_factory=lambda: {record_type.name: 0 for record_type in RecordType})

    @property
    def total(self) -> int:
        return sum(self.counts.values())


@dataclass(slots=True)
class PeriodSummary:
    period: str
    employees: list[EmployeeSummary]

    @property
    def total(self) -> int:
        return sum(employee.total for employee in self.employees)


def summarize_by_period(
    records: Iterable[AttendanceRecord],
    *,
    period: Optional[str] = None,
    include_private: bool = False,
) -> list[PeriodSummary]:
    """Count records by type for each employee, newest period first."""
    selected = [record for record in records if include_private or not record.is_private]
    summaries: list[PeriodSummary] = []
    for label, bucket in group_by_period(newest_first(selected)).items():
        if period and label != period:
            continue
        employees: dict[str, EmployeeSummary] = {}
        for record in bucket:
            summary = employees.get(record.user_id)
            if summary is None:
                summary = employees[record.user_id] = EmployeeSummary(record.user_id, record.user_name)
            summary.counts[record.type.name] += 1
        summaries.append(
            PeriodSummary(
                period=label,
                employees=sorted(employees.values(), key=lambda item: item.user_name.lower()),
            )
        )
    return summaries
