"""Aggregated attendance report endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from ...models.domain import User
from ...persistence import AttendanceStore, get_store
from ...schemas.reports import EmployeeSummaryModel, PeriodSummaryModel
from ...services.reports import summarize_by_period
from ..deps import admin_user

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/summary", response_model=List[PeriodSummaryModel])
def get_summary(
    period: str | None = Query(default=None, description="Restrict to one period label"),
    include_private: bool = Query(default=False, description="Count private log entries too"),
    _: User = Depends(admin_user),
    store: AttendanceStore = Depends(get_store),
) -> List[PeriodSummaryModel]:
    summaries = summarize_by_period(store.list_records(), period=period, include_private=include_private)
    return [
        PeriodSummaryModel(
            period=summary.period,
            total=summary.total,
            employees=[
                EmployeeSummaryModel(
                    user_id=employee.user_id,
                    user_name=employee.user_name,
                    counts=employee.counts,
                    total=employee.total,
                )
                for employee in summary.employees
            ],
        )
        for summary in summaries
    ]
