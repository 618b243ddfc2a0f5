"""Report API schemas."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel


class EmployeeSummaryModel(BaseModel):
    user_id: str
    user_name: str
    counts: Dict[str, int]
    total: int


class PeriodSummaryModel(BaseModel):
    period: str
    total: int
    employees: List[EmployeeSummaryModel]
