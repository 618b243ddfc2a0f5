"""Vacation request schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Literal

from pydantic import BaseModel, Field

from ..models.domain import VacationRequest, VacationStatus


class VacationCreateRequest(BaseModel):
    start_date: date
    return_date: date
    days_count: int = Field(1, ge=1)


class VacationModel(BaseModel):
    id: str
    user_id: str
    user_name: str
    start_date: date
    end_date: date
    return_date: date
    days_count: int
    status: VacationStatus
    created_at: datetime

    @classmethod
    def from_domain(cls, request: VacationRequest) -> "VacationModel":
        return cls.model_validate(request, from_attributes=True)


class VacationGroupModel(BaseModel):
    period: str
    requests: List[VacationModel]


class VacationDecisionRequest(BaseModel):
    decision: Literal["approve", "reject"]
