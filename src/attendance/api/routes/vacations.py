"""Vacation request endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, status

from ...models.domain import User, VacationStatus
from ...persistence import AttendanceStore, get_store
from ...schemas.vacations import (
    VacationCreateRequest,
    VacationDecisionRequest,
    VacationGroupModel,
    VacationModel,
)
from ...services import vacations as vacation_service
from ...services.errors import AttendanceError
from ..deps import current_user, http_error

router = APIRouter(prefix="/vacations", tags=["vacations"])

_DECISIONS = {"approve": VacationStatus.APPROVED, "reject": VacationStatus.REJECTED}


def _groups(grouped: dict) -> List[VacationGroupModel]:
    return [
        VacationGroupModel(period=period, requests=[VacationModel.from_domain(item) for item in items])
        for period, items in grouped.items()
    ]


@router.post("", response_model=VacationModel, status_code=status.HTTP_201_CREATED)
def create_vacation(
    payload: VacationCreateRequest,
    user: User = Depends(current_user),
    store: AttendanceStore = Depends(get_store),
) -> VacationModel:
    try:
        request = vacation_service.request_vacation(
            store,
            user,
            payload.start_date,
            payload.return_date,
            payload.days_count,
        )
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return VacationModel.from_domain(request)


@router.get("/mine", response_model=List[VacationGroupModel])
def list_my_vacations(
    user: User = Depends(current_user),
    store: AttendanceStore = Depends(get_store),
) -> List[VacationGroupModel]:
    try:
        grouped = vacation_service.my_vacations(store, user)
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return _groups(grouped)


@router.get("", response_model=List[VacationGroupModel])
def list_vacations(
    name: str | None = Query(default=None, description="Employee name fragment"),
    start: str | None = Query(default=None, description="Start date fragment (YYYY-MM-DD)"),
    user: User = Depends(current_user),
    store: AttendanceStore = Depends(get_store),
) -> List[VacationGroupModel]:
    try:
        grouped = vacation_service.all_vacations(store, user, name=name, start=start)
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return _groups(grouped)


@router.patch("/{vacation_id}", response_model=VacationModel)
def decide_vacation(
    vacation_id: str,
    payload: VacationDecisionRequest,
    user: User = Depends(current_user),
    store: AttendanceStore = Depends(get_store),
) -> VacationModel:
    try:
        request = vacation_service.decide_vacation(store, user, vacation_id, _DECISIONS[payload.decision])
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return VacationModel.from_domain(request)
