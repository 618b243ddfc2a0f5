"""Vacation requests and their approval."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from operator import attrgetter
from typing import Optional

from ..models.domain import User, VacationRequest, VacationStatus
from ..persistence.store import AttendanceStore
from .errors import InvalidRequest, NotFound
from .periods import group_by_period
from .users import require_capability

logger = logging.getLogger(__name__)

_by_start_date = attrgetter("start_date")


def request_vacation(
    store: AttendanceStore,
    user: User,
    start_date: Optional[date],
    return_date: Optional[date],
    days_count: int,
    *,
    now: Optional[datetime] = None,
) -> VacationRequest:
    require_capability(user, "request_vacation")
    if not start_date or not return_date or days_count <= 0:
        raise InvalidRequest("Start date, return date and a positive number of days are required.")
    if return_date < start_date:
        raise InvalidRequest("Return date cannot be before the start date.")

    request = store.add_vacation(
        VacationRequest(
            id="",
            user_id=user.id,
            user_name=user.username,
            start_date=start_date,
            end_date=start_date,
            return_date=return_date,
            days_count=days_count,
            status=VacationStatus.PENDING,
            created_at=now or datetime.now(timezone.utc),
        )
    )
    logger.info(f"Vacation request {request.id} created for user {user.id}")
    return request


def my_vacations(store: AttendanceStore, user: User) -> dict[str, list[VacationRequest]]:
    require_capability(user, "request_vacation")
    requests = [request for request in store.list_vacations() if request.user_id == user.id]
    return group_by_period(requests, key=_by_start_date)


def all_vacations(
    store: AttendanceStore,
    user: User,
    *,
    name: Optional[str] = None,
    start: Optional[str] = None,
) -> dict[str, list[VacationRequest]]:
    """Every request, optionally filtered by employee name and start date text, newest first."""
    require_capability(user, "manage_vacations")
    requests = [
        request
        for request in store.list_vacations()
        if (not name or name.lower() in request.user_name.lower())
        and (not start or start in request.start_date.isoformat())
    ]
    requests.sort(key=attrgetter("created_at"), reverse=True)
    return group_by_period(requests, key=_by_start_date)


def decide_vacation(
    store: AttendanceStore,
    user: User,
    vacation_id: str,
    status: VacationStatus,
) -> VacationRequest:
    require_capability(user, "manage_vacations")
    if status is VacationStatus.PENDING:
        raise InvalidRequest("A request can only be approved or rejected.")
    current = store.get_vacation(vacation_id)
    if current is None:
        raise NotFound(f"Vacation request '{vacation_id}' not found.")
    if current.status is not VacationStatus.PENDING:
        raise InvalidRequest(f"Vacation request is already {current.status.value}.")
    updated = store.update_vacation_status(vacation_id, status)
    if updated is None:
        raise NotFound(f"Vacation request '{vacation_id}' not found.")
    logger.info(f"Vacation request {vacation_id} set to {status.name} by {user.id}")
    return updated
