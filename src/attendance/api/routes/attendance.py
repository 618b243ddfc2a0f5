"""Attendance marking, history and geofenced check-in endpoints."""

from __future__ import annotations

from typing import List, Literal
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, Response, status

from ...models.domain import User
from ...persistence import AttendanceStore, get_store
from ...schemas.attendance import (
    LocationAttendanceRequest,
    LocationAttendanceResponse,
    LocationOptionsResponse,
    PositionRequestModel,
    RecordCreateRequest,
    RecordGroupModel,
    RecordModel,
    RecordUpdateRequest,
    TodayResponse,
)
from ...schemas.users import BranchModel
from ...services import attendance as attendance_service
from ...services.errors import AttendanceError
from ...services.export import export_filename, records_to_csv, records_to_xlsx
from ...services.users import require_capability
from ..deps import admin_user, current_user, http_error

router = APIRouter(prefix="/attendance", tags=["attendance"])

_MEDIA_TYPES = {
    "csv": "text/csv; charset=utf-8",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def _groups(grouped: dict) -> List[RecordGroupModel]:
    return [
        RecordGroupModel(period=period, records=[RecordModel.from_domain(record) for record in records])
        for period, records in grouped.items()
    ]


@router.post("", response_model=RecordModel, status_code=status.HTTP_201_CREATED)
def mark_attendance(
    payload: RecordCreateRequest,
    user: User = Depends(current_user),
    store: AttendanceStore = Depends(get_store),
) -> RecordModel:
    try:
        record = attendance_service.add_record(
            store,
            user,
            payload.type,
            when=payload.date,
            is_private=payload.is_private,
        )
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return RecordModel.from_domain(record)


@router.get("/today", response_model=TodayResponse)
def get_today(
    _: User = Depends(current_user),
    store: AttendanceStore = Depends(get_store),
) -> TodayResponse:
    return TodayResponse(
        period=attendance_service.current_period_label(),
        records=[RecordModel.from_domain(record) for record in attendance_service.today_records(store)],
    )


@router.get("/history", response_model=List[RecordGroupModel])
def get_history(
    search: str | None = Query(default=None, description="Employee name or date (d/m/yyyy) fragment"),
    user: User = Depends(current_user),
    store: AttendanceStore = Depends(get_store),
) -> List[RecordGroupModel]:
    try:
        require_capability(user, "view_history")
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return _groups(attendance_service.history(store, search))


@router.get("/history/export")
def export_history(
    period: str = Query(..., description="Period label as returned by /attendance/history"),
    file_format: Literal["csv", "xlsx"] = Query(default="csv", alias="format"),
    search: str | None = Query(default=None),
    user: User = Depends(current_user),
    store: AttendanceStore = Depends(get_store),
) -> Response:
    try:
        require_capability(user, "view_history")
        records = attendance_service.history_for_period(store, period, search)
    except AttendanceError as exc:
        raise http_error(exc) from exc

    if file_format == "xlsx":
        content: bytes | str = records_to_xlsx(records, period)
    else:
        content = records_to_csv(records, period)
    file_name = export_filename(period, file_format)
    return Response(
        content=content,
        media_type=_MEDIA_TYPES[file_format],
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(file_name)}"},
    )


@router.get("/my-logs", response_model=List[RecordGroupModel])
def get_my_logs(
    search: str | None = Query(default=None, description="Date (d/m/yyyy) fragment"),
    user: User = Depends(current_user),
    store: AttendanceStore = Depends(get_store),
) -> List[RecordGroupModel]:
    try:
        grouped = attendance_service.my_logs(store, user, search)
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return _groups(grouped)


@router.get("/location/options", response_model=LocationOptionsResponse)
def get_location_options(
    user: User = Depends(current_user),
    store: AttendanceStore = Depends(get_store),
) -> LocationOptionsResponse:
    """Branches the user may check in at, the allowed radius and the position flags to request."""
    try:
        options = attendance_service.location_options(store, user)
    except AttendanceError as exc:
        raise http_error(exc) from exc
    request = options.position_request
    return LocationOptionsResponse(
        branches=[BranchModel.from_domain(branch) for branch in options.branches],
        max_meters=options.max_meters,
        position_request=PositionRequestModel(
            high_accuracy=request.high_accuracy,
            timeout_seconds=request.timeout_seconds,
            maximum_age_seconds=request.maximum_age_seconds,
        ),
    )


@router.post("/location", response_model=LocationAttendanceResponse, status_code=status.HTTP_201_CREATED)
def mark_location_attendance(
    payload: LocationAttendanceRequest,
    user: User = Depends(current_user),
    store: AttendanceStore = Depends(get_store),
) -> LocationAttendanceResponse:
    source = attendance_service.ReportedPositionSource(
        latitude=payload.position.latitude,
        longitude=payload.position.longitude,
        accuracy=payload.position.accuracy,
        error_code=payload.position.error_code,
    )
    try:
        result = attendance_service.record_location_attendance(
            store,
            user,
            payload.branch_id,
            payload.type,
            source,
        )
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return LocationAttendanceResponse(
        record=RecordModel.from_domain(result.record),
        distance_meters=result.distance_meters,
    )


@router.patch("/{record_id}", response_model=RecordModel)
def correct_record(
    record_id: str,
    payload: RecordUpdateRequest,
    _: User = Depends(admin_user),
    store: AttendanceStore = Depends(get_store),
) -> RecordModel:
    try:
        record = attendance_service.correct_record_type(store, record_id, payload.type)
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return RecordModel.from_domain(record)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_record(
    record_id: str,
    _: User = Depends(admin_user),
    store: AttendanceStore = Depends(get_store),
) -> Response:
    try:
        attendance_service.delete_record(store, record_id)
    except AttendanceError as exc:
        raise http_error(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
