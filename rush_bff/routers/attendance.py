"""
attendance.py

이벤트 출석 API 모음.

주요 기능:
- 출석 기록 생성 / 수정, 명단 생성, 체크인 (ADMIN)
- RSVP (본인)
- 이벤트별 / 사용자별 출석 조회

설계 원칙:
- 생성(POST)과 수정(PUT)을 분리
  → 같은 (event, user) 에 대한 두 번째 POST 는 409
- 비즈니스 규칙은 service 계층(rush_bff.services.attendance)에 위임

"""

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rush_bff.core.deps import get_current_admin, get_current_user, get_db
from rush_bff.models.user import User
from rush_bff.schemas.attendance import (
    AttendanceRecordRequest,
    AttendanceResponse,
    AttendanceUpdateRequest,
    CheckInRequest,
    RosterRequest,
    RSVPRequest,
)
from rush_bff.services.attendance import (
    check_in,
    generate_roster,
    list_event_attendance,
    list_user_attendance,
    record_attendance,
    rsvp,
    update_attendance,
)

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.post(
    "/events/{event_id}",
    response_model=AttendanceResponse,
    status_code=status.HTTP_201_CREATED,
)
def record(
    event_id: uuid.UUID,
    body: AttendanceRecordRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    row = record_attendance(
        db, actor=admin, event_id=event_id, user_id=body.user_id, status=body.status, notes=body.notes
    )
    db.commit()
    db.refresh(row)
    return row


@router.put("/events/{event_id}/users/{user_id}", response_model=AttendanceResponse)
def update(
    event_id: uuid.UUID,
    user_id: uuid.UUID,
    body: AttendanceUpdateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    row = update_attendance(db, actor=admin, event_id=event_id, user_id=user_id, status=body.status, notes=body.notes)
    db.commit()
    db.refresh(row)
    return row


@router.post("/events/{event_id}/roster", response_model=list[AttendanceResponse])
def roster(
    event_id: uuid.UUID,
    body: RosterRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    rows = generate_roster(db, actor=admin, event_id=event_id, roles=body.roles)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows


@router.post("/events/{event_id}/rsvp", response_model=AttendanceResponse)
def rsvp_event(
    event_id: uuid.UUID,
    body: RSVPRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    row = rsvp(db, user=current_user, event_id=event_id, rsvp_status=body.rsvp_status)
    db.commit()
    db.refresh(row)
    return row


@router.post("/events/{event_id}/check-in", response_model=AttendanceResponse)
def check_in_user(
    event_id: uuid.UUID,
    body: CheckInRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    row = check_in(db, actor=admin, event_id=event_id, user_id=body.user_id, at=body.at, status=body.status)
    db.commit()
    db.refresh(row)
    return row


@router.get("/events/{event_id}", response_model=list[AttendanceResponse])
def event_attendance(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    return list_event_attendance(db, actor=admin, event_id=event_id)


@router.get("/me", response_model=list[AttendanceResponse])
def my_attendance(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return list_user_attendance(db, viewer=current_user, user_id=current_user.id)


@router.get("/users/{user_id}", response_model=list[AttendanceResponse])
def user_attendance(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return list_user_attendance(db, viewer=current_user, user_id=user_id)
