"""
services/attendance.py

이벤트 출석(Attendance Ledger) 비즈니스 로직.

주요 기능:
- 출석 레코드 생성 (관리자, 생성 전용)
- 출석 상태 수정 (관리자, 명시적 수정 경로)
- 명단 생성 (역할별 활성 사용자에 대해 PENDING 레코드 일괄 생성)
- RSVP (본인, 정원 초과 시 거절)
- 체크인 (관리자, checked_in_at / checked_in_by 동시 기록)

설계 원칙:
- (event, user) 쌍마다 레코드 1개
  → 두 번째 생성 요청은 ConflictError (덮어쓰지 않음)
- DB UNIQUE 제약이 먼저 걸리는 경쟁 상황도 ConflictError 로 변환
- 체크인은 기존 레코드가 있어야만 가능

"""

import logging
import uuid
from datetime import datetime
from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rush_bff.core.errors import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from rush_bff.db.time import as_utc, utcnow
from rush_bff.models.attendance import Attendance, AttendanceStatus, RSVPStatus
from rush_bff.models.user import Role, User
from rush_bff.services.access import get_user_or_404, require_admin, require_self_or_admin
from rush_bff.services.events import get_event, require_event

logger = logging.getLogger(__name__)

CHECK_IN_STATUSES = (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


def get_attendance(db: Session, *, event_id: uuid.UUID, user_id: uuid.UUID) -> Attendance | None:
    return db.scalar(
        select(Attendance).where(Attendance.event_id == event_id, Attendance.user_id == user_id)
    )


def _insert(db: Session, row: Attendance) -> Attendance:
    try:
        with db.begin_nested():
            db.add(row)
            db.flush()
    except IntegrityError:
        raise ConflictError("Attendance already recorded for this event and user", field="user_id")
    return row


"""
출석 레코드 생성

- ADMIN 전용
- 같은 (event, user) 레코드가 있으면 ConflictError
- 수정은 update_attendance 로만 가능

"""
def record_attendance(
    db: Session,
    *,
    actor: User,
    event_id: uuid.UUID,
    user_id: uuid.UUID,
    status: AttendanceStatus,
    notes: str | None = None,
) -> Attendance:
    require_admin(actor, action="record attendance")
    require_event(db, event_id)
    get_user_or_404(db, user_id)

    if get_attendance(db, event_id=event_id, user_id=user_id):
        raise ConflictError("Attendance already recorded for this event and user", field="user_id")

    row = _insert(db, Attendance(event_id=event_id, user_id=user_id, status=status, notes=notes))
    logger.info("Recorded attendance %s (event=%s user=%s) by %s", row.id, event_id, user_id, actor.id)
    return row


def update_attendance(
    db: Session,
    *,
    actor: User,
    event_id: uuid.UUID,
    user_id: uuid.UUID,
    status: AttendanceStatus,
    notes: str | None = None,
) -> Attendance:
    require_admin(actor, action="record attendance")

    row = get_attendance(db, event_id=event_id, user_id=user_id)
    if not row:
        raise NotFoundError("Attendance not found", field="user_id")

    row.status = status
    if notes is not None:
        row.notes = notes
    db.flush()
    logger.info("Updated attendance %s to %s by %s", row.id, status.value, actor.id)
    return row


"""
명단 생성

- 지정한 역할의 활성 사용자 중 아직 레코드가 없는 사람만 PENDING 으로 생성
- 이미 있는 레코드는 건드리지 않음
- 생성된 레코드 목록 반환

"""
def generate_roster(
    db: Session,
    *,
    actor: User,
    event_id: uuid.UUID,
    roles: Iterable[Role],
) -> list[Attendance]:
    require_admin(actor, action="generate rosters")
    require_event(db, event_id)

    roles = list(roles)
    if not roles:
        raise ValidationError("At least one role is required", field="roles")

    existing = select(Attendance.user_id).where(Attendance.event_id == event_id)
    users = db.scalars(
        select(User)
        .where(User.role.in_(roles), User.is_active.is_(True), User.id.not_in(existing))
        .order_by(User.email)
    ).all()

    created = [
        Attendance(event_id=event_id, user_id=user.id, status=AttendanceStatus.PENDING) for user in users
    ]
    try:
        with db.begin_nested():
            db.add_all(created)
            db.flush()
    except IntegrityError:
        raise ConflictError("Attendance already recorded for this event and user", field="user_id")

    logger.info("Generated roster for event %s: %d rows by %s", event_id, len(created), actor.id)
    return created


def _going_count(db: Session, event_id: uuid.UUID, *, exclude_user_id: uuid.UUID) -> int:
    return db.scalar(
        select(func.count())
        .select_from(Attendance)
        .where(
            Attendance.event_id == event_id,
            Attendance.rsvp_status == RSVPStatus.GOING,
            Attendance.user_id != exclude_user_id,
        )
    ) or 0


"""
RSVP

- 본인만, 활성 이벤트에만 가능
- 레코드가 없으면 PENDING 으로 생성, 있으면 rsvp_status 만 변경
- GOING 인원이 max_capacity 에 도달했으면 InvalidStateError

"""
def rsvp(db: Session, *, user: User, event_id: uuid.UUID, rsvp_status: RSVPStatus) -> Attendance:
    if not user.is_active:
        raise AuthorizationError("Inactive users cannot RSVP")

    event = get_event(db, viewer=user, event_id=event_id)
    if not event.is_active:
        raise InvalidStateError("Event is not active", field="event_id")

    if rsvp_status == RSVPStatus.GOING and event.max_capacity is not None:
        if _going_count(db, event.id, exclude_user_id=user.id) >= event.max_capacity:
            raise InvalidStateError("Event is at capacity", field="rsvp_status")

    row = get_attendance(db, event_id=event.id, user_id=user.id)
    if row:
        row.rsvp_status = rsvp_status
        db.flush()
    else:
        row = _insert(
            db,
            Attendance(
                event_id=event.id,
                user_id=user.id,
                rsvp_status=rsvp_status,
                status=AttendanceStatus.PENDING,
            ),
        )

    logger.info("RSVP %s for event %s by %s", rsvp_status.value, event.id, user.id)
    return row


"""
체크인

- ADMIN 전용
- 출석 레코드가 먼저 있어야 함 (없으면 InvalidStateError)
- 목표 상태는 PRESENT / LATE 만 허용
- 이미 체크인된 레코드는 다시 체크인 불가
- checked_in_at / checked_in_by 는 항상 함께 기록

"""
def check_in(
    db: Session,
    *,
    actor: User,
    event_id: uuid.UUID,
    user_id: uuid.UUID,
    at: datetime | None = None,
    status: AttendanceStatus = AttendanceStatus.PRESENT,
) -> Attendance:
    require_admin(actor, action="check in attendees")

    if status not in CHECK_IN_STATUSES:
        raise InvalidStateError("Check-in status must be PRESENT or LATE", field="status")

    row = get_attendance(db, event_id=event_id, user_id=user_id)
    if not row:
        raise InvalidStateError("No attendance record for this event and user", field="user_id")
    if row.checked_in_at is not None:
        raise InvalidStateError("Already checked in", field="user_id")

    row.status = status
    row.checked_in_at = as_utc(at) if at else utcnow()
    row.checked_in_by = actor.id
    db.flush()

    logger.info("Checked in attendance %s (%s) by %s", row.id, status.value, actor.id)
    return row


def list_event_attendance(db: Session, *, actor: User, event_id: uuid.UUID) -> list[Attendance]:
    require_admin(actor, action="view event attendance")
    require_event(db, event_id)
    return list(
        db.scalars(
            select(Attendance).where(Attendance.event_id == event_id).order_by(Attendance.created_at)
        ).all()
    )


def list_user_attendance(db: Session, *, viewer: User, user_id: uuid.UUID) -> list[Attendance]:
    require_self_or_admin(viewer, user_id, action="view attendance of other users")
    return list(
        db.scalars(
            select(Attendance).where(Attendance.user_id == user_id).order_by(Attendance.created_at)
        ).all()
    )
