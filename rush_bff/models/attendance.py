"""
attendance.py

이벤트 출석(Attendance) 모델 정의 파일.

(event, user) 쌍마다 출석 레코드는 최대 1개만 존재한다.
체크인 시각(checked_in_at)과 체크인 처리자(checked_in_by)는 항상 함께 기록된다.

- event / user 삭제 시 CASCADE
- checked_in_by 사용자 삭제 시 NULL

"""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from rush_bff.db.base import Base, TimestampedMixin


class AttendanceStatus(str, Enum):
    PENDING = "PENDING"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    EXCUSED = "EXCUSED"
    LATE = "LATE"


class RSVPStatus(str, Enum):
    GOING = "GOING"
    MAYBE = "MAYBE"
    NOT_GOING = "NOT_GOING"


class Attendance(TimestampedMixin, Base):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_attendance_event_user"),
    )

    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    rsvp_status: Mapped[RSVPStatus | None] = mapped_column(
        SAEnum(RSVPStatus, name="rsvp_status", native_enum=False, create_constraint=True, length=20),
        nullable=True,
    )
    status: Mapped[AttendanceStatus] = mapped_column(
        SAEnum(AttendanceStatus, name="attendance_status", native_enum=False, create_constraint=True, length=20),
        nullable=False,
        default=AttendanceStatus.PENDING,
        index=True,
    )

    checked_in_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    checked_in_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
