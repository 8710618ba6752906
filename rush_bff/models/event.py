"""
event.py

리크루팅 이벤트(Event) 모델 정의 파일.

디너, 스모커, 인터뷰, 소셜, 미팅 등 시즌 일정과
필수 참석 여부, 투표 이벤트 여부, 정원 정보를 관리한다.

- created_by 는 작성자 참조 (사용자 삭제 시 NULL)
- is_active 로 Soft Delete (하드 삭제하지 않음)
- end_time 은 start_time 이후여야 함 (DB CHECK + 서비스 검증)

"""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from rush_bff.db.base import Base, TimestampedMixin


class EventType(str, Enum):
    DINNER = "DINNER"
    SMOKER = "SMOKER"
    INTERVIEW = "INTERVIEW"
    SOCIAL = "SOCIAL"
    MEETING = "MEETING"
    OTHER = "OTHER"


class Event(TimestampedMixin, Base):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("end_time IS NULL OR end_time >= start_time", name="ck_events_end_after_start"),
        CheckConstraint("max_capacity IS NULL OR max_capacity >= 1", name="ck_events_max_capacity"),
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    event_type: Mapped[EventType] = mapped_column(
        SAEnum(EventType, name="event_type", native_enum=False, create_constraint=True, length=20),
        nullable=False,
        index=True,
    )

    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    is_mandatory: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_voting_event: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    max_capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
