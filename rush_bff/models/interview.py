"""
interview.py

후보자 인터뷰(Interview) 모델 정의 파일.

- questions_and_answers: [{"question": "...", "answer": "..."}, ...] 순서 유지
  챕터마다 질문이 달라서 구조는 자유 형식으로 둔다.
- overall_rating 은 1~5, recommendation 은 STRONG_BID ~ STRONG_NO_BID
- strengths / concerns 는 필터링용 태그 목록
- interviewer / candidate 삭제 시 CASCADE, event 삭제 시 NULL

"""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Integer,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from rush_bff.db.base import Base, TimestampedMixin
from rush_bff.db.time import utcnow


class Recommendation(str, Enum):
    STRONG_BID = "STRONG_BID"
    BID = "BID"
    NEUTRAL = "NEUTRAL"
    NO_BID = "NO_BID"
    STRONG_NO_BID = "STRONG_NO_BID"


class Interview(TimestampedMixin, Base):
    __tablename__ = "interviews"
    __table_args__ = (
        CheckConstraint(
            "overall_rating IS NULL OR (overall_rating >= 1 AND overall_rating <= 5)",
            name="ck_interviews_overall_rating",
        ),
    )

    event_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="SET NULL"), nullable=True, index=True
    )
    interviewer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    candidate_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    interview_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    questions_and_answers: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    overall_rating: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    recommendation: Mapped[Recommendation | None] = mapped_column(
        SAEnum(Recommendation, name="recommendation", native_enum=False, create_constraint=True, length=20),
        nullable=True,
        index=True,
    )

    strengths: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    concerns: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    is_complete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
