"""
feedback.py

후보자 피드백(Feedback) 모델 정의 파일.

- 같은 작성자/후보자 조합으로 여러 건 작성 가능 (시즌 중 반복 피드백)
- rating 은 1~5
- tags 는 자유 형식 라벨 목록 (['good_fit', 'leadership', ...])
- is_private=True 인 피드백은 ADMIN과 작성자에게만 노출
- author / candidate 삭제 시 CASCADE, event 삭제 시 NULL

"""

import uuid

from sqlalchemy import JSON, Boolean, CheckConstraint, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from rush_bff.db.base import Base, TimestampedMixin


class Feedback(TimestampedMixin, Base):
    __tablename__ = "feedback"
    __table_args__ = (
        CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_feedback_rating"),
    )

    event_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="SET NULL"), nullable=True, index=True
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    candidate_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    rating: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
