"""
vote.py

비밀 투표(Ballot) 및 투표 라운드(VotingRound) 모델 정의 파일.

- VotingRound 는 이름(예: "Round 1", "Final")과 OPEN / CLOSED 상태를 가진다.
  투표 수정 가능 여부는 라운드 상태 조회로 판단한다.
- Vote 는 (voter, candidate, round) 조합마다 1개만 존재한다. (UNIQUE)
- voter / candidate 삭제 시 CASCADE, event 삭제 시 NULL
- is_anonymous 는 관리자 리포트에서의 표시 여부만 제어한다.
  저장 단계의 익명화는 하지 않는다.
- notes 는 투표자 본인에게만 노출되는 메모

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
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from rush_bff.db.base import Base, TimestampedMixin


class RoundStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class VoteType(str, Enum):
    BID = "BID"
    NO_BID = "NO_BID"
    ABSTAIN = "ABSTAIN"


class VotingRound(TimestampedMixin, Base):
    __tablename__ = "voting_rounds"
    __table_args__ = (
        UniqueConstraint("name", name="uq_voting_rounds_name"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    event_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="SET NULL"), nullable=True, index=True
    )
    status: Mapped[RoundStatus] = mapped_column(
        SAEnum(RoundStatus, name="round_status", native_enum=False, create_constraint=True, length=10),
        nullable=False,
        default=RoundStatus.OPEN,
    )
    opened_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    closed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    @property
    def is_open(self) -> bool:
        return self.status == RoundStatus.OPEN


class Vote(TimestampedMixin, Base):
    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint("voter_id", "candidate_id", "round_id", name="uq_votes_voter_candidate_round"),
        CheckConstraint("vote_value IS NULL OR (vote_value >= 1 AND vote_value <= 10)", name="ck_votes_vote_value"),
    )

    event_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="SET NULL"), nullable=True, index=True
    )
    voter_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    candidate_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    round_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("voting_rounds.id", ondelete="CASCADE"), nullable=False, index=True
    )

    vote_type: Mapped[VoteType] = mapped_column(
        SAEnum(VoteType, name="vote_type", native_enum=False, create_constraint=True, length=10),
        nullable=False,
        index=True,
    )
    vote_value: Mapped[int | None] = mapped_column(Integer, nullable=True)

    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
