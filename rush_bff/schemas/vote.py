import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from rush_bff.models.vote import RoundStatus, VoteType


class RoundCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Round 1"])
    event_id: Optional[uuid.UUID] = None


class RoundResponse(BaseModel):
    id: uuid.UUID
    name: str
    event_id: Optional[uuid.UUID]
    status: RoundStatus
    opened_at: Optional[datetime]
    closed_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)


# vote_value 범위는 서비스에서 검증 (ValidationError 로 통일)
class BallotRequest(BaseModel):
    candidate_id: uuid.UUID
    round: str = Field(..., min_length=1, examples=["Round 1"])
    vote_type: VoteType
    vote_value: Optional[int] = None
    notes: Optional[str] = None
    is_anonymous: bool = True
    event_id: Optional[uuid.UUID] = None


# 본인 투표 응답 (notes 포함)
class BallotResponse(BaseModel):
    id: uuid.UUID
    event_id: Optional[uuid.UUID]
    candidate_id: uuid.UUID
    round_id: uuid.UUID
    vote_type: VoteType
    vote_value: Optional[int]
    is_anonymous: bool
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CastBallotResponse(BaseModel):
    created: bool
    ballot: BallotResponse


# 집계 결과: 투표자 필드 없음
class TallyResponse(BaseModel):
    candidate_id: uuid.UUID
    round_id: uuid.UUID
    round_name: str
    bid: int
    no_bid: int
    abstain: int
    total: int
    bid_pct: float
    average_value: Optional[float]


# 관리자 원본 조회: 익명 투표는 voter_id = None, notes 없음
class RawBallotResponse(BaseModel):
    id: uuid.UUID
    round_id: uuid.UUID
    event_id: Optional[uuid.UUID]
    candidate_id: uuid.UUID
    voter_id: Optional[uuid.UUID]
    vote_type: VoteType
    vote_value: Optional[int]
    is_anonymous: bool
    created_at: datetime
