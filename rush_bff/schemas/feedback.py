import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# rating 범위는 서비스에서 검증 (ValidationError 로 통일)
class FeedbackCreateRequest(BaseModel):
    candidate_id: uuid.UUID
    rating: Optional[int] = None
    comment: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_anonymous: bool = False
    is_private: bool = False
    event_id: Optional[uuid.UUID] = None


class FeedbackUpdateRequest(BaseModel):
    rating: Optional[int] = None
    comment: Optional[str] = None
    tags: Optional[List[str]] = None
    is_anonymous: Optional[bool] = None
    is_private: Optional[bool] = None


class FeedbackResponse(BaseModel):
    id: uuid.UUID
    event_id: Optional[uuid.UUID]
    candidate_id: uuid.UUID
    author_id: Optional[uuid.UUID]
    rating: Optional[int]
    comment: Optional[str]
    tags: List[str]
    is_anonymous: bool
    is_private: bool
    created_at: datetime
    updated_at: datetime


class FeedbackSummaryResponse(BaseModel):
    candidate_id: uuid.UUID
    count: int
    rated_count: int
    average_rating: Optional[float]
