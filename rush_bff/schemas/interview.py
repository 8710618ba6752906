import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from rush_bff.models.interview import Recommendation


# questions_and_answers 구조 검증은 서비스에서 (ValidationError 로 통일)
class InterviewCreateRequest(BaseModel):
    candidate_id: uuid.UUID
    event_id: Optional[uuid.UUID] = None
    interview_date: Optional[datetime] = None
    questions_and_answers: List[Any] = Field(default_factory=list)
    notes: Optional[str] = None
    overall_rating: Optional[int] = None
    recommendation: Optional[Recommendation] = None
    strengths: List[str] = Field(default_factory=list)
    concerns: List[str] = Field(default_factory=list)
    is_complete: bool = True


class InterviewUpdateRequest(BaseModel):
    interview_date: Optional[datetime] = None
    questions_and_answers: Optional[List[Any]] = None
    notes: Optional[str] = None
    overall_rating: Optional[int] = None
    recommendation: Optional[Recommendation] = None
    strengths: Optional[List[str]] = None
    concerns: Optional[List[str]] = None
    is_complete: Optional[bool] = None


class QAPair(BaseModel):
    question: str
    answer: str


class InterviewResponse(BaseModel):
    id: uuid.UUID
    event_id: Optional[uuid.UUID]
    interviewer_id: uuid.UUID
    candidate_id: uuid.UUID
    interview_date: datetime
    questions_and_answers: List[QAPair]
    notes: Optional[str]
    overall_rating: Optional[int]
    recommendation: Optional[Recommendation]
    strengths: List[str]
    concerns: List[str]
    is_complete: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
