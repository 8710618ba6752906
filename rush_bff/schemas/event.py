import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from rush_bff.models.event import EventType


class EventCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255, examples=["Fall Smoker"])
    description: Optional[str] = None
    event_type: EventType
    start_time: datetime
    end_time: Optional[datetime] = None
    location: Optional[str] = None
    is_mandatory: bool = False
    is_voting_event: bool = False
    max_capacity: Optional[int] = None


# 지정한 필드만 반영 (exclude_unset)
class EventUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    event_type: Optional[EventType] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    location: Optional[str] = None
    is_mandatory: Optional[bool] = None
    is_voting_event: Optional[bool] = None
    max_capacity: Optional[int] = None


class EventResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: Optional[str]
    event_type: EventType
    start_time: datetime
    end_time: Optional[datetime]
    location: Optional[str]
    is_mandatory: bool
    is_voting_event: bool
    max_capacity: Optional[int]
    created_by: Optional[uuid.UUID]
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
