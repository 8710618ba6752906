import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from rush_bff.models.attendance import AttendanceStatus, RSVPStatus
from rush_bff.models.user import Role


class AttendanceRecordRequest(BaseModel):
    user_id: uuid.UUID
    status: AttendanceStatus
    notes: Optional[str] = None


class AttendanceUpdateRequest(BaseModel):
    status: AttendanceStatus
    notes: Optional[str] = None


class RosterRequest(BaseModel):
    roles: List[Role] = Field(default_factory=lambda: [Role.RUSHEE])


class RSVPRequest(BaseModel):
    rsvp_status: RSVPStatus


class CheckInRequest(BaseModel):
    user_id: uuid.UUID
    status: AttendanceStatus = AttendanceStatus.PRESENT
    at: Optional[datetime] = None


class AttendanceResponse(BaseModel):
    id: uuid.UUID
    event_id: uuid.UUID
    user_id: uuid.UUID
    rsvp_status: Optional[RSVPStatus]
    status: AttendanceStatus
    checked_in_at: Optional[datetime]
    checked_in_by: Optional[uuid.UUID]
    notes: Optional[str]

    model_config = ConfigDict(from_attributes=True)
