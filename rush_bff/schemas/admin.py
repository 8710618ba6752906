import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class LogUserSummary(BaseModel):
    id: uuid.UUID
    email: str
    full_name: Optional[str]


class AdminLogEntry(BaseModel):
    id: uuid.UUID
    action: str
    before_value: Optional[str]
    after_value: Optional[str]
    subject_id: Optional[uuid.UUID]
    created_at: datetime
    actor: Optional[LogUserSummary]
    target: Optional[LogUserSummary]


class AdminLogPage(BaseModel):
    limit: int
    data: List[AdminLogEntry]
