import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from rush_bff.models.user import CandidateStage, Role


# 🔹 가입 요청 (auth_id / email 은 토큰 claims 에서 가져옴)
class SignupRequest(BaseModel):
    full_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)


# 🔹 본인 프로필 수정
class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)


# 🔹 관리자 role 변경 요청용
class RoleUpdate(BaseModel):
    role: Role
    candidate_stage: Optional[CandidateStage] = None


# 🔹 관리자 stage 변경 요청용
class StageUpdate(BaseModel):
    candidate_stage: CandidateStage


# 🔹 유저 응답용
class UserResponse(BaseModel):
    id: uuid.UUID
    email: str
    full_name: Optional[str]
    phone: Optional[str]
    role: Role
    candidate_stage: Optional[CandidateStage]
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# 🔹 회원 디렉터리 (공개 정보만)
class DirectoryEntry(BaseModel):
    id: uuid.UUID
    full_name: Optional[str]
    role: Role

    model_config = ConfigDict(from_attributes=True)
