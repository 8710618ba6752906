"""
user.py

사용자(User), 권한(Role), 후보자 단계(CandidateStage) 모델 정의 파일.

이 파일은 리크루팅 시즌 참여자의 기본 정보와
권한(Role), 후보자 진행 단계, 비활성화 상태(Soft Delete),
외부 인증(Auth) 연동 식별자를 관리한다.

모든 권한, 투표, 피드백, 출석, 회비 기능의 기준이 되는 핵심 모델이다.

"""

import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, Enum as SAEnum, String
from sqlalchemy.orm import Mapped, mapped_column

from rush_bff.db.base import Base, TimestampedMixin


"""
사용자 권한(Role) 정의

- ADMIN   : 관리자 (이벤트/출석/회비/투표 라운드 관리)
- ACTIVE  : 정회원 (투표권 보유)
- PLEDGE  : 입회 예정자
- RUSHEE  : 리크루팅 후보자

"""

class Role(str, Enum):
    ADMIN = "ADMIN"
    ACTIVE = "ACTIVE"
    PLEDGE = "PLEDGE"
    RUSHEE = "RUSHEE"


"""
후보자(RUSHEE) 진행 단계

INITIAL → FIRST_ROUND → SECOND_ROUND → THIRD_ROUND → BID_EXTENDED
→ BID_ACCEPTED | BID_DECLINED, 또는 NO_BID / DROPPED 로 종료
허용 전이 표는 rush_bff.services.stages 참고

"""

class CandidateStage(str, Enum):
    INITIAL = "INITIAL"
    FIRST_ROUND = "FIRST_ROUND"
    SECOND_ROUND = "SECOND_ROUND"
    THIRD_ROUND = "THIRD_ROUND"
    BID_EXTENDED = "BID_EXTENDED"
    BID_ACCEPTED = "BID_ACCEPTED"
    BID_DECLINED = "BID_DECLINED"
    NO_BID = "NO_BID"
    DROPPED = "DROPPED"


"""
사용자(User) 모델

- auth_id / email 은 고유 식별자 (조회용 unique index)
- role을 통해 접근 권한 제어
- candidate_stage 는 RUSHEE 진행 상황 (RUSHEE가 아니게 되면 마지막 결과로 보존)
- is_active / deactivated_at 으로 Soft Delete 지원 (하드 삭제하지 않음)

"""

class User(TimestampedMixin, Base):
    __tablename__ = "users"

    auth_id: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)

    full_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)

    role: Mapped[Role] = mapped_column(
        SAEnum(Role, name="user_role", native_enum=False, create_constraint=True, length=20),
        nullable=False,
        default=Role.RUSHEE,
    )
    candidate_stage: Mapped[CandidateStage | None] = mapped_column(
        SAEnum(CandidateStage, name="candidate_stage", native_enum=False, create_constraint=True, length=20),
        nullable=True,
        index=True,
    )

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    deactivated_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
