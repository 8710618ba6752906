"""

admin_log.py

관리자(Admin) 행위 기록(Audit Log) 모델 정의 파일.

이 파일은 관리자에 의해 수행된 주요 관리 행위
(권한 변경, 후보자 단계 변경, 비활성화, 투표 라운드 개폐, 회비 처리 등)를
DB에 영구적으로 기록하기 위한 로그 테이블을 정의한다.

설계 원칙:
- 실제 데이터 변경과 로그 기록을 분리
- 로그 데이터는 수정/삭제하지 않는 것을 전제로 설계
- actor(행위자)와 target(대상 사용자)을 명확히 구분
- 행위자/대상 사용자가 삭제되어도 로그는 남도록 SET NULL

"""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from rush_bff.db.base import Base
from rush_bff.db.time import utcnow



#  관리자 행위 유형 Enum

class AdminAction(str, Enum):
    SET_ROLE = "SET_ROLE"
    SET_STAGE = "SET_STAGE"
    DEACTIVATE_USER = "DEACTIVATE_USER"
    REACTIVATE_USER = "REACTIVATE_USER"
    OPEN_ROUND = "OPEN_ROUND"
    CLOSE_ROUND = "CLOSE_ROUND"
    MARK_PAID = "MARK_PAID"
    WAIVE_DUES = "WAIVE_DUES"


"""
관리자 행위 로그 모델

- actor_id       : 행위를 수행한 관리자 ID
- target_user_id : 행위 대상 사용자 ID (없을 수 있음)
- action         : 수행된 관리자 행위 유형
- before_value   : 변경 전 값 (role, stage, 라운드 상태 등)
- after_value    : 변경 후 값
- subject_id     : 사용자 외 대상(라운드, 회비 레코드)의 ID
- created_at     : 행위 발생 시각 (UTC)

"""

class AdminActionLog(Base):
    __tablename__ = "admin_action_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    actor_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    target_user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    action: Mapped[AdminAction] = mapped_column(
        SAEnum(AdminAction, name="admin_action", native_enum=False, create_constraint=True, length=30),
        nullable=False,
    )

    before_value: Mapped[str | None] = mapped_column(String(50), nullable=True)
    after_value: Mapped[str | None] = mapped_column(String(50), nullable=True)
    subject_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
