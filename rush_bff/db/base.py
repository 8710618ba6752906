"""
base.py

SQLAlchemy ORM Base 정의 파일.

이 파일은 모든 SQLAlchemy 모델이 상속받는
공통 Base 클래스와 공통 컬럼(id, created_at, updated_at)을 정의한다.

모든 모델(User, Event, Attendance, Vote 등)은
이 Base를 기준으로 테이블 메타데이터가 관리되며,
Alembic 마이그레이션 또한 이 Base를 기준으로 동작한다.

설계 원칙:
- Base 정의는 단일 파일에서만 관리
- 모델 간 순환 참조 방지
- updated_at은 ORM UPDATE 시마다 자동 갱신

관련 파일:
- rush_bff.models.*        : 모든 ORM 모델
- alembic/env.py           : 마이그레이션 메타데이터 로드

"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from rush_bff.db.time import utcnow

# 모든 ORM 모델이 상속받는 Base 클래스
Base = declarative_base()


class TimestampedMixin:
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
