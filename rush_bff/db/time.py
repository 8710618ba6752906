"""
time.py

시간(UTC) 처리 공통 함수.

모든 시각 컬럼은 timezone-aware UTC 로 저장 / 비교한다.

설계 원칙:
- naive datetime 은 UTC 로 간주
- SQLite 는 조회 시 tzinfo 를 잃으므로 비교 전에 as_utc 로 보정

관련 파일:
- rush_bff.db.base         : created_at / updated_at 기본값
- rush_bff.services.*      : 이벤트 시간, 납부일, 체크인 시각 처리

"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
