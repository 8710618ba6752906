"""
session.py

데이터베이스 엔진 및 세션(Session) 관리 파일.

이 파일은 SQLAlchemy Engine과 SessionLocal을 생성하여
애플리케이션 전반에서 공통으로 사용하는 DB 연결을 관리한다.

FastAPI 의존성(get_db)을 통해
요청 단위로 세션을 생성/종료하는 구조를 지원한다.

설계 원칙:
- DB 연결 설정은 한 곳에서만 정의
- 세션 생성/종료 책임을 명확히 분리
- pool_pre_ping=True로 유휴 연결 오류 방지
- PostgreSQL은 설정된 격리 수준(DB_ISOLATION_LEVEL)으로 연결
- SQLite는 연결마다 foreign_keys PRAGMA를 켜서 CASCADE / SET NULL 규칙 유지

관련 파일:
- rush_bff.core.config     : DATABASE_URL / DB_ISOLATION_LEVEL 설정
- rush_bff.core.deps       : get_db 의존성

"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rush_bff.core.config import settings


def build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # 인메모리 DB는 커넥션 하나를 공유해야 테이블이 유지됨
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, **kwargs)

        @event.listens_for(engine, "connect")
        def _on_connect(dbapi_conn, connection_record):
            # pysqlite 자체 트랜잭션 처리를 끄고 BEGIN을 직접 발행 (SAVEPOINT 정상 동작용)
            dbapi_conn.isolation_level = None
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(engine, "begin")
        def _on_begin(conn):
            conn.exec_driver_sql("BEGIN")

        return engine

    return create_engine(
        url,
        pool_pre_ping=True,
        isolation_level=settings.DB_ISOLATION_LEVEL,
    )


# SQLAlchemy Engine 생성
engine = build_engine(settings.DATABASE_URL)

# 요청 단위로 사용할 세션 팩토리
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
