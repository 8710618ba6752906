import os

# 앱 import 전에 테스트용 설정 주입 (인메모리 SQLite + 테스트 시크릿)
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from rush_bff.main import app as fastapi_app
from rush_bff.core.config import settings
from rush_bff.core.deps import get_db
from rush_bff.db.base import Base
from rush_bff.db.session import build_engine

# ✅ 모델 import (Base.metadata에 테이블 등록)
import rush_bff.models  # noqa: F401


TEST_DB_URL = settings.TEST_DATABASE_URL or "sqlite://"

engine = build_engine(TEST_DB_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """테스트 전체 시작/종료 때만 스키마 생성/삭제"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables():
    """각 테스트가 끝나면 데이터 초기화 (테이블은 유지, row만 삭제)"""
    yield
    # FK 의존성 역순으로 삭제
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture()
def db():
    """테스트에서 직접 서비스 / DB 를 호출할 때 쓰는 세션"""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture()
def client(db):
    # 요청도 테스트와 같은 세션을 사용 (인메모리 DB 커넥션 공유)
    def override_get_db():
        yield db

    fastapi_app.dependency_overrides[get_db] = override_get_db
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()
