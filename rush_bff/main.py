"""
main.py

FastAPI 애플리케이션 진입점(Entry Point).

이 파일은 서버 실행 시 가장 먼저 로드되며,
애플리케이션 전반의 설정과 라우터 등록을 담당한다.

주요 역할:
- 로깅 초기화 (LOG_LEVEL)
- FastAPI 앱 인스턴스 생성
- CORS 미들웨어 설정
- 도메인 오류(DomainError) → HTTP 상태 코드 변환
- 각 도메인별 라우터(users, admin, events, attendance, votes 등) 등록
- 헬스 체크 및 DB 연결 상태 확인용 엔드포인트 제공

설계 원칙:
- 비즈니스 로직은 포함하지 않고 설정/조립 역할만 수행
- 실제 기능은 routers / services 계층에 위임
- DB 연결 장애는 503 + Retry-After 로 응답 (재시도는 호출 측 책임)

관련 파일:
- rush_bff.core.config   : 환경 변수 및 설정 로드
- rush_bff.core.errors   : 도메인 오류 분류
- rush_bff.core.deps     : DB 세션 의존성
- rush_bff.routers.*     : 기능별 API 라우터

"""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from rush_bff.core.config import settings
from rush_bff.core.deps import get_db
from rush_bff.core.errors import (
    AuthorizationError,
    ConflictError,
    DomainError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from rush_bff.routers import admin, admin_dues, attendance, dues, events, feedback, interviews, users, votes

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# 도메인 오류 종류별 HTTP 상태 코드
STATUS_BY_ERROR = {
    ValidationError: 400,
    AuthorizationError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    InvalidStateError: 409,
}

app = FastAPI(title="Rush BFF")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainError)
def domain_error_handler(request: Request, exc: DomainError):
    status_code = STATUS_BY_ERROR.get(type(exc), 400)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": exc.to_dict()},
    )


@app.exception_handler(OperationalError)
def db_unavailable_handler(request: Request, exc: OperationalError):
    logger.error("Database unavailable: %s", exc.orig)
    return JSONResponse(
        status_code=503,
        content={"detail": "Database unavailable", "error": {"kind": "unavailable", "field": None}},
        headers={"Retry-After": "5"},
    )


app.include_router(users.router)
app.include_router(admin.router)
app.include_router(events.router)
app.include_router(attendance.router)
app.include_router(votes.router)
app.include_router(feedback.router)
app.include_router(dues.router)
app.include_router(admin_dues.router)
app.include_router(interviews.router)

"""
서버 헬스 체크 엔드포인트

- 애플리케이션 프로세스가 정상 동작 중인지 확인
- 로드밸런서 / 배포 환경에서 서버 상태 확인 용도

"""
@app.get("/health")
def health():
    return {"status": "ok"}

"""
데이터베이스 연결 상태 확인 엔드포인트

- 간단한 SELECT 1 쿼리를 통해 DB 연결 여부 확인
- 서버는 살아 있으나 DB가 죽은 상황을 분리해서 감지 가능

"""
@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    value = db.execute(text("SELECT 1")).scalar_one()
    return {"db": "ok", "value": value}
