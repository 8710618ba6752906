"""
users.py

회원 본인 / 회원 디렉터리 API 모음.

이 파일은 외부 인증을 마친 사용자의 가입(프로필 생성),
본인 프로필 조회 / 수정, 회원 디렉터리 조회를 담당한다.

관리자용 사용자 관리 기능(admin.py)과 분리하여,
권한 범위와 노출 가능한 데이터 범위를 명확히 하기 위한 구조이다.

주요 기능:
- 가입: 토큰의 sub / email claim 을 그대로 복사해 RUSHEE 사용자 생성
- 본인 프로필 조회 / 수정
- 회원 디렉터리 조회 (PLEDGE 이상, 이름 / 역할만)

설계 원칙:
- 가입은 토큰만 있으면 가능 (아직 users 행이 없으므로)
- 개인정보 보호를 위해 디렉터리는 최소한의 정보만 노출
- 비활성(Soft Delete) 회원은 기본적으로 제외

관련 파일:
- rush_bff.services.users  : 사용자 비즈니스 로직
- rush_bff.core.deps       : 토큰 / 권한 의존성
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rush_bff.core.deps import get_current_pledge, get_current_user, get_db, get_token_claims
from rush_bff.core.errors import ValidationError
from rush_bff.models.user import User
from rush_bff.schemas.user import DirectoryEntry, ProfileUpdate, SignupRequest, UserResponse
from rush_bff.services.users import create_user, member_directory, update_profile

router = APIRouter(prefix="/users", tags=["users"])


"""
가입 API

- 외부 인증 토큰의 sub → auth_id, email → email
- 항상 RUSHEE 로 생성 (역할 변경은 관리자만)
- 이미 가입된 auth_id / email 이면 409

"""
@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    claims: dict = Depends(get_token_claims),
    db: Session = Depends(get_db),
):
    email = claims.get("email")
    if not email:
        raise ValidationError("Token has no email claim", field="email")

    user = create_user(
        db,
        auth_id=claims["sub"],
        email=email,
        full_name=body.full_name,
        phone=body.phone,
    )
    db.commit()
    db.refresh(user)
    return user


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=UserResponse)
def update_me(
    body: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = update_profile(db, current_user, full_name=body.full_name, phone=body.phone)
    db.commit()
    db.refresh(user)
    return user


"""
회원 디렉터리 조회 API

- PLEDGE 이상만 접근 가능
- RUSHEE 를 제외한 활성 회원의 이름 / 역할만 반환

"""
@router.get("/directory", response_model=list[DirectoryEntry])
def directory(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_pledge),
):
    return member_directory(db)
