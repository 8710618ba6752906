"""
services/access.py

역할(Role) 기반 접근 제어 공통 로직.

모든 서비스의 쓰기/읽기 경로는 이 파일의 가드를 거친다.
HTTP 의존성(core.deps)과 서비스 계층이 같은 ROLE_LEVEL 표를 공유하므로
라우터 단계의 권한 검사와 서비스 단계의 권한 검사가 어긋나지 않는다.

설계 원칙:
- HTTP / FastAPI 의존성 없음
- 비활성(is_active=False) 사용자는 어떤 역할이든 작업 불가
- 후보자(candidate) 참조는 항상 RUSHEE 여야 함

관련 파일:
- rush_bff.core.deps       : require_min_role 의존성
- rush_bff.services.*      : 각 저장소 서비스

"""

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from rush_bff.core.errors import AuthorizationError, NotFoundError
from rush_bff.models.user import Role, User


ROLE_LEVEL = {
    Role.RUSHEE: 0,
    Role.PLEDGE: 1,
    Role.ACTIVE: 2,
    Role.ADMIN: 3,
}


def has_min_role(user: User, min_role: Role) -> bool:
    return user.is_active and ROLE_LEVEL[user.role] >= ROLE_LEVEL[min_role]


def is_admin(user: User) -> bool:
    return has_min_role(user, Role.ADMIN)


def require_min_role(user: User, min_role: Role, *, action: str) -> None:
    if not user.is_active:
        raise AuthorizationError(f"Inactive users cannot {action}")
    if ROLE_LEVEL[user.role] < ROLE_LEVEL[min_role]:
        raise AuthorizationError(f"Requires role >= {min_role.value} to {action}")


def require_admin(user: User, *, action: str) -> None:
    require_min_role(user, Role.ADMIN, action=action)


def require_self_or_admin(viewer: User, user_id: uuid.UUID, *, action: str) -> None:
    if viewer.id == user_id and viewer.is_active:
        return
    require_admin(viewer, action=action)


def get_user_or_404(db: Session, user_id: uuid.UUID, *, field: str = "user_id") -> User:
    user = db.scalar(select(User).where(User.id == user_id))
    if not user:
        raise NotFoundError("User not found", field=field)
    return user


def require_candidate(db: Session, candidate_id: uuid.UUID) -> User:
    candidate = get_user_or_404(db, candidate_id, field="candidate_id")
    if candidate.role != Role.RUSHEE:
        raise AuthorizationError("Candidate must be a RUSHEE", field="candidate_id")
    return candidate
