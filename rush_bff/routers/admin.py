import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rush_bff.core.deps import get_current_admin, get_db
from rush_bff.models.user import CandidateStage, Role, User
from rush_bff.schemas.admin import AdminLogEntry, AdminLogPage, LogUserSummary
from rush_bff.schemas.user import RoleUpdate, StageUpdate, UserResponse
from rush_bff.services.admin_log import list_admin_logs
from rush_bff.services.users import (
    deactivate_user,
    get_user,
    list_users,
    reactivate_user,
    set_role,
    set_stage,
)

router = APIRouter(prefix="/admin", tags=["admin"])


# 관리자용 사용자 목록 (role / stage 필터)
@router.get("/users", response_model=list[UserResponse])
def admin_list_users(
    role: Role | None = Query(default=None),
    stage: CandidateStage | None = Query(default=None),
    include_inactive: bool = Query(default=False),
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    return list_users(db, actor=current_admin, role=role, stage=stage, include_inactive=include_inactive)


# 관리자가 회원 권한을 변경하는 엔드포인트
@router.patch("/users/{user_id}/role", response_model=UserResponse)
def admin_set_role(
    user_id: uuid.UUID,
    data: RoleUpdate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    user = get_user(db, user_id)
    set_role(db, actor=current_admin, target=user, role=data.role, stage=data.candidate_stage)
    db.commit()
    db.refresh(user)
    return user


# 후보자 단계 변경
@router.patch("/users/{user_id}/stage", response_model=UserResponse)
def admin_set_stage(
    user_id: uuid.UUID,
    data: StageUpdate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    user = get_user(db, user_id)
    set_stage(db, actor=current_admin, target=user, stage=data.candidate_stage)
    db.commit()
    db.refresh(user)
    return user


# 회원 비활성화 (Soft Delete)
@router.post("/users/{user_id}/deactivate", response_model=UserResponse)
def admin_deactivate_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    user = get_user(db, user_id)
    deactivate_user(db, actor=current_admin, target=user)
    db.commit()
    db.refresh(user)
    return user


@router.post("/users/{user_id}/reactivate", response_model=UserResponse)
def admin_reactivate_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    user = get_user(db, user_id)
    reactivate_user(db, actor=current_admin, target=user)
    db.commit()
    db.refresh(user)
    return user


def _summary(user: User | None) -> LogUserSummary | None:
    if user is None:
        return None
    return LogUserSummary(id=user.id, email=user.email, full_name=user.full_name)


# 관리자 행위 로그 조회 (최신순)
@router.get("/logs", response_model=AdminLogPage)
def admin_logs(
    limit: int = Query(default=50),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    limit, rows = list_admin_logs(db, limit=limit)
    return AdminLogPage(
        limit=limit,
        data=[
            AdminLogEntry(
                id=log.id,
                action=log.action.value,
                before_value=log.before_value,
                after_value=log.after_value,
                subject_id=log.subject_id,
                created_at=log.created_at,
                actor=_summary(actor),
                target=_summary(target),
            )
            for log, actor, target in rows
        ],
    )
