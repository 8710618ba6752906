"""
services/users.py

사용자(Identity Store) 비즈니스 로직 모음.

이 파일은 외부 인증 계정과 연결된 사용자 프로필의 생성,
권한(Role) / 후보자 단계(CandidateStage) 변경, Soft Delete(비활성화)를 담당한다.

주요 기능:
- 가입 시 외부 인증 ID / email 로 사용자 생성 (중복 시 ConflictError)
- 관리자 권한 변경 및 후보자 단계 변경
- 비활성화 / 재활성화 (하드 삭제 없음)
- 마지막 ADMIN 보호 등 관리자 안전장치

설계 원칙:
- HTTP / FastAPI 의존성 없음
- 트랜잭션 제어(commit)는 라우터에서 수행, 서비스는 flush까지만
- 관리자 행위는 모두 admin_action_logs 에 기록

관련 파일:
- rush_bff.models.user     : User / Role / CandidateStage 모델
- rush_bff.services.stages : 후보자 단계 전이 표
- rush_bff.routers.admin   : 관리자 API
- rush_bff.routers.users   : 회원 API

"""

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rush_bff.core.config import settings
from rush_bff.core.errors import ConflictError, InvalidStateError, ValidationError
from rush_bff.db.time import utcnow
from rush_bff.models.admin_log import AdminAction
from rush_bff.models.user import CandidateStage, Role, User
from rush_bff.services.access import get_user_or_404, require_admin
from rush_bff.services.admin_log import write_admin_log
from rush_bff.services.stages import can_transition

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user(db: Session, user_id: uuid.UUID) -> User:
    return get_user_or_404(db, user_id)


def get_user_by_auth_id(db: Session, auth_id: str) -> User | None:
    return db.scalar(select(User).where(User.auth_id == auth_id))


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == normalize_email(email)))


"""
현재 활성 ADMIN 계정 수를 반환

- Role.ADMIN 이면서 is_active=True 인 사용자만 집계
- 마지막 ADMIN 보호 로직에서 사용

"""

def count_admins(db: Session) -> int:
    return db.scalar(
        select(func.count()).select_from(User).where(User.role == Role.ADMIN, User.is_active.is_(True))
    ) or 0


"""
사용자 생성 (가입)

- auth_id / email 은 전역 유일
- 미리 조회해서 중복이면 ConflictError
- 동시 가입으로 DB 제약이 먼저 걸려도 ConflictError 로 변환
- RUSHEE 는 INITIAL 단계에서 시작

"""
def create_user(
    db: Session,
    *,
    auth_id: str,
    email: str,
    role: Role = Role.RUSHEE,
    full_name: str | None = None,
    phone: str | None = None,
) -> User:
    email = normalize_email(email)
    if not auth_id:
        raise ValidationError("auth_id is required", field="auth_id")
    if not email:
        raise ValidationError("email is required", field="email")

    if get_user_by_auth_id(db, auth_id):
        raise ConflictError("auth_id already registered", field="auth_id")
    if get_user_by_email(db, email):
        raise ConflictError("email already registered", field="email")

    user = User(
        auth_id=auth_id,
        email=email,
        role=role,
        full_name=full_name,
        phone=phone,
        candidate_stage=CandidateStage.INITIAL if role == Role.RUSHEE else None,
        is_active=True,
    )
    try:
        with db.begin_nested():
            db.add(user)
            db.flush()
    except IntegrityError:
        raise ConflictError("auth_id or email already registered", field="email")

    logger.info("Created user %s (role=%s)", user.id, user.role.value)
    return user


def update_profile(
    db: Session,
    user: User,
    *,
    full_name: str | None = None,
    phone: str | None = None,
) -> User:
    if full_name is not None:
        user.full_name = full_name
    if phone is not None:
        user.phone = phone
    db.flush()
    logger.info("Updated profile of user %s", user.id)
    return user


def _check_transition(
    current: CandidateStage | None,
    stage: CandidateStage,
    *,
    target: User,
    actor: User,
    enforce: bool | None = None,
) -> None:
    if enforce is None:
        enforce = settings.ENFORCE_STAGE_TRANSITIONS
    if can_transition(current, stage):
        return
    current_label = current.value if current else None
    if enforce:
        raise InvalidStateError(
            f"Cannot move candidate from {current_label} to {stage.value}",
            field="candidate_stage",
        )
    logger.warning(
        "Unlisted stage transition %s -> %s for user %s by %s",
        current_label, stage.value, target.id, actor.id,
    )


"""
관리자 권한 변경

- ADMIN 만 가능
- stage 를 함께 지정할 수 있는 것은 RUSHEE 로 변경할 때뿐
- RUSHEE 로 변경 + stage 미지정 → INITIAL
- RUSHEE 에서 다른 역할로 변경 → 마지막 stage 는 리크루팅 결과로 보존
- 자기 자신 권한 변경 금지, 마지막 ADMIN 강등 금지

"""
def set_role(
    db: Session,
    *,
    actor: User,
    target: User,
    role: Role,
    stage: CandidateStage | None = None,
) -> User:
    require_admin(actor, action="change roles")

    if stage is not None and role != Role.RUSHEE:
        raise ValidationError("candidate_stage can only be set for RUSHEE users", field="candidate_stage")

    if target.id == actor.id:
        raise InvalidStateError("Cannot change your own role", field="role")

    if target.role == role:
        if stage is None:
            raise InvalidStateError(f"User already {role.value}", field="role")
        # 역할 변화 없이 단계만 지정 → 단계 변경으로 처리
        return set_stage(db, actor=actor, target=target, stage=stage)

    # 마지막 ADMIN 강등 금지
    if target.role == Role.ADMIN and role != Role.ADMIN and target.is_active:
        if count_admins(db) <= 1:
            raise InvalidStateError("Cannot demote the last ADMIN", field="role")

    # 새 RUSHEE 는 INITIAL 에서 출발한 것으로 보고 전이 검사
    if stage is not None and stage != CandidateStage.INITIAL:
        _check_transition(CandidateStage.INITIAL, stage, target=target, actor=actor)

    before = target.role
    target.role = role
    if role == Role.RUSHEE:
        if stage is not None:
            target.candidate_stage = stage
        elif before != Role.RUSHEE or target.candidate_stage is None:
            target.candidate_stage = CandidateStage.INITIAL

    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.SET_ROLE,
        target_user_id=target.id,
        before_value=before.value,
        after_value=role.value,
    )
    db.flush()
    logger.info("User %s role %s -> %s by %s", target.id, before.value, role.value, actor.id)
    return target


"""
후보자 단계 변경

- ADMIN 만 가능, 대상은 RUSHEE 여야 함
- 전이 표에 없는 이동:
  ENFORCE_STAGE_TRANSITIONS=True  → InvalidStateError
  ENFORCE_STAGE_TRANSITIONS=False → 경고 로그만 남기고 허용

"""
def set_stage(
    db: Session,
    *,
    actor: User,
    target: User,
    stage: CandidateStage,
    enforce: bool | None = None,
) -> User:
    require_admin(actor, action="change candidate stages")

    if target.role != Role.RUSHEE:
        raise ValidationError("candidate_stage can only be set for RUSHEE users", field="candidate_stage")

    current = target.candidate_stage
    if current == stage:
        raise InvalidStateError(f"Candidate already {stage.value}", field="candidate_stage")

    _check_transition(current, stage, target=target, actor=actor, enforce=enforce)

    target.candidate_stage = stage
    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.SET_STAGE,
        target_user_id=target.id,
        before_value=current.value if current else None,
        after_value=stage.value,
    )
    db.flush()
    logger.info("User %s stage -> %s by %s", target.id, stage.value, actor.id)
    return target


def deactivate_user(db: Session, *, actor: User, target: User) -> User:
    require_admin(actor, action="deactivate users")

    if target.id == actor.id:
        raise InvalidStateError("Cannot deactivate yourself")
    if not target.is_active:
        raise InvalidStateError("User already inactive")
    if target.role == Role.ADMIN and count_admins(db) <= 1:
        raise InvalidStateError("Cannot deactivate the last ADMIN")

    target.is_active = False
    target.deactivated_at = utcnow()
    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.DEACTIVATE_USER,
        target_user_id=target.id,
        before_value="ACTIVE",
        after_value="INACTIVE",
    )
    db.flush()
    logger.info("Deactivated user %s by %s", target.id, actor.id)
    return target


def reactivate_user(db: Session, *, actor: User, target: User) -> User:
    require_admin(actor, action="reactivate users")

    if target.is_active:
        raise InvalidStateError("User already active")

    target.is_active = True
    target.deactivated_at = None
    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.REACTIVATE_USER,
        target_user_id=target.id,
        before_value="INACTIVE",
        after_value="ACTIVE",
    )
    db.flush()
    logger.info("Reactivated user %s by %s", target.id, actor.id)
    return target


def list_users(
    db: Session,
    *,
    actor: User,
    role: Role | None = None,
    stage: CandidateStage | None = None,
    include_inactive: bool = False,
) -> list[User]:
    require_admin(actor, action="list users")

    query = select(User)
    if role is not None:
        query = query.where(User.role == role)
    if stage is not None:
        query = query.where(User.candidate_stage == stage)
    if not include_inactive:
        query = query.where(User.is_active.is_(True))
    return list(db.scalars(query.order_by(User.email)).all())


# 회원 디렉터리: RUSHEE 를 제외한 활성 사용자
def member_directory(db: Session) -> list[User]:
    return list(
        db.scalars(
            select(User)
            .where(User.role != Role.RUSHEE, User.is_active.is_(True))
            .order_by(User.full_name, User.email)
        ).all()
    )
