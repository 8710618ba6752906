"""
services/admin_log.py

관리자 행위 로그 기록 서비스.

이 파일은 관리자(Admin)가 수행한 주요 행위를
AdminActionLog 테이블에 기록하는 역할을 담당한다.

서비스 계층에서 호출되며,
로그 기록 자체는 DB에만 영향을 주고
비즈니스 흐름에는 개입하지 않는다.

설계 원칙:
- 로그는 호출 측 세션에 추가만 하고 commit은 하지 않음
  → 실제 변경과 같은 트랜잭션으로 함께 반영
- 로그 데이터는 수정/삭제하지 않는 것을 전제로 설계

"""

from sqlalchemy import desc, select
from sqlalchemy.orm import Session, aliased

from rush_bff.models.admin_log import AdminActionLog, AdminAction
from rush_bff.models.user import User


"""
관리자 행위 로그 기록 함수

- actor_id       : 행위를 수행한 관리자 ID
- action         : 수행된 관리자 행위 유형
- target_user_id : 행위 대상 사용자 ID (선택)
- before_value   : 변경 전 값 (선택)
- after_value    : 변경 후 값 (선택)
- subject_id     : 라운드 / 회비 레코드 등 사용자 외 대상 ID (선택)

NOTE:
- db.commit()은 호출 측(라우터)에서 수행

"""
def write_admin_log(
    db: Session,
    *,
    actor_id,
    action: AdminAction,
    target_user_id=None,
    before_value=None,
    after_value=None,
    subject_id=None,
) -> AdminActionLog:
    log = AdminActionLog(
        actor_id=actor_id,
        action=action,
        target_user_id=target_user_id,
        before_value=before_value,
        after_value=after_value,
        subject_id=subject_id,
    )
    db.add(log)
    return log


"""
최근 관리자 행위 로그 조회

- limit 은 1 ~ 200 범위로 보정
- 행위자 / 대상 사용자 정보를 함께 반환 (대상 없으면 None)

"""
def list_admin_logs(db: Session, *, limit: int = 50):
    limit = max(1, min(limit, 200))

    Actor = aliased(User)
    Target = aliased(User)

    rows = db.execute(
        select(AdminActionLog, Actor, Target)
        .outerjoin(Actor, Actor.id == AdminActionLog.actor_id)
        .outerjoin(Target, Target.id == AdminActionLog.target_user_id)
        .order_by(desc(AdminActionLog.created_at))
        .limit(limit)
    ).all()
    return limit, rows
