"""
dues.py

회원 본인 회비 조회 API.

관리자용 회비 관리 기능(admin_dues.py)과 분리하여,
권한 경계와 책임을 명확히 하기 위한 구조이다.

설계 원칙:
- 모든 데이터는 "본인 기준"으로만 조회
- 조회 로직은 service 계층(rush_bff.services.dues)에 위임

"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rush_bff.core.deps import get_current_user, get_db
from rush_bff.models.dues import OUTSTANDING_STATUSES
from rush_bff.models.user import User
from rush_bff.schemas.dues import PaymentResponse
from rush_bff.services.dues import list_payments_for_user

router = APIRouter(prefix="/dues", tags=["dues"])


"""
회원 본인 회비 내역 조회 API

- due_date 최신순
- outstanding_only=True 면 NOT_PAID / PARTIAL / OVERDUE 만

"""
@router.get("/me", response_model=list[PaymentResponse])
def my_payments(
    outstanding_only: bool = Query(default=False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    payments = list_payments_for_user(db, viewer=current_user, user_id=current_user.id)
    if outstanding_only:
        payments = [p for p in payments if p.status in OUTSTANDING_STATUSES]
    return payments
