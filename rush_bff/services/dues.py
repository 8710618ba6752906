"""
services/dues.py

회비(Dues Ledger) 도메인의 비즈니스 로직 모음.

이 파일은 회비 납부 기록 생성, 납부 처리, 면제, 연체 처리 등
회비 시스템의 핵심 규칙을 담당한다.

라우터는 이 파일의 함수를 호출하여
검증/계산 결과를 받아 응답만 처리한다.

설계 원칙:
- 회비 관련 모든 규칙을 한 곳에 집중
- status=PAID 와 paid_at 은 항상 함께 기록
- paid_at 허용 범위는 정책 함수(policy hook)로 분리
- 미납 판단은 NOT_PAID / PARTIAL / OVERDUE 상태 기준

관련 파일:
- rush_bff.models.dues        : DuesPayment 모델
- rush_bff.routers.admin_dues : 관리자 회비 API
- rush_bff.routers.dues       : 회원 회비 조회 API

"""

import logging
import uuid
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Callable

from sqlalchemy import select
from sqlalchemy.orm import Session

from rush_bff.core.config import settings
from rush_bff.core.errors import InvalidStateError, NotFoundError, ValidationError
from rush_bff.db.time import as_utc, utcnow
from rush_bff.models.admin_log import AdminAction
from rush_bff.models.dues import (
    OUTSTANDING_STATUSES,
    DuesPayment,
    PaymentMethod,
    PaymentStatus,
    PaymentType,
)
from rush_bff.models.user import User
from rush_bff.services.access import get_user_or_404, require_admin, require_self_or_admin
from rush_bff.services.admin_log import write_admin_log

logger = logging.getLogger(__name__)

PaidAtPolicy = Callable[[DuesPayment, datetime], None]


"""
기본 납부일 정책

- DUES_EARLY_PAYMENT_GRACE_DAYS 가 None 이면 검사하지 않음
- paid_at 이 due_date 보다 grace 일수 넘게 앞서면 ValidationError

"""
def default_paid_at_policy(payment: DuesPayment, paid_at: datetime) -> None:
    grace = settings.DUES_EARLY_PAYMENT_GRACE_DAYS
    if grace is None:
        return
    if paid_at.date() < payment.due_date - timedelta(days=grace):
        raise ValidationError(
            f"paid_at precedes due_date by more than {grace} days",
            field="paid_at",
        )


def get_payment(db: Session, payment_id: uuid.UUID) -> DuesPayment:
    payment = db.scalar(select(DuesPayment).where(DuesPayment.id == payment_id))
    if not payment:
        raise NotFoundError("Payment not found", field="payment_id")
    return payment


"""
회비 납부 기록 생성

- ADMIN 전용
- amount 는 0 이상
- status=PAID 인데 paid_at 이 없으면 현재 시각으로 기록
- status=PAID 가 아니면 paid_at 지정 불가
- PAID 기록도 mark_paid 와 같은 납부일 정책(policy)을 거침

"""
def record_payment(
    db: Session,
    *,
    actor: User,
    user_id: uuid.UUID,
    amount: Decimal,
    payment_type: PaymentType,
    due_date: date,
    status: PaymentStatus = PaymentStatus.NOT_PAID,
    payment_method: PaymentMethod | None = None,
    paid_at: datetime | None = None,
    semester: str | None = None,
    reference_number: str | None = None,
    notes: str | None = None,
    policy: PaidAtPolicy | None = None,
) -> DuesPayment:
    require_admin(actor, action="record dues payments")

    amount = Decimal(amount)
    if amount < 0:
        raise ValidationError("amount must not be negative", field="amount")
    get_user_or_404(db, user_id)

    if status != PaymentStatus.PAID and paid_at is not None:
        raise ValidationError("paid_at can only be set for PAID payments", field="paid_at")
    if status == PaymentStatus.PAID:
        paid_at = as_utc(paid_at) if paid_at else utcnow()

    payment = DuesPayment(
        user_id=user_id,
        amount=amount,
        payment_type=payment_type,
        payment_method=payment_method,
        status=status,
        due_date=due_date,
        paid_at=paid_at,
        semester=semester,
        reference_number=reference_number,
        notes=notes,
        recorded_by=actor.id,
    )
    if status == PaymentStatus.PAID:
        (policy or default_paid_at_policy)(payment, paid_at)
    db.add(payment)
    db.flush()
    logger.info("Recorded dues payment %s for user %s by %s", payment.id, user_id, actor.id)
    return payment


"""
납부 처리

- status=PAID, paid_at 을 함께 기록
- 이미 PAID / WAIVED 인 레코드는 InvalidStateError
- policy(payment, paid_at) 로 납부일 검증 (기본: default_paid_at_policy)

"""
def mark_paid(
    db: Session,
    *,
    actor: User,
    payment_id: uuid.UUID,
    paid_at: datetime | None = None,
    payment_method: PaymentMethod | None = None,
    reference_number: str | None = None,
    policy: PaidAtPolicy | None = None,
) -> DuesPayment:
    require_admin(actor, action="mark dues as paid")
    payment = get_payment(db, payment_id)

    if payment.status in (PaymentStatus.PAID, PaymentStatus.WAIVED):
        raise InvalidStateError(f"Payment already {payment.status.value}", field="status")

    paid_at = as_utc(paid_at) if paid_at else utcnow()
    (policy or default_paid_at_policy)(payment, paid_at)

    before = payment.status
    payment.status = PaymentStatus.PAID
    payment.paid_at = paid_at
    if payment_method is not None:
        payment.payment_method = payment_method
    if reference_number is not None:
        payment.reference_number = reference_number

    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.MARK_PAID,
        target_user_id=payment.user_id,
        before_value=before.value,
        after_value=PaymentStatus.PAID.value,
        subject_id=payment.id,
    )
    db.flush()
    logger.info("Marked dues payment %s paid by %s", payment.id, actor.id)
    return payment


def waive_payment(db: Session, *, actor: User, payment_id: uuid.UUID) -> DuesPayment:
    require_admin(actor, action="waive dues")
    payment = get_payment(db, payment_id)

    if payment.status in (PaymentStatus.PAID, PaymentStatus.WAIVED):
        raise InvalidStateError(f"Payment already {payment.status.value}", field="status")

    before = payment.status
    payment.status = PaymentStatus.WAIVED
    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.WAIVE_DUES,
        target_user_id=payment.user_id,
        before_value=before.value,
        after_value=PaymentStatus.WAIVED.value,
        subject_id=payment.id,
    )
    db.flush()
    logger.info("Waived dues payment %s by %s", payment.id, actor.id)
    return payment


"""
연체 처리

- NOT_PAID / PARTIAL 이면서 due_date 가 today 이전인 레코드를 OVERDUE 로 변경
- 변경된 건수 반환

"""
def mark_overdue(db: Session, *, actor: User, today: date | None = None) -> int:
    require_admin(actor, action="mark dues overdue")
    today = today or utcnow().date()

    rows = db.scalars(
        select(DuesPayment).where(
            DuesPayment.status.in_((PaymentStatus.NOT_PAID, PaymentStatus.PARTIAL)),
            DuesPayment.due_date < today,
        )
    ).all()
    for payment in rows:
        payment.status = PaymentStatus.OVERDUE
    db.flush()

    logger.info("Marked %d dues payments overdue by %s", len(rows), actor.id)
    return len(rows)


def list_outstanding(db: Session, *, actor: User, semester: str | None = None) -> list[DuesPayment]:
    require_admin(actor, action="view outstanding dues")
    query = select(DuesPayment).where(DuesPayment.status.in_(OUTSTANDING_STATUSES))
    if semester is not None:
        query = query.where(DuesPayment.semester == semester)
    return list(db.scalars(query.order_by(DuesPayment.due_date, DuesPayment.created_at)).all())


def list_payments_for_user(db: Session, *, viewer: User, user_id: uuid.UUID) -> list[DuesPayment]:
    require_self_or_admin(viewer, user_id, action="view dues of other users")
    return list(
        db.scalars(
            select(DuesPayment)
            .where(DuesPayment.user_id == user_id)
            .order_by(DuesPayment.due_date.desc(), DuesPayment.created_at.desc())
        ).all()
    )


# 내보내기용: 납부 레코드 + 회원 정보
def payments_for_export(db: Session, *, actor: User, semester: str | None = None):
    require_admin(actor, action="export dues")
    query = select(DuesPayment, User).join(User, User.id == DuesPayment.user_id)
    if semester is not None:
        query = query.where(DuesPayment.semester == semester)
    return db.execute(query.order_by(User.email, DuesPayment.due_date)).all()
