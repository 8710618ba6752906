"""
admin_dues.py

관리자 전용 회비 관리 API 모음.

이 파일은 회비(dues)에 대한 "관리자 권한" 기능만을 담당한다.
회원용 회비 조회 API와 역할을 분리하여,
권한 관리와 비즈니스 책임을 명확히 하기 위한 구조이다.

주요 기능:
- 회원별 회비 납부 기록 생성
- 납부 처리 / 면제 / 연체 일괄 처리
- 미납 목록, 회원별 납부 내역 조회
- 관리자용 CSV / Excel(xlsx) 데이터 내보내기

설계 원칙:
- 모든 엔드포인트는 관리자 권한(get_current_admin)을 요구
- 비즈니스 로직은 service 계층(rush_bff.services.dues)에 위임
- 이 라우터는 요청/응답 처리 및 권한 검증에만 집중

관련 파일:
- rush_bff.services.dues   : 회비 검증 및 상태 변경 로직
- rush_bff.models.dues     : 회비 DB 모델
- rush_bff.schemas.dues    : 요청/응답 스키마 정의
"""

import csv
import io
import uuid

from fastapi import APIRouter, Depends, Query, status
from openpyxl import Workbook
from sqlalchemy.orm import Session
from starlette.responses import Response, StreamingResponse

from rush_bff.core.deps import get_current_admin, get_db
from rush_bff.models.user import User
from rush_bff.schemas.dues import MarkOverdueResponse, MarkPaidRequest, PaymentCreateRequest, PaymentResponse
from rush_bff.services.dues import (
    list_outstanding,
    list_payments_for_user,
    mark_overdue,
    mark_paid,
    payments_for_export,
    record_payment,
    waive_payment,
)

router = APIRouter(prefix="/admin/dues", tags=["admin-dues"])

EXPORT_HEADER = [
    "semester",
    "payment_id",
    "email",
    "full_name",
    "payment_type",
    "status",
    "amount",
    "due_date",
    "paid_at",
    "payment_method",
    "reference_number",
]


def _export_row(payment, user) -> list:
    return [
        payment.semester or "",
        str(payment.id),
        user.email,
        user.full_name or "",
        payment.payment_type.value,
        payment.status.value,
        str(payment.amount),
        payment.due_date.isoformat(),
        payment.paid_at.isoformat() if payment.paid_at else "",
        payment.payment_method.value if payment.payment_method else "",
        payment.reference_number or "",
    ]


def _export_name(semester: str | None, ext: str) -> str:
    label = semester.replace(" ", "_") if semester else "all"
    return f"dues_payments_{label}.{ext}"


"""
관리자 전용 회비 납부 기록 생성 API

- 특정 사용자(user_id)에 대한 회비 레코드를 추가
- status=PAID 이고 paid_at 이 없으면 현재 시각으로 기록

"""
@router.post("/payments", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def create_dues_payment(
    body: PaymentCreateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    payment = record_payment(db, actor=admin, **body.model_dump())
    db.commit()
    db.refresh(payment)
    return payment


@router.post("/payments/{payment_id}/mark-paid", response_model=PaymentResponse)
def mark_dues_paid(
    payment_id: uuid.UUID,
    body: MarkPaidRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    payment = mark_paid(db, actor=admin, payment_id=payment_id, **body.model_dump())
    db.commit()
    db.refresh(payment)
    return payment


@router.post("/payments/{payment_id}/waive", response_model=PaymentResponse)
def waive_dues_payment(
    payment_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    payment = waive_payment(db, actor=admin, payment_id=payment_id)
    db.commit()
    db.refresh(payment)
    return payment


# due_date 가 지난 NOT_PAID / PARTIAL 레코드를 OVERDUE 로 일괄 변경
@router.post("/mark-overdue", response_model=MarkOverdueResponse)
def mark_dues_overdue(
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    updated = mark_overdue(db, actor=admin)
    db.commit()
    return MarkOverdueResponse(updated=updated)


@router.get("/outstanding", response_model=list[PaymentResponse])
def outstanding(
    semester: str | None = Query(default=None, description="예: Fall 2025"),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    return list_outstanding(db, actor=admin, semester=semester)


@router.get("/users/{user_id}/payments", response_model=list[PaymentResponse])
def user_payments(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    return list_payments_for_user(db, viewer=admin, user_id=user_id)


"""
관리자용 회비 납부 내역 CSV 다운로드 API

- semester 지정 시 해당 학기만, 미지정 시 전체
- StreamingResponse 로 한 행씩 내보냄
- UTF-8 BOM을 추가하여 Excel에서 바로 열 수 있도록 처리

"""
@router.get("/export")
def export_payments_csv(
    semester: str | None = Query(default=None, description="예: Fall 2025"),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    rows = payments_for_export(db, actor=admin, semester=semester)

    def generate():
        # Excel에서 UTF-8 CSV 깨짐 방지를 위해 BOM(Byte Order Mark) 먼저 출력
        yield "\ufeff"

        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(EXPORT_HEADER)
        yield output.getvalue()
        output.seek(0)
        output.truncate(0)

        for payment, user in rows:
            writer.writerow(_export_row(payment, user))
            yield output.getvalue()
            output.seek(0)
            output.truncate(0)

    headers = {"Content-Disposition": f'attachment; filename="{_export_name(semester, "csv")}"'}
    return StreamingResponse(generate(), media_type="text/csv; charset=utf-8", headers=headers)


"""
관리자용 회비 납부 내역 Excel(xlsx) 다운로드 API

- CSV 대신 Excel 형식이 필요한 경우를 위한 엔드포인트
- openpyxl을 사용하여 XLSX 파일 생성

"""
@router.get("/export.xlsx")
def export_payments_xlsx(
    semester: str | None = Query(default=None, description="예: Fall 2025"),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    rows = payments_for_export(db, actor=admin, semester=semester)

    wb = Workbook()
    ws = wb.active
    ws.title = "dues_payments"

    ws.append(EXPORT_HEADER)
    for payment, user in rows:
        ws.append(_export_row(payment, user))

    buf = io.BytesIO()
    wb.save(buf)

    headers = {"Content-Disposition": f'attachment; filename="{_export_name(semester, "xlsx")}"'}
    return Response(
        content=buf.getvalue(),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers=headers,
    )
