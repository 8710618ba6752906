import uuid
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import CheckConstraint, Date, DateTime, Enum as SAEnum, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from rush_bff.db.base import Base, TimestampedMixin


class PaymentType(str, Enum):
    INITIATION = "INITIATION"
    SEMESTER = "SEMESTER"
    SOCIAL = "SOCIAL"
    FINE = "FINE"
    OTHER = "OTHER"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    VENMO = "VENMO"
    ZELLE = "ZELLE"
    CHECK = "CHECK"
    BANK_TRANSFER = "BANK_TRANSFER"
    OTHER = "OTHER"


class PaymentStatus(str, Enum):
    PAID = "PAID"
    PARTIAL = "PARTIAL"
    NOT_PAID = "NOT_PAID"
    OVERDUE = "OVERDUE"
    WAIVED = "WAIVED"


OUTSTANDING_STATUSES = (PaymentStatus.NOT_PAID, PaymentStatus.PARTIAL, PaymentStatus.OVERDUE)


class DuesPayment(TimestampedMixin, Base):
    """회비 납부 레코드.

    - user_id: 납부 대상 회원 (삭제 시 CASCADE)
    - recorded_by: 기록한 관리자 (삭제 시 NULL)
    - status=PAID 이면 paid_at이 있어야 함 (서비스 계층에서 보장)
    - semester: 'Fall 2024', 'Spring 2025' 같은 라벨
    """

    __tablename__ = "dues_payments"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_dues_payments_amount"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    payment_type: Mapped[PaymentType] = mapped_column(
        SAEnum(PaymentType, name="payment_type", native_enum=False, create_constraint=True, length=20),
        nullable=False,
        index=True,
    )
    payment_method: Mapped[PaymentMethod | None] = mapped_column(
        SAEnum(PaymentMethod, name="payment_method", native_enum=False, create_constraint=True, length=20),
        nullable=True,
    )
    status: Mapped[PaymentStatus] = mapped_column(
        SAEnum(PaymentStatus, name="payment_status", native_enum=False, create_constraint=True, length=20),
        nullable=False,
        default=PaymentStatus.NOT_PAID,
        index=True,
    )

    due_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    paid_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    semester: Mapped[str | None] = mapped_column(String(30), nullable=True, index=True)
    reference_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    recorded_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
