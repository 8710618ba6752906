import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from rush_bff.models.dues import PaymentMethod, PaymentStatus, PaymentType


class PaymentCreateRequest(BaseModel):
    user_id: uuid.UUID
    amount: Decimal = Field(..., examples=["150.00"])
    payment_type: PaymentType
    due_date: date
    status: PaymentStatus = PaymentStatus.NOT_PAID
    payment_method: Optional[PaymentMethod] = None
    paid_at: Optional[datetime] = None
    semester: Optional[str] = Field(default=None, max_length=30, examples=["Fall 2025"])
    reference_number: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = None


class MarkPaidRequest(BaseModel):
    paid_at: Optional[datetime] = None
    payment_method: Optional[PaymentMethod] = None
    reference_number: Optional[str] = Field(default=None, max_length=100)


class MarkOverdueResponse(BaseModel):
    updated: int


class PaymentResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    amount: Decimal
    payment_type: PaymentType
    payment_method: Optional[PaymentMethod]
    status: PaymentStatus
    due_date: date
    paid_at: Optional[datetime]
    semester: Optional[str]
    reference_number: Optional[str]
    notes: Optional[str]
    recorded_by: Optional[uuid.UUID]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
