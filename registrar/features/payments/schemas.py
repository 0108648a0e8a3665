from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel

from .models import PaymentStatus


class StudentSemesterPaymentResponse(BaseModel):
    id: UUID
    student_id: UUID
    academic_semester_id: UUID
    full_payment_amount: float
    partial_payment_amount: float
    total_due_amount: float
    total_paid_amount: float
    payment_status: PaymentStatus

    model_config = {"from_attributes": True}
