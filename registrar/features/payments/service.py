"""Semester billing records."""

from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from registrar.core.config import get_settings
from registrar.db.session import transaction
from .models import PaymentStatus, StudentSemesterPayment
from .repository import StudentSemesterPaymentRepository
from .schemas import StudentSemesterPaymentResponse

logger = logging.getLogger("payments.service")


class StudentSemesterPaymentService:

    @staticmethod
    def create_semester_payment(
        db: Session, student_pk: UUID, academic_semester_id: UUID, total_credits: int
    ) -> Optional[StudentSemesterPayment]:
        """Create the semester bill unless one already exists.

        Runs inside the caller's transaction. Returns None when skipped.
        """
        if StudentSemesterPaymentRepository.get(db, student_pk, academic_semester_id):
            return None
        settings = get_settings()
        full_amount = total_credits * settings.credit_unit_price
        payment = StudentSemesterPaymentRepository.create(
            db,
            {
                "student_id": student_pk,
                "academic_semester_id": academic_semester_id,
                "full_payment_amount": full_amount,
                "partial_payment_amount": full_amount * settings.partial_payment_ratio,
                "total_due_amount": full_amount,
                "total_paid_amount": 0,
                "payment_status": PaymentStatus.PENDING,
            },
        )
        logger.debug("payment.created student=%s semester=%s amount=%s", student_pk, academic_semester_id, full_amount)
        return payment

    @staticmethod
    def list_payments(
        student_id: Optional[str] = None, academic_semester_id: Optional[UUID] = None
    ) -> List[StudentSemesterPaymentResponse]:
        with transaction() as db:
            rows = StudentSemesterPaymentRepository.list_payments(db, student_id, academic_semester_id)
            return [StudentSemesterPaymentResponse.model_validate(r) for r in rows]
