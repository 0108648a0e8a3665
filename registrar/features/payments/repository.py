from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from registrar.features.people.models import Student
from .models import StudentSemesterPayment


class StudentSemesterPaymentRepository:

    @staticmethod
    def get(db: Session, student_pk: UUID, semester_id: UUID) -> Optional[StudentSemesterPayment]:
        return db.execute(
            select(StudentSemesterPayment).where(
                StudentSemesterPayment.student_id == student_pk,
                StudentSemesterPayment.academic_semester_id == semester_id,
            )
        ).scalars().first()

    @staticmethod
    def create(db: Session, data: dict) -> StudentSemesterPayment:
        payment = StudentSemesterPayment(**data)
        db.add(payment)
        db.flush()
        return payment

    @staticmethod
    def list_payments(
        db: Session, student_id: Optional[str] = None, semester_id: Optional[UUID] = None
    ) -> List[StudentSemesterPayment]:
        stmt = select(StudentSemesterPayment).join(Student, Student.id == StudentSemesterPayment.student_id)
        if student_id:
            stmt = stmt.where(Student.student_id == student_id)
        if semester_id:
            stmt = stmt.where(StudentSemesterPayment.academic_semester_id == semester_id)
        stmt = stmt.order_by(Student.student_id)
        return list(db.execute(stmt).scalars().all())
