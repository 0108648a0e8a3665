import enum
import uuid

from sqlalchemy import Column, Enum, Float, ForeignKey, UniqueConstraint, Uuid

from registrar.db.base import Base, TimestampMixin


class PaymentStatus(enum.Enum):
    PENDING = "PENDING"
    PARTIAL_PAID = "PARTIAL_PAID"
    FULL_PAID = "FULL_PAID"


class StudentSemesterPayment(TimestampMixin, Base):
    __tablename__ = "student_semester_payments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False)
    academic_semester_id = Column(Uuid, ForeignKey("academic_semesters.id"), nullable=False)
    full_payment_amount = Column(Float, nullable=False, default=0)
    partial_payment_amount = Column(Float, nullable=False, default=0)
    total_due_amount = Column(Float, nullable=False, default=0)
    total_paid_amount = Column(Float, nullable=False, default=0)
    payment_status = Column(Enum(PaymentStatus, name="payment_status"), nullable=False, default=PaymentStatus.PENDING)

    __table_args__ = (
        UniqueConstraint("student_id", "academic_semester_id", name="uq_student_semester_payment"),
    )
