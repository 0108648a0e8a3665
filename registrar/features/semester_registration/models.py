import enum
import uuid

from sqlalchemy import Boolean, Column, Date, Enum, ForeignKey, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from registrar.db.base import Base, TimestampMixin


class SemesterRegistrationStatus(enum.Enum):
    UPCOMING = "UPCOMING"
    ONGOING = "ONGOING"
    ENDED = "ENDED"


ACTIVE_STATUSES = (SemesterRegistrationStatus.UPCOMING, SemesterRegistrationStatus.ONGOING)


class SemesterRegistration(TimestampMixin, Base):
    __tablename__ = "semester_registrations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(
        Enum(SemesterRegistrationStatus, name="semester_registration_status"),
        nullable=False,
        default=SemesterRegistrationStatus.UPCOMING,
        index=True,
    )
    min_credit = Column(Integer, nullable=False, default=0)
    max_credit = Column(Integer, nullable=False, default=0)
    academic_semester_id = Column(Uuid, ForeignKey("academic_semesters.id"), nullable=False)

    academic_semester = relationship("AcademicSemester")

    def __repr__(self) -> str:
        return f"<SemesterRegistration id={self.id} status={self.status}>"


class StudentSemesterRegistration(TimestampMixin, Base):
    __tablename__ = "student_semester_registrations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False)
    semester_registration_id = Column(Uuid, ForeignKey("semester_registrations.id"), nullable=False)
    is_confirmed = Column(Boolean, nullable=False, default=False)
    total_credits_taken = Column(Integer, nullable=False, default=0)

    student = relationship("Student")

    __table_args__ = (
        UniqueConstraint("student_id", "semester_registration_id", name="uq_student_semester_registration"),
    )


class StudentSemesterRegistrationCourse(TimestampMixin, Base):
    __tablename__ = "student_semester_registration_courses"

    semester_registration_id = Column(Uuid, ForeignKey("semester_registrations.id"), primary_key=True)
    student_id = Column(Uuid, ForeignKey("students.id"), primary_key=True)
    offered_course_id = Column(Uuid, ForeignKey("offered_courses.id"), primary_key=True)
    offered_course_section_id = Column(Uuid, ForeignKey("offered_course_sections.id"), nullable=False)

    offered_course = relationship("OfferedCourse")
    offered_course_section = relationship("OfferedCourseSection")
