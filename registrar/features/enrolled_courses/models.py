import enum
import uuid

from sqlalchemy import Column, Enum, Float, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from registrar.db.base import Base, TimestampMixin


class StudentEnrolledCourseStatus(enum.Enum):
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"


class ExamType(enum.Enum):
    MIDTERM = "MIDTERM"
    FINAL = "FINAL"


class StudentEnrolledCourse(TimestampMixin, Base):
    __tablename__ = "student_enrolled_courses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False, index=True)
    course_id = Column(Uuid, ForeignKey("courses.id"), nullable=False)
    academic_semester_id = Column(Uuid, ForeignKey("academic_semesters.id"), nullable=False)
    grade = Column(String(5), nullable=True)
    point = Column(Float, nullable=True, default=0)
    total_marks = Column(Float, nullable=True, default=0)
    status = Column(
        Enum(StudentEnrolledCourseStatus, name="student_enrolled_course_status"),
        nullable=False,
        default=StudentEnrolledCourseStatus.ONGOING,
    )

    course = relationship("Course")
    marks = relationship("StudentEnrolledCourseMark", back_populates="student_enrolled_course")

    __table_args__ = (
        UniqueConstraint("student_id", "course_id", "academic_semester_id", name="uq_student_enrolled_course"),
    )


class StudentEnrolledCourseMark(TimestampMixin, Base):
    __tablename__ = "student_enrolled_course_marks"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False)
    student_enrolled_course_id = Column(Uuid, ForeignKey("student_enrolled_courses.id"), nullable=False)
    academic_semester_id = Column(Uuid, ForeignKey("academic_semesters.id"), nullable=False)
    grade = Column(String(5), nullable=True)
    marks = Column(Float, nullable=True)
    exam_type = Column(Enum(ExamType, name="exam_type"), nullable=False, default=ExamType.MIDTERM)

    student_enrolled_course = relationship("StudentEnrolledCourse", back_populates="marks")

    __table_args__ = (
        UniqueConstraint("student_enrolled_course_id", "exam_type", name="uq_enrolled_course_exam_type"),
    )


class StudentAcademicInfo(TimestampMixin, Base):
    __tablename__ = "student_academic_infos"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey("students.id"), nullable=False, unique=True)
    total_completed_credit = Column(Integer, nullable=False, default=0)
    cgpa = Column(Float, nullable=False, default=0)
