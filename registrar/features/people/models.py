import uuid

from sqlalchemy import Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from registrar.db.base import Base, TimestampMixin


class Student(TimestampMixin, Base):
    __tablename__ = "students"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(String(50), nullable=False, unique=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    academic_semester_id = Column(Uuid, ForeignKey("academic_semesters.id"), nullable=True)
    academic_department_id = Column(Uuid, ForeignKey("academic_departments.id"), nullable=False)
    academic_faculty_id = Column(Uuid, ForeignKey("academic_faculties.id"), nullable=False)

    academic_department = relationship("AcademicDepartment")

    def __repr__(self) -> str:
        return f"<Student {self.student_id}>"


class Faculty(TimestampMixin, Base):
    __tablename__ = "faculties"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    faculty_id = Column(String(50), nullable=False, unique=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    designation = Column(String(100), nullable=True)
    academic_department_id = Column(Uuid, ForeignKey("academic_departments.id"), nullable=False)
    academic_faculty_id = Column(Uuid, ForeignKey("academic_faculties.id"), nullable=False)

    def __repr__(self) -> str:
        return f"<Faculty {self.faculty_id}>"
