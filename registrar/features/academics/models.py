import uuid

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Uuid, text
from sqlalchemy.orm import relationship

from registrar.db.base import Base, TimestampMixin


class AcademicFaculty(TimestampMixin, Base):
    __tablename__ = "academic_faculties"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False, unique=True)

    departments = relationship("AcademicDepartment", back_populates="academic_faculty")


class AcademicDepartment(TimestampMixin, Base):
    __tablename__ = "academic_departments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False, unique=True)
    academic_faculty_id = Column(Uuid, ForeignKey("academic_faculties.id"), nullable=False)

    academic_faculty = relationship("AcademicFaculty", back_populates="departments")


class AcademicSemester(TimestampMixin, Base):
    __tablename__ = "academic_semesters"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    year = Column(Integer, nullable=False)
    title = Column(String(50), nullable=False)
    code = Column(String(10), nullable=False)
    start_month = Column(String(20), nullable=False)
    end_month = Column(String(20), nullable=False)
    is_current = Column(Boolean, nullable=False, default=False)

    # At most one row may carry is_current = true.
    __table_args__ = (
        Index(
            "uq_academic_semesters_current",
            "is_current",
            unique=True,
            postgresql_where=text("is_current"),
            sqlite_where=text("is_current = 1"),
        ),
    )

    def __repr__(self) -> str:
        return f"<AcademicSemester {self.title} {self.year} current={self.is_current}>"
