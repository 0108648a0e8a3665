import uuid

from sqlalchemy import Column, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from registrar.db.base import Base, TimestampMixin


class Course(TimestampMixin, Base):
    __tablename__ = "courses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    code = Column(String(20), nullable=False, unique=True, index=True)
    credits = Column(Integer, nullable=False, default=0)

    # Edges where this course is the dependent side.
    prerequisites = relationship(
        "CourseToPrerequisite",
        foreign_keys="CourseToPrerequisite.course_id",
        back_populates="course",
        cascade="save-update, merge, delete",
    )
    # Edges where this course is the required side.
    prerequisite_for = relationship(
        "CourseToPrerequisite",
        foreign_keys="CourseToPrerequisite.prerequisite_id",
        back_populates="prerequisite",
        cascade="save-update, merge, delete",
    )

    def __repr__(self) -> str:
        return f"<Course {self.code} credits={self.credits}>"


class CourseToPrerequisite(Base):
    __tablename__ = "course_to_prerequisites"

    course_id = Column(Uuid, ForeignKey("courses.id"), primary_key=True)
    prerequisite_id = Column(Uuid, ForeignKey("courses.id"), primary_key=True)

    course = relationship("Course", foreign_keys=[course_id], back_populates="prerequisites")
    prerequisite = relationship("Course", foreign_keys=[prerequisite_id], back_populates="prerequisite_for")


class CourseFaculty(Base):
    __tablename__ = "course_faculties"

    course_id = Column(Uuid, ForeignKey("courses.id"), primary_key=True)
    faculty_id = Column(Uuid, ForeignKey("faculties.id"), primary_key=True)

    faculty = relationship("Faculty")
