import enum
import uuid

from sqlalchemy import Column, Enum, ForeignKey, Integer, String, Time, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from registrar.db.base import Base, TimestampMixin


class WeekDay(enum.Enum):
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"


class OfferedCourse(TimestampMixin, Base):
    __tablename__ = "offered_courses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    course_id = Column(Uuid, ForeignKey("courses.id"), nullable=False)
    academic_department_id = Column(Uuid, ForeignKey("academic_departments.id"), nullable=False)
    semester_registration_id = Column(Uuid, ForeignKey("semester_registrations.id"), nullable=False)

    course = relationship("Course")
    sections = relationship("OfferedCourseSection", back_populates="offered_course", order_by="OfferedCourseSection.title")

    __table_args__ = (
        UniqueConstraint(
            "academic_department_id",
            "semester_registration_id",
            "course_id",
            name="uq_offered_course_department_registration_course",
        ),
    )


class OfferedCourseSection(TimestampMixin, Base):
    __tablename__ = "offered_course_sections"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(50), nullable=False)
    max_capacity = Column(Integer, nullable=False)
    currently_enrolled_student = Column(Integer, nullable=False, default=0)
    offered_course_id = Column(Uuid, ForeignKey("offered_courses.id"), nullable=False)
    semester_registration_id = Column(Uuid, ForeignKey("semester_registrations.id"), nullable=False)

    offered_course = relationship("OfferedCourse", back_populates="sections")
    class_schedules = relationship(
        "OfferedCourseClassSchedule",
        back_populates="offered_course_section",
        order_by="OfferedCourseClassSchedule.start_time",
    )

    __table_args__ = (UniqueConstraint("offered_course_id", "title", name="uq_offered_course_section_title"),)


class OfferedCourseClassSchedule(TimestampMixin, Base):
    __tablename__ = "offered_course_class_schedules"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    day_of_week = Column(Enum(WeekDay, name="week_day"), nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    offered_course_section_id = Column(Uuid, ForeignKey("offered_course_sections.id"), nullable=False)
    semester_registration_id = Column(Uuid, ForeignKey("semester_registrations.id"), nullable=False)
    room_id = Column(Uuid, ForeignKey("rooms.id"), nullable=False)
    faculty_id = Column(Uuid, ForeignKey("faculties.id"), nullable=False)

    offered_course_section = relationship("OfferedCourseSection", back_populates="class_schedules")
    room = relationship("Room")
    faculty = relationship("Faculty")
