from datetime import time
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from registrar.features.academics.models import AcademicDepartment
from registrar.features.facilities.models import Room
from registrar.features.people.models import Faculty
from .models import OfferedCourse, OfferedCourseClassSchedule, OfferedCourseSection, WeekDay


class OfferedCourseRepository:

    @staticmethod
    def get_offered_course(db: Session, offered_course_id: UUID) -> Optional[OfferedCourse]:
        return db.get(OfferedCourse, offered_course_id)

    @staticmethod
    def find_offered_course(
        db: Session, department_id: UUID, registration_id: UUID, course_id: UUID
    ) -> Optional[OfferedCourse]:
        return db.execute(
            select(OfferedCourse).where(
                OfferedCourse.academic_department_id == department_id,
                OfferedCourse.semester_registration_id == registration_id,
                OfferedCourse.course_id == course_id,
            )
        ).scalars().first()

    @staticmethod
    def create_offered_course(db: Session, department_id: UUID, registration_id: UUID, course_id: UUID) -> OfferedCourse:
        offered = OfferedCourse(
            academic_department_id=department_id,
            semester_registration_id=registration_id,
            course_id=course_id,
        )
        db.add(offered)
        db.flush()
        return offered

    @staticmethod
    def list_for_department(db: Session, department_id: UUID, registration_id: UUID) -> List[OfferedCourse]:
        rows = db.execute(
            select(OfferedCourse).where(
                OfferedCourse.academic_department_id == department_id,
                OfferedCourse.semester_registration_id == registration_id,
            )
        )
        return list(rows.scalars().all())

    @staticmethod
    def get_department(db: Session, department_id: UUID) -> Optional[AcademicDepartment]:
        return db.get(AcademicDepartment, department_id)


class OfferedCourseSectionRepository:

    @staticmethod
    def get_section(db: Session, section_id: UUID) -> Optional[OfferedCourseSection]:
        return db.get(OfferedCourseSection, section_id)

    @staticmethod
    def get_section_by_title(db: Session, offered_course_id: UUID, title: str) -> Optional[OfferedCourseSection]:
        return db.execute(
            select(OfferedCourseSection).where(
                OfferedCourseSection.offered_course_id == offered_course_id,
                OfferedCourseSection.title == title,
            )
        ).scalars().first()

    @staticmethod
    def create_section(db: Session, data: dict) -> OfferedCourseSection:
        section = OfferedCourseSection(**data)
        db.add(section)
        db.flush()
        return section


class ClassScheduleRepository:

    @staticmethod
    def get_room(db: Session, room_id: UUID) -> Optional[Room]:
        return db.get(Room, room_id)

    @staticmethod
    def get_faculty(db: Session, faculty_id: UUID) -> Optional[Faculty]:
        return db.get(Faculty, faculty_id)

    @staticmethod
    def _overlapping(registration_id: UUID, day: WeekDay, start: time, end: time):
        return select(OfferedCourseClassSchedule).where(
            OfferedCourseClassSchedule.semester_registration_id == registration_id,
            OfferedCourseClassSchedule.day_of_week == day,
            OfferedCourseClassSchedule.start_time < end,
            OfferedCourseClassSchedule.end_time > start,
        )

    @staticmethod
    def find_room_clash(
        db: Session, registration_id: UUID, room_id: UUID, day: WeekDay, start: time, end: time
    ) -> Optional[OfferedCourseClassSchedule]:
        stmt = ClassScheduleRepository._overlapping(registration_id, day, start, end).where(
            OfferedCourseClassSchedule.room_id == room_id
        )
        return db.execute(stmt).scalars().first()

    @staticmethod
    def find_faculty_clash(
        db: Session, registration_id: UUID, faculty_id: UUID, day: WeekDay, start: time, end: time
    ) -> Optional[OfferedCourseClassSchedule]:
        stmt = ClassScheduleRepository._overlapping(registration_id, day, start, end).where(
            OfferedCourseClassSchedule.faculty_id == faculty_id
        )
        return db.execute(stmt).scalars().first()

    @staticmethod
    def create_schedule(db: Session, data: dict) -> OfferedCourseClassSchedule:
        schedule = OfferedCourseClassSchedule(**data)
        db.add(schedule)
        db.flush()
        return schedule
