"""Offering builder: offered courses, sections and their class schedules."""

from __future__ import annotations

import logging
from typing import Iterable, List
from uuid import UUID

from sqlalchemy.orm import Session

from registrar.common.errors import ConflictError, NotFoundError
from registrar.db.session import transaction
from registrar.features.courses.repository import CourseRepository
from registrar.features.semester_registration.repository import SemesterRegistrationRepository
from .repository import ClassScheduleRepository, OfferedCourseRepository, OfferedCourseSectionRepository
from .scheduling import Slot, first_batch_clash
from .schemas import (
    ClassScheduleCreate,
    ClassScheduleIn,
    ClassScheduleResponse,
    OfferedCourseCreate,
    OfferedCourseResponse,
    OfferedCourseSectionCreate,
    OfferedCourseSectionResponse,
)

logger = logging.getLogger("offered_courses.service")


def _slot(item: ClassScheduleIn) -> Slot:
    return Slot(
        day_of_week=item.day_of_week,
        start_time=item.start_time,
        end_time=item.end_time,
        room_id=item.room_id,
        faculty_id=item.faculty_id,
    )


class OfferedCourseService:

    @staticmethod
    def create_offered_courses(payload: OfferedCourseCreate) -> List[OfferedCourseResponse]:
        with transaction() as db:
            if not SemesterRegistrationRepository.get_registration(db, payload.semester_registration_id):
                raise NotFoundError("Semester registration not found")
            if not OfferedCourseRepository.get_department(db, payload.academic_department_id):
                raise NotFoundError("Academic department not found")

            created = []
            for course_id in dict.fromkeys(payload.course_ids):
                if not CourseRepository.get_course(db, course_id):
                    raise NotFoundError(f"Course {course_id} not found")
                existing = OfferedCourseRepository.find_offered_course(
                    db, payload.academic_department_id, payload.semester_registration_id, course_id
                )
                if existing:
                    continue
                created.append(
                    OfferedCourseRepository.create_offered_course(
                        db, payload.academic_department_id, payload.semester_registration_id, course_id
                    )
                )
            result = [OfferedCourseResponse.model_validate(o) for o in created]
        logger.info(
            "offered_courses.created department=%s registration=%s count=%d",
            payload.academic_department_id,
            payload.semester_registration_id,
            len(result),
        )
        return result


class ClassScheduleService:

    @staticmethod
    def check_availability(db: Session, registration_id: UUID, schedules: Iterable[ClassScheduleIn]) -> None:
        """Reject unknown rooms/faculty and any double booking within the registration."""
        schedules = list(schedules)
        for item in schedules:
            if not ClassScheduleRepository.get_room(db, item.room_id):
                raise NotFoundError("Room not found", details={"room_id": str(item.room_id)})
            if not ClassScheduleRepository.get_faculty(db, item.faculty_id):
                raise NotFoundError("Faculty not found", details={"faculty_id": str(item.faculty_id)})

            slot = (item.day_of_week, item.start_time, item.end_time)
            booked = ClassScheduleRepository.find_room_clash(db, registration_id, item.room_id, *slot)
            if booked:
                logger.warning("schedule.room_clash room=%s day=%s", item.room_id, item.day_of_week.value)
                raise ConflictError(
                    "Room is already booked",
                    details={
                        "room_id": str(item.room_id),
                        "day_of_week": item.day_of_week.value,
                        "start_time": booked.start_time.isoformat(),
                        "end_time": booked.end_time.isoformat(),
                    },
                )
            busy = ClassScheduleRepository.find_faculty_clash(db, registration_id, item.faculty_id, *slot)
            if busy:
                logger.warning("schedule.faculty_clash faculty=%s day=%s", item.faculty_id, item.day_of_week.value)
                raise ConflictError(
                    "Faculty is already booked",
                    details={
                        "faculty_id": str(item.faculty_id),
                        "day_of_week": item.day_of_week.value,
                        "start_time": busy.start_time.isoformat(),
                        "end_time": busy.end_time.isoformat(),
                    },
                )

        clash = first_batch_clash(_slot(s) for s in schedules)
        if clash:
            kind, a, b = clash
            raise ConflictError(
                f"Submitted schedules overlap on the same {kind}",
                details={
                    "day_of_week": a.day_of_week.value,
                    "first": f"{a.start_time.isoformat()}-{a.end_time.isoformat()}",
                    "second": f"{b.start_time.isoformat()}-{b.end_time.isoformat()}",
                },
            )

    @staticmethod
    def create_class_schedule(payload: ClassScheduleCreate) -> ClassScheduleResponse:
        with transaction() as db:
            section = OfferedCourseSectionRepository.get_section(db, payload.offered_course_section_id)
            if not section:
                raise NotFoundError("Offered course section not found")
            ClassScheduleService.check_availability(db, section.semester_registration_id, [payload])
            schedule = ClassScheduleRepository.create_schedule(
                db,
                {
                    **payload.model_dump(),
                    "semester_registration_id": section.semester_registration_id,
                },
            )
            result = ClassScheduleResponse.model_validate(schedule)
        logger.info("schedule.created section=%s room=%s", result.offered_course_section_id, result.room_id)
        return result


class OfferedCourseSectionService:

    @staticmethod
    def create_section(payload: OfferedCourseSectionCreate) -> OfferedCourseSectionResponse:
        with transaction() as db:
            offered = OfferedCourseRepository.get_offered_course(db, payload.offered_course_id)
            if not offered:
                raise NotFoundError("Offered course not found")
            if OfferedCourseSectionRepository.get_section_by_title(db, offered.id, payload.title):
                raise ConflictError("Course section already exists", details={"title": payload.title})

            registration_id = offered.semester_registration_id
            ClassScheduleService.check_availability(db, registration_id, payload.class_schedules)

            section = OfferedCourseSectionRepository.create_section(
                db,
                {
                    "title": payload.title,
                    "max_capacity": payload.max_capacity,
                    "offered_course_id": offered.id,
                    "semester_registration_id": registration_id,
                },
            )
            for item in payload.class_schedules:
                ClassScheduleRepository.create_schedule(
                    db,
                    {
                        **item.model_dump(),
                        "offered_course_section_id": section.id,
                        "semester_registration_id": registration_id,
                    },
                )
            db.expire(section)
            result = OfferedCourseSectionResponse.model_validate(section)
        logger.info(
            "section.created offered_course=%s title=%s schedules=%d",
            payload.offered_course_id,
            result.title,
            len(result.class_schedules),
        )
        return result

    @staticmethod
    def get_section(section_id: UUID) -> OfferedCourseSectionResponse:
        with transaction() as db:
            section = OfferedCourseSectionRepository.get_section(db, section_id)
            if not section:
                raise NotFoundError("Offered course section not found")
            return OfferedCourseSectionResponse.model_validate(section)
