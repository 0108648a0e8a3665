"""Course catalog: courses and their prerequisite graph."""

from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from registrar.common.errors import ConflictError, NotFoundError
from registrar.db.session import transaction
from .models import Course
from .repository import CourseRepository
from .schemas import CourseCreate, CourseResponse, CourseSummary, CourseUpdate, FacultyIds, FacultySummary

logger = logging.getLogger("courses.service")


def _to_response(course: Course) -> CourseResponse:
    return CourseResponse(
        id=course.id,
        title=course.title,
        code=course.code,
        credits=course.credits,
        prerequisites=[CourseSummary.model_validate(edge.prerequisite) for edge in course.prerequisites],
        prerequisite_for=[CourseSummary.model_validate(edge.course) for edge in course.prerequisite_for],
    )


class CourseService:

    @staticmethod
    def _reaches(db: Session, start: UUID, target: UUID) -> bool:
        """True when ``target`` is reachable from ``start`` along prerequisite edges."""
        seen: set[UUID] = set()
        frontier = [start]
        while frontier:
            if target in frontier:
                return True
            seen.update(frontier)
            frontier = [c for c in CourseRepository.list_prerequisite_ids(db, frontier) if c not in seen]
        return False

    @staticmethod
    def _attach_prerequisite(db: Session, course_id: UUID, prerequisite_id: UUID) -> None:
        if prerequisite_id == course_id:
            raise ConflictError("A course cannot be its own prerequisite")
        if not CourseRepository.get_course(db, prerequisite_id):
            raise NotFoundError(f"Prerequisite course {prerequisite_id} not found")
        if CourseRepository.prerequisite_exists(db, course_id, prerequisite_id):
            return
        if CourseService._reaches(db, prerequisite_id, course_id):
            raise ConflictError(
                "Prerequisite would create a cycle",
                details={"course_id": str(course_id), "prerequisite_id": str(prerequisite_id)},
            )
        CourseRepository.add_prerequisite(db, course_id, prerequisite_id)

    @staticmethod
    def create_course(payload: CourseCreate) -> CourseResponse:
        with transaction() as db:
            if CourseRepository.get_course_by_code(db, payload.code):
                raise ConflictError(f"Course code {payload.code} already exists")
            course = CourseRepository.create_course(db, payload.model_dump(exclude={"prerequisite_courses"}))
            for item in payload.prerequisite_courses:
                if not item.is_deleted:
                    CourseService._attach_prerequisite(db, course.id, item.course_id)
            db.expire(course)
            result = _to_response(course)
        logger.info("course.created code=%s prerequisites=%d", result.code, len(result.prerequisites))
        return result

    @staticmethod
    def get_course(course_id: UUID) -> CourseResponse:
        with transaction() as db:
            course = CourseRepository.get_course(db, course_id)
            if not course:
                raise NotFoundError("Course not found")
            return _to_response(course)

    @staticmethod
    def update_course(course_id: UUID, payload: CourseUpdate) -> CourseResponse:
        with transaction() as db:
            course = CourseRepository.get_course(db, course_id)
            if not course:
                raise NotFoundError("Course not found")

            data = payload.model_dump(exclude_unset=True, exclude={"prerequisite_courses"})
            new_code = data.get("code")
            if new_code and new_code != course.code and CourseRepository.get_course_by_code(db, new_code):
                raise ConflictError(f"Course code {new_code} already exists")
            for key, value in data.items():
                setattr(course, key, value)
            db.flush()

            removed = [p for p in payload.prerequisite_courses if p.is_deleted]
            added = [p for p in payload.prerequisite_courses if not p.is_deleted]
            for item in removed:
                CourseRepository.remove_prerequisite(db, course_id, item.course_id)
            for item in added:
                CourseService._attach_prerequisite(db, course_id, item.course_id)

            db.expire(course)
            result = _to_response(course)
        logger.info("course.updated code=%s added=%d removed=%d", result.code, len(added), len(removed))
        return result

    @staticmethod
    def delete_course(course_id: UUID) -> CourseResponse:
        with transaction() as db:
            course = CourseRepository.get_course(db, course_id)
            if not course:
                raise NotFoundError("Course not found")
            result = _to_response(course)
            CourseRepository.delete_course(db, course)
        logger.info("course.deleted code=%s", result.code)
        return result

    @staticmethod
    def assign_faculties(course_id: UUID, payload: FacultyIds) -> List[FacultySummary]:
        with transaction() as db:
            if not CourseRepository.get_course(db, course_id):
                raise NotFoundError("Course not found")
            found = {f.id for f in CourseRepository.get_faculties(db, payload.faculties)}
            missing = [str(f) for f in payload.faculties if f not in found]
            if missing:
                raise NotFoundError("Faculty not found", details={"faculty_ids": missing})
            for faculty_id in payload.faculties:
                CourseRepository.assign_faculty(db, course_id, faculty_id)
            return [FacultySummary.model_validate(f) for f in CourseRepository.list_course_faculties(db, course_id)]

    @staticmethod
    def remove_faculties(course_id: UUID, payload: FacultyIds) -> List[FacultySummary]:
        with transaction() as db:
            if not CourseRepository.get_course(db, course_id):
                raise NotFoundError("Course not found")
            CourseRepository.remove_faculties(db, course_id, payload.faculties)
            return [FacultySummary.model_validate(f) for f in CourseRepository.list_course_faculties(db, course_id)]
