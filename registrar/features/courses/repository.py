from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from registrar.features.people.models import Faculty
from .models import Course, CourseFaculty, CourseToPrerequisite


class CourseRepository:

    @staticmethod
    def get_course(db: Session, course_id: UUID) -> Optional[Course]:
        return db.get(Course, course_id)

    @staticmethod
    def get_course_by_code(db: Session, code: str) -> Optional[Course]:
        return db.execute(select(Course).where(Course.code == code)).scalars().first()

    @staticmethod
    def create_course(db: Session, data: dict) -> Course:
        course = Course(**data)
        db.add(course)
        db.flush()
        return course

    @staticmethod
    def delete_course(db: Session, course: Course) -> None:
        # Prerequisite edges on both sides go first via the relationship cascade.
        db.execute(delete(CourseFaculty).where(CourseFaculty.course_id == course.id))
        db.delete(course)
        db.flush()

    # Prerequisite edges
    @staticmethod
    def prerequisite_exists(db: Session, course_id: UUID, prerequisite_id: UUID) -> bool:
        return db.get(CourseToPrerequisite, (course_id, prerequisite_id)) is not None

    @staticmethod
    def add_prerequisite(db: Session, course_id: UUID, prerequisite_id: UUID) -> CourseToPrerequisite:
        edge = CourseToPrerequisite(course_id=course_id, prerequisite_id=prerequisite_id)
        db.add(edge)
        db.flush()
        return edge

    @staticmethod
    def remove_prerequisite(db: Session, course_id: UUID, prerequisite_id: UUID) -> None:
        db.execute(
            delete(CourseToPrerequisite).where(
                CourseToPrerequisite.course_id == course_id,
                CourseToPrerequisite.prerequisite_id == prerequisite_id,
            )
        )

    @staticmethod
    def list_prerequisite_ids(db: Session, course_ids: Sequence[UUID]) -> List[UUID]:
        if not course_ids:
            return []
        rows = db.execute(
            select(CourseToPrerequisite.prerequisite_id).where(CourseToPrerequisite.course_id.in_(list(course_ids)))
        )
        return list(rows.scalars().all())

    # Teaching staff
    @staticmethod
    def get_faculties(db: Session, faculty_ids: Sequence[UUID]) -> List[Faculty]:
        return list(db.execute(select(Faculty).where(Faculty.id.in_(list(faculty_ids)))).scalars().all())

    @staticmethod
    def assign_faculty(db: Session, course_id: UUID, faculty_id: UUID) -> None:
        if db.get(CourseFaculty, (course_id, faculty_id)) is None:
            db.add(CourseFaculty(course_id=course_id, faculty_id=faculty_id))
            db.flush()

    @staticmethod
    def remove_faculties(db: Session, course_id: UUID, faculty_ids: Sequence[UUID]) -> None:
        db.execute(
            delete(CourseFaculty).where(
                CourseFaculty.course_id == course_id,
                CourseFaculty.faculty_id.in_(list(faculty_ids)),
            )
        )

    @staticmethod
    def list_course_faculties(db: Session, course_id: UUID) -> List[Faculty]:
        rows = db.execute(
            select(Faculty)
            .join(CourseFaculty, CourseFaculty.faculty_id == Faculty.id)
            .where(CourseFaculty.course_id == course_id)
            .order_by(Faculty.faculty_id)
        )
        return list(rows.scalars().all())
