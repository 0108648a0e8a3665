"""Mark entry, final course grades and cumulative academic info."""

from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from registrar.common.errors import BusinessRuleError, NotFoundError
from registrar.db.session import transaction
from registrar.features.people.models import Student
from registrar.features.people.repository import StudentRepository
from .grading import CourseOutcome, calculate_final_result, calculate_grade, weighted_total
from .models import ExamType, StudentEnrolledCourse, StudentEnrolledCourseStatus
from .repository import AcademicInfoRepository, EnrolledCourseMarkRepository, EnrolledCourseRepository
from .schemas import (
    AcademicInfoResponse,
    EnrolledCourseResponse,
    FinalMarksResponse,
    MarkResponse,
    UpdateFinalMarksRequest,
    UpdateMarksRequest,
)

logger = logging.getLogger("enrolled_courses.service")


def _student_or_404(db: Session, student_id: str) -> Student:
    student = StudentRepository.get_by_student_id(db, student_id)
    if not student:
        raise NotFoundError("Student not found", details={"student_id": student_id})
    return student


class EnrolledCourseMarkService:

    @staticmethod
    def create_default_marks(db: Session, enrolled: StudentEnrolledCourse) -> int:
        """Runs inside the caller's transaction (semester rollover)."""
        return EnrolledCourseMarkRepository.create_default_marks(db, enrolled)

    @staticmethod
    def update_marks(payload: UpdateMarksRequest) -> MarkResponse:
        with transaction() as db:
            student = _student_or_404(db, payload.student_id)
            mark = EnrolledCourseMarkRepository.get_mark(
                db, student.id, payload.academic_semester_id, payload.course_id, payload.exam_type
            )
            if not mark:
                raise NotFoundError("Student enrolled course mark not found")
            mark.marks = payload.marks
            mark.grade = calculate_grade(payload.marks).grade
            db.flush()
            result = MarkResponse.model_validate(mark)
        logger.info(
            "marks.updated student=%s course=%s exam=%s grade=%s",
            payload.student_id,
            payload.course_id,
            payload.exam_type.value,
            result.grade,
        )
        return result

    @staticmethod
    def update_final_marks(payload: UpdateFinalMarksRequest) -> FinalMarksResponse:
        with transaction() as db:
            student = _student_or_404(db, payload.student_id)
            enrolled = EnrolledCourseRepository.get(db, student.id, payload.course_id, payload.academic_semester_id)
            if not enrolled:
                raise NotFoundError("Student enrolled course not found")

            midterm = EnrolledCourseMarkRepository.get_mark(
                db, student.id, payload.academic_semester_id, payload.course_id, ExamType.MIDTERM
            )
            final = EnrolledCourseMarkRepository.get_mark(
                db, student.id, payload.academic_semester_id, payload.course_id, ExamType.FINAL
            )
            if midterm is None or final is None or midterm.marks is None or final.marks is None:
                logger.warning("final_marks.incomplete student=%s course=%s", payload.student_id, payload.course_id)
                raise BusinessRuleError("Midterm and final marks must both be recorded first")

            total = weighted_total(midterm.marks, final.marks)
            graded = calculate_grade(total)
            enrolled.total_marks = round(total, 2)
            enrolled.grade = graded.grade
            enrolled.point = graded.point
            enrolled.status = StudentEnrolledCourseStatus.COMPLETED
            db.flush()

            completed = EnrolledCourseRepository.list_completed(db, student.id)
            outcome = calculate_final_result(
                CourseOutcome(point=row.point or 0.0, credits=row.course.credits) for row in completed
            )
            info = AcademicInfoRepository.upsert(db, student.id, outcome.cgpa, outcome.total_completed_credit)
            result = FinalMarksResponse(
                enrolled_course=EnrolledCourseResponse.model_validate(enrolled),
                academic_info=AcademicInfoResponse.model_validate(info),
            )
        logger.info(
            "final_marks.posted student=%s course=%s grade=%s cgpa=%.2f",
            payload.student_id,
            payload.course_id,
            result.enrolled_course.grade,
            result.academic_info.cgpa,
        )
        return result

    @staticmethod
    def list_marks(
        student_id: Optional[str] = None,
        academic_semester_id: Optional[UUID] = None,
        course_id: Optional[UUID] = None,
    ) -> List[MarkResponse]:
        with transaction() as db:
            rows = EnrolledCourseMarkRepository.list_marks(db, student_id, academic_semester_id, course_id)
            return [MarkResponse.model_validate(r) for r in rows]

    @staticmethod
    def get_academic_info(student_id: str) -> AcademicInfoResponse:
        with transaction() as db:
            student = _student_or_404(db, student_id)
            info = AcademicInfoRepository.get(db, student.id)
            if not info:
                return AcademicInfoResponse(student_id=student.id, cgpa=0.0, total_completed_credit=0)
            return AcademicInfoResponse.model_validate(info)
