from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from registrar.features.people.models import Student
from .models import (
    ExamType,
    StudentAcademicInfo,
    StudentEnrolledCourse,
    StudentEnrolledCourseMark,
    StudentEnrolledCourseStatus,
)


class EnrolledCourseRepository:

    @staticmethod
    def get(db: Session, student_pk: UUID, course_id: UUID, semester_id: UUID) -> Optional[StudentEnrolledCourse]:
        return db.execute(
            select(StudentEnrolledCourse).where(
                StudentEnrolledCourse.student_id == student_pk,
                StudentEnrolledCourse.course_id == course_id,
                StudentEnrolledCourse.academic_semester_id == semester_id,
            )
        ).scalars().first()

    @staticmethod
    def create(db: Session, student_pk: UUID, course_id: UUID, semester_id: UUID) -> StudentEnrolledCourse:
        row = StudentEnrolledCourse(student_id=student_pk, course_id=course_id, academic_semester_id=semester_id)
        db.add(row)
        db.flush()
        return row

    @staticmethod
    def list_completed(db: Session, student_pk: UUID) -> List[StudentEnrolledCourse]:
        rows = db.execute(
            select(StudentEnrolledCourse).where(
                StudentEnrolledCourse.student_id == student_pk,
                StudentEnrolledCourse.status == StudentEnrolledCourseStatus.COMPLETED,
            )
        )
        return list(rows.scalars().all())

    @staticmethod
    def completed_course_ids(db: Session, student_pk: UUID) -> set[UUID]:
        rows = db.execute(
            select(StudentEnrolledCourse.course_id).where(
                StudentEnrolledCourse.student_id == student_pk,
                StudentEnrolledCourse.status == StudentEnrolledCourseStatus.COMPLETED,
            )
        )
        return set(rows.scalars().all())


class EnrolledCourseMarkRepository:

    @staticmethod
    def create_default_marks(db: Session, enrolled: StudentEnrolledCourse) -> int:
        """Seed one empty mark row per exam type; returns how many were added."""
        existing = set(
            db.execute(
                select(StudentEnrolledCourseMark.exam_type).where(
                    StudentEnrolledCourseMark.student_enrolled_course_id == enrolled.id
                )
            ).scalars().all()
        )
        added = 0
        for exam_type in ExamType:
            if exam_type in existing:
                continue
            db.add(
                StudentEnrolledCourseMark(
                    student_id=enrolled.student_id,
                    student_enrolled_course_id=enrolled.id,
                    academic_semester_id=enrolled.academic_semester_id,
                    exam_type=exam_type,
                )
            )
            added += 1
        db.flush()
        return added

    @staticmethod
    def get_mark(
        db: Session, student_pk: UUID, semester_id: UUID, course_id: UUID, exam_type: ExamType
    ) -> Optional[StudentEnrolledCourseMark]:
        return db.execute(
            select(StudentEnrolledCourseMark)
            .join(StudentEnrolledCourse, StudentEnrolledCourse.id == StudentEnrolledCourseMark.student_enrolled_course_id)
            .where(
                StudentEnrolledCourseMark.student_id == student_pk,
                StudentEnrolledCourseMark.academic_semester_id == semester_id,
                StudentEnrolledCourseMark.exam_type == exam_type,
                StudentEnrolledCourse.course_id == course_id,
            )
        ).scalars().first()

    @staticmethod
    def list_marks(
        db: Session,
        student_id: Optional[str] = None,
        semester_id: Optional[UUID] = None,
        course_id: Optional[UUID] = None,
    ) -> List[StudentEnrolledCourseMark]:
        stmt = (
            select(StudentEnrolledCourseMark)
            .join(StudentEnrolledCourse, StudentEnrolledCourse.id == StudentEnrolledCourseMark.student_enrolled_course_id)
            .join(Student, Student.id == StudentEnrolledCourseMark.student_id)
        )
        if student_id:
            stmt = stmt.where(Student.student_id == student_id)
        if semester_id:
            stmt = stmt.where(StudentEnrolledCourseMark.academic_semester_id == semester_id)
        if course_id:
            stmt = stmt.where(StudentEnrolledCourse.course_id == course_id)
        stmt = stmt.order_by(Student.student_id, StudentEnrolledCourseMark.exam_type)
        return list(db.execute(stmt).scalars().all())


class AcademicInfoRepository:

    @staticmethod
    def get(db: Session, student_pk: UUID) -> Optional[StudentAcademicInfo]:
        return db.execute(
            select(StudentAcademicInfo).where(StudentAcademicInfo.student_id == student_pk)
        ).scalars().first()

    @staticmethod
    def upsert(db: Session, student_pk: UUID, cgpa: float, total_completed_credit: int) -> StudentAcademicInfo:
        info = AcademicInfoRepository.get(db, student_pk)
        if info is None:
            info = StudentAcademicInfo(student_id=student_pk)
            db.add(info)
        info.cgpa = cgpa
        info.total_completed_credit = total_completed_credit
        db.flush()
        return info

