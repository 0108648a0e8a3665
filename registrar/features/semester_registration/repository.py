from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from registrar.features.academics.models import AcademicSemester
from registrar.features.offered_courses.models import OfferedCourseSection
from .models import (
    ACTIVE_STATUSES,
    SemesterRegistration,
    SemesterRegistrationStatus,
    StudentSemesterRegistration,
    StudentSemesterRegistrationCourse,
)


class SemesterRegistrationRepository:

    @staticmethod
    def get_registration(db: Session, registration_id: UUID) -> Optional[SemesterRegistration]:
        return db.get(SemesterRegistration, registration_id)

    @staticmethod
    def get_active_registration(db: Session) -> Optional[SemesterRegistration]:
        """The single registration that is UPCOMING or ONGOING, if any."""
        return db.execute(
            select(SemesterRegistration).where(SemesterRegistration.status.in_(ACTIVE_STATUSES))
        ).scalars().first()

    @staticmethod
    def get_by_status(db: Session, status: SemesterRegistrationStatus) -> Optional[SemesterRegistration]:
        return db.execute(
            select(SemesterRegistration).where(SemesterRegistration.status == status)
        ).scalars().first()

    @staticmethod
    def list_registrations(db: Session) -> List[SemesterRegistration]:
        rows = db.execute(select(SemesterRegistration).order_by(SemesterRegistration.start_date))
        return list(rows.scalars().all())

    @staticmethod
    def create_registration(db: Session, data: dict) -> SemesterRegistration:
        registration = SemesterRegistration(**data)
        db.add(registration)
        db.flush()
        return registration

    @staticmethod
    def delete_registration(db: Session, registration: SemesterRegistration) -> None:
        db.delete(registration)
        db.flush()

    @staticmethod
    def get_academic_semester(db: Session, semester_id: UUID) -> Optional[AcademicSemester]:
        return db.get(AcademicSemester, semester_id)

    @staticmethod
    def set_current_semester(db: Session, semester_id: UUID) -> None:
        # Clear first so the partial unique index never sees two current rows.
        db.execute(
            update(AcademicSemester)
            .where(AcademicSemester.is_current.is_(True))
            .values(is_current=False)
        )
        db.execute(
            update(AcademicSemester)
            .where(AcademicSemester.id == semester_id)
            .values(is_current=True)
        )


class StudentSemesterRegistrationRepository:

    @staticmethod
    def get(db: Session, student_pk: UUID, registration_id: UUID) -> Optional[StudentSemesterRegistration]:
        return db.execute(
            select(StudentSemesterRegistration).where(
                StudentSemesterRegistration.student_id == student_pk,
                StudentSemesterRegistration.semester_registration_id == registration_id,
            )
        ).scalars().first()

    @staticmethod
    def create(db: Session, student_pk: UUID, registration_id: UUID) -> StudentSemesterRegistration:
        row = StudentSemesterRegistration(student_id=student_pk, semester_registration_id=registration_id)
        db.add(row)
        db.flush()
        return row

    @staticmethod
    def count_for_registration(db: Session, registration_id: UUID) -> int:
        return db.execute(
            select(func.count())
            .select_from(StudentSemesterRegistration)
            .where(StudentSemesterRegistration.semester_registration_id == registration_id)
        ).scalar_one()

    @staticmethod
    def list_confirmed(db: Session, registration_id: UUID) -> List[StudentSemesterRegistration]:
        rows = db.execute(
            select(StudentSemesterRegistration).where(
                StudentSemesterRegistration.semester_registration_id == registration_id,
                StudentSemesterRegistration.is_confirmed.is_(True),
            )
        )
        return list(rows.scalars().all())

    @staticmethod
    def add_credits(db: Session, row_id: UUID, credits: int) -> None:
        db.execute(
            update(StudentSemesterRegistration)
            .where(StudentSemesterRegistration.id == row_id)
            .values(total_credits_taken=StudentSemesterRegistration.total_credits_taken + credits)
        )


class RegistrationCourseRepository:

    @staticmethod
    def get(
        db: Session, registration_id: UUID, student_pk: UUID, offered_course_id: UUID
    ) -> Optional[StudentSemesterRegistrationCourse]:
        return db.get(StudentSemesterRegistrationCourse, (registration_id, student_pk, offered_course_id))

    @staticmethod
    def create(db: Session, data: dict) -> StudentSemesterRegistrationCourse:
        row = StudentSemesterRegistrationCourse(**data)
        db.add(row)
        db.flush()
        return row

    @staticmethod
    def delete(db: Session, row: StudentSemesterRegistrationCourse) -> None:
        db.delete(row)
        db.flush()

    @staticmethod
    def list_for_student(db: Session, registration_id: UUID, student_pk: UUID) -> List[StudentSemesterRegistrationCourse]:
        rows = db.execute(
            select(StudentSemesterRegistrationCourse).where(
                StudentSemesterRegistrationCourse.semester_registration_id == registration_id,
                StudentSemesterRegistrationCourse.student_id == student_pk,
            )
        )
        return list(rows.scalars().all())


class SectionCounterRepository:

    @staticmethod
    def try_increment(db: Session, section_id: UUID) -> bool:
        """Take one seat in the section; False when it is already full."""
        result = db.execute(
            update(OfferedCourseSection)
            .where(
                OfferedCourseSection.id == section_id,
                OfferedCourseSection.currently_enrolled_student < OfferedCourseSection.max_capacity,
            )
            .values(currently_enrolled_student=OfferedCourseSection.currently_enrolled_student + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def decrement(db: Session, section_id: UUID) -> None:
        db.execute(
            update(OfferedCourseSection)
            .where(
                OfferedCourseSection.id == section_id,
                OfferedCourseSection.currently_enrolled_student > 0,
            )
            .values(currently_enrolled_student=OfferedCourseSection.currently_enrolled_student - 1)
            .execution_options(synchronize_session=False)
        )
