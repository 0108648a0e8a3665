"""Semester registration lifecycle and the student enrollment workflow."""

from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from registrar.common.errors import BusinessRuleError, ConflictError, NotFoundError
from registrar.common.schemas import MessageResponse
from registrar.db.session import transaction
from registrar.features.courses.schemas import CourseSummary
from registrar.features.enrolled_courses.repository import EnrolledCourseRepository
from registrar.features.enrolled_courses.service import EnrolledCourseMarkService
from registrar.features.offered_courses.repository import OfferedCourseRepository, OfferedCourseSectionRepository
from registrar.features.payments.service import StudentSemesterPaymentService
from registrar.features.people.models import Student
from registrar.features.people.repository import StudentRepository
from .models import SemesterRegistration, SemesterRegistrationStatus
from .repository import (
    RegistrationCourseRepository,
    SectionCounterRepository,
    SemesterRegistrationRepository,
    StudentSemesterRegistrationRepository,
)
from .schemas import (
    EnrollableCourse,
    EnrollCoursePayload,
    MyRegistrationResponse,
    RegisteredCourse,
    SemesterRegistrationCreate,
    SemesterRegistrationResponse,
    SemesterRegistrationUpdate,
    StartRegistrationResponse,
    StudentSemesterRegistrationResponse,
)
from .utils import get_available_courses

logger = logging.getLogger("registration.service")

# Forward-only lifecycle; anything not listed here is an invalid transition.
NEXT_STATUS = {
    SemesterRegistrationStatus.UPCOMING: SemesterRegistrationStatus.ONGOING,
    SemesterRegistrationStatus.ONGOING: SemesterRegistrationStatus.ENDED,
}


def _student_or_404(db: Session, student_id: str) -> Student:
    student = StudentRepository.get_by_student_id(db, student_id)
    if not student:
        raise NotFoundError("Student not found", details={"student_id": student_id})
    return student


def _ongoing_or_404(db: Session) -> SemesterRegistration:
    registration = SemesterRegistrationRepository.get_by_status(db, SemesterRegistrationStatus.ONGOING)
    if not registration:
        raise NotFoundError("No semester registration going on")
    return registration


class SemesterRegistrationService:

    @staticmethod
    def create_registration(payload: SemesterRegistrationCreate) -> SemesterRegistrationResponse:
        with transaction() as db:
            if not SemesterRegistrationRepository.get_academic_semester(db, payload.academic_semester_id):
                raise NotFoundError("Academic semester not found")
            active = SemesterRegistrationRepository.get_active_registration(db)
            if active:
                raise ConflictError(
                    f"There is already an {active.status.value} registration",
                    details={"semester_registration_id": str(active.id)},
                )
            registration = SemesterRegistrationRepository.create_registration(
                db, {**payload.model_dump(), "status": SemesterRegistrationStatus.UPCOMING}
            )
            result = SemesterRegistrationResponse.model_validate(registration)
        logger.info("registration.created id=%s semester=%s", result.id, result.academic_semester_id)
        return result

    @staticmethod
    def list_registrations() -> List[SemesterRegistrationResponse]:
        with transaction() as db:
            return [
                SemesterRegistrationResponse.model_validate(r)
                for r in SemesterRegistrationRepository.list_registrations(db)
            ]

    @staticmethod
    def get_registration(registration_id: UUID) -> SemesterRegistrationResponse:
        with transaction() as db:
            registration = SemesterRegistrationRepository.get_registration(db, registration_id)
            if not registration:
                raise NotFoundError("Semester registration not found")
            return SemesterRegistrationResponse.model_validate(registration)

    @staticmethod
    def update_registration(registration_id: UUID, payload: SemesterRegistrationUpdate) -> SemesterRegistrationResponse:
        with transaction() as db:
            registration = SemesterRegistrationRepository.get_registration(db, registration_id)
            if not registration:
                raise NotFoundError("Semester registration not found")

            data = payload.model_dump(exclude_unset=True, exclude_none=True)
            new_status = data.pop("status", None)
            previous = registration.status
            if new_status is not None and NEXT_STATUS.get(previous) != new_status:
                logger.warning("registration.bad_transition id=%s from=%s to=%s", registration_id, previous.value, new_status.value)
                raise ConflictError(
                    f"Can not move from {previous.value} to {new_status.value}",
                    details={"from": previous.value, "to": new_status.value},
                )

            min_credit = data.get("min_credit", registration.min_credit)
            max_credit = data.get("max_credit", registration.max_credit)
            if min_credit > max_credit:
                raise BusinessRuleError("min_credit cannot exceed max_credit")
            if data.get("start_date", registration.start_date) > data.get("end_date", registration.end_date):
                raise BusinessRuleError("start_date cannot be after end_date")

            for key, value in data.items():
                setattr(registration, key, value)
            if new_status is not None:
                registration.status = new_status
            db.flush()
            result = SemesterRegistrationResponse.model_validate(registration)
        if new_status is not None:
            logger.info("registration.status id=%s from=%s to=%s", registration_id, previous.value, new_status.value)
        return result

    @staticmethod
    def delete_registration(registration_id: UUID) -> SemesterRegistrationResponse:
        with transaction() as db:
            registration = SemesterRegistrationRepository.get_registration(db, registration_id)
            if not registration:
                raise NotFoundError("Semester registration not found")
            if StudentSemesterRegistrationRepository.count_for_registration(db, registration_id):
                raise ConflictError("Students have already registered under this semester registration")
            result = SemesterRegistrationResponse.model_validate(registration)
            SemesterRegistrationRepository.delete_registration(db, registration)
        logger.info("registration.deleted id=%s", registration_id)
        return result

    # Student workflow
    @staticmethod
    def start_registration(student_id: str) -> StartRegistrationResponse:
        with transaction() as db:
            student = _student_or_404(db, student_id)
            registration = SemesterRegistrationRepository.get_active_registration(db)
            if not registration:
                raise NotFoundError("No semester registration is open")
            if registration.status == SemesterRegistrationStatus.UPCOMING:
                raise BusinessRuleError("Registration not started yet")

            student_reg = StudentSemesterRegistrationRepository.get(db, student.id, registration.id)
            if student_reg is None:
                student_reg = StudentSemesterRegistrationRepository.create(db, student.id, registration.id)
                logger.info("registration.started student=%s registration=%s", student_id, registration.id)
            return StartRegistrationResponse(
                semester_registration=SemesterRegistrationResponse.model_validate(registration),
                student_semester_registration=StudentSemesterRegistrationResponse.model_validate(student_reg),
            )

    @staticmethod
    def enroll_into_course(student_id: str, payload: EnrollCoursePayload) -> MessageResponse:
        with transaction() as db:
            registration = _ongoing_or_404(db)
            student = _student_or_404(db, student_id)
            offered = OfferedCourseRepository.get_offered_course(db, payload.offered_course_id)
            if not offered:
                raise NotFoundError("No offered course found")
            section = OfferedCourseSectionRepository.get_section(db, payload.offered_course_section_id)
            if not section:
                raise NotFoundError("No offered course section found")
            if offered.semester_registration_id != registration.id:
                raise BusinessRuleError("Offered course is not part of the ongoing registration")
            if section.offered_course_id != offered.id:
                raise BusinessRuleError("Section does not belong to the offered course")
            if RegistrationCourseRepository.get(db, registration.id, student.id, offered.id):
                raise ConflictError("Already enrolled in this course")

            student_reg = StudentSemesterRegistrationRepository.get(db, student.id, registration.id)
            if student_reg is None:
                student_reg = StudentSemesterRegistrationRepository.create(db, student.id, registration.id)
            if student_reg.is_confirmed:
                logger.warning("enroll.after_confirm student=%s", student_id)
                raise BusinessRuleError("Your registration is already confirmed")

            credits = offered.course.credits
            if student_reg.total_credits_taken + credits > registration.max_credit:
                logger.warning("enroll.credit_limit student=%s offered_course=%s", student_id, offered.id)
                raise BusinessRuleError(
                    f"You can take at most {registration.max_credit} credits",
                    details={"total_credits_taken": student_reg.total_credits_taken, "course_credits": credits},
                )
            if not SectionCounterRepository.try_increment(db, section.id):
                logger.warning("enroll.section_full student=%s section=%s", student_id, section.id)
                raise BusinessRuleError("This section is out of its capacity")

            RegistrationCourseRepository.create(
                db,
                {
                    "semester_registration_id": registration.id,
                    "student_id": student.id,
                    "offered_course_id": offered.id,
                    "offered_course_section_id": section.id,
                },
            )
            StudentSemesterRegistrationRepository.add_credits(db, student_reg.id, credits)
        logger.info("enroll.ok student=%s section=%s credits=%d", student_id, payload.offered_course_section_id, credits)
        return MessageResponse(message="Successfully enrolled into course")

    @staticmethod
    def withdraw_from_course(student_id: str, payload: EnrollCoursePayload) -> MessageResponse:
        with transaction() as db:
            registration = _ongoing_or_404(db)
            student = _student_or_404(db, student_id)
            offered = OfferedCourseRepository.get_offered_course(db, payload.offered_course_id)
            if not offered:
                raise NotFoundError("No offered course found")

            row = RegistrationCourseRepository.get(db, registration.id, student.id, offered.id)
            if not row or row.offered_course_section_id != payload.offered_course_section_id:
                raise NotFoundError("You are not enrolled in this course section")
            student_reg = StudentSemesterRegistrationRepository.get(db, student.id, registration.id)
            if student_reg.is_confirmed:
                logger.warning("withdraw.after_confirm student=%s", student_id)
                raise BusinessRuleError("Your registration is already confirmed")

            credits = offered.course.credits
            RegistrationCourseRepository.delete(db, row)
            SectionCounterRepository.decrement(db, payload.offered_course_section_id)
            StudentSemesterRegistrationRepository.add_credits(db, student_reg.id, -credits)
        logger.info("withdraw.ok student=%s section=%s credits=%d", student_id, payload.offered_course_section_id, credits)
        return MessageResponse(message="Successfully withdrew from course")

    @staticmethod
    def confirm_registration(student_id: str) -> MessageResponse:
        with transaction() as db:
            registration = _ongoing_or_404(db)
            student = _student_or_404(db, student_id)
            student_reg = StudentSemesterRegistrationRepository.get(db, student.id, registration.id)
            if not student_reg or student_reg.total_credits_taken == 0:
                raise BusinessRuleError("You are not enrolled in any course")
            if student_reg.is_confirmed:
                return MessageResponse(message="Your registration is already confirmed")

            total = student_reg.total_credits_taken
            if total < registration.min_credit or total > registration.max_credit:
                logger.warning("confirm.out_of_range student=%s credits=%d", student_id, total)
                raise BusinessRuleError(
                    f"You can take between {registration.min_credit} to {registration.max_credit} credits",
                    details={"total_credits_taken": total},
                )
            student_reg.is_confirmed = True
        logger.info("confirm.ok student=%s credits=%d", student_id, total)
        return MessageResponse(message="Your registration is confirmed")

    @staticmethod
    def get_my_registration(student_id: str) -> MyRegistrationResponse:
        with transaction() as db:
            registration = SemesterRegistrationRepository.get_active_registration(db)
            if not registration:
                raise NotFoundError("No semester registration is open")
            student = _student_or_404(db, student_id)
            student_reg = StudentSemesterRegistrationRepository.get(db, student.id, registration.id)
            courses = [
                RegisteredCourse(
                    offered_course_id=row.offered_course_id,
                    offered_course_section_id=row.offered_course_section_id,
                    section_title=row.offered_course_section.title,
                    course=CourseSummary.model_validate(row.offered_course.course),
                )
                for row in RegistrationCourseRepository.list_for_student(db, registration.id, student.id)
            ]
            return MyRegistrationResponse(
                semester_registration=SemesterRegistrationResponse.model_validate(registration),
                student_semester_registration=(
                    StudentSemesterRegistrationResponse.model_validate(student_reg) if student_reg else None
                ),
                courses=courses,
            )

    @staticmethod
    def start_new_semester(registration_id: UUID) -> MessageResponse:
        """Roll confirmed enrollments into academic records and make the semester current.

        Every row is created only if absent, so a rerun never duplicates records.
        """
        with transaction() as db:
            registration = SemesterRegistrationRepository.get_registration(db, registration_id)
            if not registration:
                raise NotFoundError("Semester registration not found")
            semester = registration.academic_semester
            if semester.is_current:
                raise BusinessRuleError("This academic semester is already running")
            if registration.status != SemesterRegistrationStatus.ENDED:
                raise BusinessRuleError("This semester registration has not ended yet")

            SemesterRegistrationRepository.set_current_semester(db, semester.id)

            enrolled_created = marks_created = payments_created = 0
            confirmed = StudentSemesterRegistrationRepository.list_confirmed(db, registration.id)
            for student_reg in confirmed:
                payment = StudentSemesterPaymentService.create_semester_payment(
                    db, student_reg.student_id, semester.id, student_reg.total_credits_taken
                )
                payments_created += payment is not None

                for row in RegistrationCourseRepository.list_for_student(db, registration.id, student_reg.student_id):
                    course_id = row.offered_course.course_id
                    enrolled = EnrolledCourseRepository.get(db, student_reg.student_id, course_id, semester.id)
                    if enrolled is None:
                        enrolled = EnrolledCourseRepository.create(db, student_reg.student_id, course_id, semester.id)
                        enrolled_created += 1
                    marks_created += EnrolledCourseMarkService.create_default_marks(db, enrolled)
        logger.info(
            "semester.started registration=%s students=%d enrolled=%d marks=%d payments=%d",
            registration_id,
            len(confirmed),
            enrolled_created,
            marks_created,
            payments_created,
        )
        return MessageResponse(message="New semester started successfully")

    @staticmethod
    def get_enrollable_courses(student_id: str) -> List[EnrollableCourse]:
        with transaction() as db:
            student = _student_or_404(db, student_id)
            registration = SemesterRegistrationRepository.get_active_registration(db)
            if not registration:
                raise NotFoundError("No ongoing or upcoming semester registration found")

            completed = EnrolledCourseRepository.completed_course_ids(db, student.id)
            enrolled_sections = {
                row.offered_course_id: row.offered_course_section_id
                for row in RegistrationCourseRepository.list_for_student(db, registration.id, student.id)
            }
            offered = OfferedCourseRepository.list_for_department(db, student.academic_department_id, registration.id)
            return get_available_courses(offered, completed, enrolled_sections)
