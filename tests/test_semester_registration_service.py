import uuid
from datetime import date

import pytest

from registrar.common.errors import BusinessRuleError, ConflictError, NotFoundError
from registrar.db.session import transaction
from registrar.features.academics.models import AcademicSemester
from registrar.features.enrolled_courses.models import StudentEnrolledCourse, StudentEnrolledCourseMark
from registrar.features.offered_courses.models import OfferedCourseSection
from registrar.features.payments.models import PaymentStatus, StudentSemesterPayment
from registrar.features.semester_registration.models import (
    SemesterRegistrationStatus as Status,
    StudentSemesterRegistration,
    StudentSemesterRegistrationCourse,
)
from registrar.features.semester_registration.schemas import (
    EnrollCoursePayload,
    SemesterRegistrationCreate,
    SemesterRegistrationUpdate,
)
from registrar.features.semester_registration.service import SemesterRegistrationService as svc


def _create_payload(semester_id, min_credit=3, max_credit=12):
    return SemesterRegistrationCreate(
        start_date=date(2026, 4, 1),
        end_date=date(2026, 4, 30),
        academic_semester_id=semester_id,
        min_credit=min_credit,
        max_credit=max_credit,
    )


def _count(model, **filters):
    with transaction() as db:
        return db.query(model).filter_by(**filters).count()


def _student_registration(student):
    with transaction() as db:
        return db.query(StudentSemesterRegistration).filter_by(student_id=student.id).one()


def _section(section):
    with transaction() as db:
        return db.get(OfferedCourseSection, section.id)


# --- registration lifecycle -------------------------------------------------

def test_create_registration_starts_upcoming(factory):
    result = svc.create_registration(_create_payload(factory.next_semester.id))
    assert result.status == Status.UPCOMING


def test_create_registration_unknown_semester(factory):
    with pytest.raises(NotFoundError):
        svc.create_registration(_create_payload(uuid.uuid4()))


@pytest.mark.parametrize("active", [Status.UPCOMING, Status.ONGOING])
def test_create_refused_while_another_is_active(factory, active):
    factory.registration(status=active)
    with pytest.raises(ConflictError):
        svc.create_registration(_create_payload(factory.next_semester.id))


def test_create_allowed_once_previous_ended(factory):
    factory.registration(status=Status.ENDED)
    result = svc.create_registration(_create_payload(factory.next_semester.id))
    assert result.status == Status.UPCOMING


def test_min_credit_above_max_is_a_validation_error(factory):
    with pytest.raises(ValueError):
        _create_payload(factory.next_semester.id, min_credit=10, max_credit=5)


@pytest.mark.parametrize("start,target", [(Status.UPCOMING, Status.ONGOING), (Status.ONGOING, Status.ENDED)])
def test_forward_transitions_succeed(factory, start, target):
    registration = factory.registration(status=start)
    result = svc.update_registration(registration.id, SemesterRegistrationUpdate(status=target))
    assert result.status == target


@pytest.mark.parametrize(
    "start,target",
    [
        (Status.UPCOMING, Status.ENDED),
        (Status.UPCOMING, Status.UPCOMING),
        (Status.ONGOING, Status.UPCOMING),
        (Status.ONGOING, Status.ONGOING),
        (Status.ENDED, Status.ONGOING),
        (Status.ENDED, Status.UPCOMING),
    ],
)
def test_other_transitions_fail(factory, start, target):
    registration = factory.registration(status=start)
    with pytest.raises(ConflictError):
        svc.update_registration(registration.id, SemesterRegistrationUpdate(status=target))
    assert svc.get_registration(registration.id).status == start


def test_update_rejects_inverted_credit_window(factory):
    registration = factory.registration(min_credit=3, max_credit=12)
    with pytest.raises(BusinessRuleError):
        svc.update_registration(registration.id, SemesterRegistrationUpdate(min_credit=20))


def test_delete_refused_once_students_registered(factory):
    registration = factory.registration()
    student = factory.student()
    svc.start_registration(student.student_id)
    with pytest.raises(ConflictError):
        svc.delete_registration(registration.id)


def test_delete_unused_registration(factory):
    registration = factory.registration(status=Status.UPCOMING)
    svc.delete_registration(registration.id)
    with pytest.raises(NotFoundError):
        svc.get_registration(registration.id)


def test_list_registrations(factory):
    factory.registration(status=Status.ENDED)
    factory.registration(status=Status.ONGOING)
    assert len(svc.list_registrations()) == 2


# --- student workflow -------------------------------------------------------

def test_start_registration_is_idempotent(factory):
    factory.registration()
    student = factory.student()
    first = svc.start_registration(student.student_id)
    second = svc.start_registration(student.student_id)
    assert first.student_semester_registration.id == second.student_semester_registration.id
    assert _count(StudentSemesterRegistration) == 1


def test_start_registration_before_it_opens(factory):
    factory.registration(status=Status.UPCOMING)
    student = factory.student()
    with pytest.raises(BusinessRuleError):
        svc.start_registration(student.student_id)


def test_start_registration_without_any_registration(factory):
    student = factory.student()
    with pytest.raises(NotFoundError):
        svc.start_registration(student.student_id)


def test_enroll_then_withdraw_restores_counters(factory):
    registration = factory.registration()
    student = factory.student()
    offered = factory.offered(factory.course(credits=3), registration)
    section = factory.section(offered, max_capacity=5)
    svc.start_registration(student.student_id)
    payload = EnrollCoursePayload(offered_course_id=offered.id, offered_course_section_id=section.id)

    svc.enroll_into_course(student.student_id, payload)
    assert _student_registration(student).total_credits_taken == 3
    assert _section(section).currently_enrolled_student == 1
    assert _count(StudentSemesterRegistrationCourse) == 1

    svc.withdraw_from_course(student.student_id, payload)
    assert _student_registration(student).total_credits_taken == 0
    assert _section(section).currently_enrolled_student == 0
    assert _count(StudentSemesterRegistrationCourse) == 0


def test_enroll_creates_student_registration_on_the_fly(factory):
    registration = factory.registration()
    student = factory.student()
    offered = factory.offered(factory.course(), registration)
    section = factory.section(offered)
    svc.enroll_into_course(
        student.student_id, EnrollCoursePayload(offered_course_id=offered.id, offered_course_section_id=section.id)
    )
    assert _student_registration(student).total_credits_taken == 3


def test_capacity_rejects_the_extra_student(factory):
    registration = factory.registration()
    offered = factory.offered(factory.course(), registration)
    section = factory.section(offered, max_capacity=2)
    students = [factory.student() for _ in range(3)]
    payload = EnrollCoursePayload(offered_course_id=offered.id, offered_course_section_id=section.id)

    for student in students[:2]:
        svc.enroll_into_course(student.student_id, payload)
    with pytest.raises(BusinessRuleError):
        svc.enroll_into_course(students[2].student_id, payload)

    assert _section(section).currently_enrolled_student == 2
    assert _count(StudentSemesterRegistrationCourse) == 2
    # The rejected enrollment left nothing behind, not even its registration row.
    assert _count(StudentSemesterRegistration, student_id=students[2].id) == 0


def test_enroll_twice_into_same_course(factory):
    registration = factory.registration()
    student = factory.student()
    offered = factory.offered(factory.course(), registration)
    section = factory.section(offered)
    payload = EnrollCoursePayload(offered_course_id=offered.id, offered_course_section_id=section.id)
    svc.enroll_into_course(student.student_id, payload)
    with pytest.raises(ConflictError):
        svc.enroll_into_course(student.student_id, payload)
    assert _section(section).currently_enrolled_student == 1


def test_enroll_section_of_another_course(factory):
    registration = factory.registration()
    student = factory.student()
    offered = factory.offered(factory.course(), registration)
    other = factory.offered(factory.course(), registration)
    foreign_section = factory.section(other)
    with pytest.raises(BusinessRuleError):
        svc.enroll_into_course(
            student.student_id,
            EnrollCoursePayload(offered_course_id=offered.id, offered_course_section_id=foreign_section.id),
        )


def test_enroll_beyond_max_credit(factory):
    registration = factory.registration(min_credit=3, max_credit=4)
    student = factory.student()
    first = factory.offered(factory.course(credits=3), registration)
    second = factory.offered(factory.course(credits=3), registration)
    svc.enroll_into_course(
        student.student_id,
        EnrollCoursePayload(offered_course_id=first.id, offered_course_section_id=factory.section(first).id),
    )
    with pytest.raises(BusinessRuleError):
        svc.enroll_into_course(
            student.student_id,
            EnrollCoursePayload(offered_course_id=second.id, offered_course_section_id=factory.section(second).id),
        )
    assert _student_registration(student).total_credits_taken == 3


def test_enroll_requires_ongoing_registration(factory):
    registration = factory.registration(status=Status.UPCOMING)
    student = factory.student()
    offered = factory.offered(factory.course(), registration)
    section = factory.section(offered)
    with pytest.raises(NotFoundError):
        svc.enroll_into_course(
            student.student_id, EnrollCoursePayload(offered_course_id=offered.id, offered_course_section_id=section.id)
        )


def test_withdraw_without_enrollment(factory):
    registration = factory.registration()
    student = factory.student()
    offered = factory.offered(factory.course(), registration)
    section = factory.section(offered)
    with pytest.raises(NotFoundError):
        svc.withdraw_from_course(
            student.student_id, EnrollCoursePayload(offered_course_id=offered.id, offered_course_section_id=section.id)
        )


def _enroll(factory, registration, student, credits):
    offered = factory.offered(factory.course(credits=credits), registration)
    section = factory.section(offered)
    svc.enroll_into_course(
        student.student_id, EnrollCoursePayload(offered_course_id=offered.id, offered_course_section_id=section.id)
    )
    return offered, section


def test_confirm_below_min_credit(factory):
    registration = factory.registration(min_credit=6, max_credit=12)
    student = factory.student()
    _enroll(factory, registration, student, credits=3)
    with pytest.raises(BusinessRuleError):
        svc.confirm_registration(student.student_id)
    assert not _student_registration(student).is_confirmed


def test_confirm_above_max_credit(factory):
    registration = factory.registration(min_credit=3, max_credit=12)
    student = factory.student()
    _enroll(factory, registration, student, credits=3)
    _enroll(factory, registration, student, credits=3)
    svc.update_registration(registration.id, SemesterRegistrationUpdate(max_credit=3))

    with pytest.raises(BusinessRuleError):
        svc.confirm_registration(student.student_id)
    row = _student_registration(student)
    assert row.total_credits_taken == 6
    assert not row.is_confirmed


def test_confirm_without_courses(factory):
    factory.registration()
    student = factory.student()
    svc.start_registration(student.student_id)
    with pytest.raises(BusinessRuleError):
        svc.confirm_registration(student.student_id)


def test_confirm_within_range_is_idempotent(factory):
    registration = factory.registration(min_credit=3, max_credit=12)
    student = factory.student()
    _enroll(factory, registration, student, credits=3)

    assert svc.confirm_registration(student.student_id).message == "Your registration is confirmed"
    assert svc.confirm_registration(student.student_id).message == "Your registration is already confirmed"
    row = _student_registration(student)
    assert row.is_confirmed


def test_confirmed_registration_is_frozen(factory):
    registration = factory.registration(min_credit=3, max_credit=12)
    student = factory.student()
    offered, section = _enroll(factory, registration, student, credits=3)
    svc.confirm_registration(student.student_id)

    with pytest.raises(BusinessRuleError):
        svc.withdraw_from_course(
            student.student_id, EnrollCoursePayload(offered_course_id=offered.id, offered_course_section_id=section.id)
        )
    with pytest.raises(BusinessRuleError):
        _enroll(factory, registration, student, credits=2)

    row = _student_registration(student)
    assert row.is_confirmed
    assert row.total_credits_taken == 3
    assert _section(section).currently_enrolled_student == 1
    assert row.total_credits_taken == 3


def test_get_my_registration_lists_courses(factory):
    registration = factory.registration()
    student = factory.student()
    offered, section = _enroll(factory, registration, student, credits=3)
    mine = svc.get_my_registration(student.student_id)
    assert mine.semester_registration.id == registration.id
    assert mine.student_semester_registration.total_credits_taken == 3
    assert [(c.offered_course_id, c.offered_course_section_id) for c in mine.courses] == [(offered.id, section.id)]


# --- rollover ---------------------------------------------------------------

def _ready_for_rollover(factory):
    registration = factory.registration(min_credit=3, max_credit=12)
    confirmed = factory.student()
    pending = factory.student()
    _enroll(factory, registration, confirmed, credits=3)
    _enroll(factory, registration, confirmed, credits=2)
    _enroll(factory, registration, pending, credits=3)
    svc.confirm_registration(confirmed.student_id)
    svc.update_registration(registration.id, SemesterRegistrationUpdate(status=Status.ENDED))
    return registration, confirmed, pending


def test_start_new_semester_fans_out_records(factory):
    registration, confirmed, pending = _ready_for_rollover(factory)

    svc.start_new_semester(registration.id)

    assert _count(StudentEnrolledCourse, student_id=confirmed.id) == 2
    assert _count(StudentEnrolledCourse, student_id=pending.id) == 0
    assert _count(StudentEnrolledCourseMark, student_id=confirmed.id) == 4
    with transaction() as db:
        payment = db.query(StudentSemesterPayment).filter_by(student_id=confirmed.id).one()
        assert payment.full_payment_amount == 5 * 5000
        assert payment.partial_payment_amount == 5 * 5000 * 0.5
        assert payment.total_due_amount == 5 * 5000
        assert payment.total_paid_amount == 0
        assert payment.payment_status == PaymentStatus.PENDING
        current = db.query(AcademicSemester).filter_by(is_current=True).all()
        assert [s.id for s in current] == [factory.next_semester.id]


def test_start_new_semester_twice_does_not_duplicate(factory):
    registration, confirmed, _ = _ready_for_rollover(factory)
    svc.start_new_semester(registration.id)

    with pytest.raises(BusinessRuleError):
        svc.start_new_semester(registration.id)

    assert _count(StudentEnrolledCourse) == 2
    assert _count(StudentEnrolledCourseMark) == 4
    assert _count(StudentSemesterPayment) == 1


def test_start_new_semester_requires_ended_registration(factory):
    registration = factory.registration(status=Status.ONGOING)
    with pytest.raises(BusinessRuleError):
        svc.start_new_semester(registration.id)
    with transaction() as db:
        assert db.get(AcademicSemester, factory.current_semester.id).is_current


def test_start_new_semester_for_current_semester(factory):
    registration = factory.registration(status=Status.ENDED, semester=factory.current_semester)
    with pytest.raises(BusinessRuleError):
        svc.start_new_semester(registration.id)


# --- enrollable courses -----------------------------------------------------

def test_enrollable_courses_annotates_prerequisites_and_enrollment(factory):
    registration = factory.registration()
    student = factory.student()
    intro = factory.course()
    advanced = factory.course(prerequisites=[intro])
    intro_offered = factory.offered(intro, registration)
    factory.offered(advanced, registration)
    intro_section = factory.section(intro_offered)
    svc.enroll_into_course(
        student.student_id,
        EnrollCoursePayload(offered_course_id=intro_offered.id, offered_course_section_id=intro_section.id),
    )

    courses = {c.course.code: c for c in svc.get_enrollable_courses(student.student_id)}

    assert courses[intro.code].is_taken
    assert courses[intro.code].sections[0].is_taken
    assert not courses[advanced.code].prerequisites_satisfied
    assert not courses[advanced.code].is_enrollable
