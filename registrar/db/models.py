# Import all models here so Alembic and metadata.create_all can discover them
from registrar.db.base import Base

from registrar.features.academics.models import AcademicFaculty, AcademicDepartment, AcademicSemester
from registrar.features.people.models import Student, Faculty
from registrar.features.facilities.models import Building, Room
from registrar.features.courses.models import Course, CourseToPrerequisite, CourseFaculty
from registrar.features.semester_registration.models import (
    SemesterRegistration,
    StudentSemesterRegistration,
    StudentSemesterRegistrationCourse,
)
from registrar.features.offered_courses.models import (
    OfferedCourse,
    OfferedCourseSection,
    OfferedCourseClassSchedule,
)
from registrar.features.enrolled_courses.models import (
    StudentEnrolledCourse,
    StudentEnrolledCourseMark,
    StudentAcademicInfo,
)
from registrar.features.payments.models import StudentSemesterPayment

__all__ = [
    "Base",
    "AcademicFaculty",
    "AcademicDepartment",
    "AcademicSemester",
    "Student",
    "Faculty",
    "Building",
    "Room",
    "Course",
    "CourseToPrerequisite",
    "CourseFaculty",
    "SemesterRegistration",
    "StudentSemesterRegistration",
    "StudentSemesterRegistrationCourse",
    "OfferedCourse",
    "OfferedCourseSection",
    "OfferedCourseClassSchedule",
    "StudentEnrolledCourse",
    "StudentEnrolledCourseMark",
    "StudentAcademicInfo",
    "StudentSemesterPayment",
]
