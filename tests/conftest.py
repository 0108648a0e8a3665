import os
import sys
import tempfile
from datetime import date, time
from itertools import count

import pytest

# Ensure repo root on sys.path for imports like `registrar...`
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

# Settings are read once at import, so the test database must be chosen first.
_DB_DIR = tempfile.mkdtemp(prefix="registrar-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["JWT_ALGORITHM"] = "HS256"

from registrar.db.base import Base  # noqa: E402
from registrar.db.session import engine, transaction  # noqa: E402
from registrar.features.academics.models import AcademicDepartment, AcademicFaculty, AcademicSemester  # noqa: E402
from registrar.features.courses.models import Course, CourseToPrerequisite  # noqa: E402
from registrar.features.facilities.models import Building, Room  # noqa: E402
from registrar.features.offered_courses.models import (  # noqa: E402
    OfferedCourse,
    OfferedCourseClassSchedule,
    OfferedCourseSection,
    WeekDay,
)
from registrar.features.people.models import Faculty, Student  # noqa: E402
from registrar.features.semester_registration.models import (  # noqa: E402
    SemesterRegistration,
    SemesterRegistrationStatus,
)


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield


class Factory:
    """Seeds rows directly through the ORM; every helper commits."""

    def __init__(self) -> None:
        self._seq = count(1)
        self.academic_faculty = self.add(AcademicFaculty(title="Faculty of Science"))
        self.department = self.add(
            AcademicDepartment(title="Computer Science", academic_faculty_id=self.academic_faculty.id)
        )
        self.current_semester = self.add(
            AcademicSemester(year=2026, title="Autumn", code="01", start_month="January", end_month="May", is_current=True)
        )
        self.next_semester = self.add(
            AcademicSemester(year=2026, title="Summer", code="02", start_month="May", end_month="August")
        )
        self.building = self.add(Building(title="Main Block"))

    @staticmethod
    def add(obj):
        with transaction() as db:
            db.add(obj)
        return obj

    @staticmethod
    def get(model, pk):
        with transaction() as db:
            return db.get(model, pk)

    def room(self, number: str = None) -> Room:
        n = next(self._seq)
        return self.add(Room(room_number=number or f"R{n}", floor="1", building_id=self.building.id))

    def faculty(self) -> Faculty:
        n = next(self._seq)
        return self.add(
            Faculty(
                faculty_id=f"F-{n:04d}",
                first_name="Ada",
                last_name=f"Lecturer{n}",
                email=f"faculty{n}@example.edu",
                academic_department_id=self.department.id,
                academic_faculty_id=self.academic_faculty.id,
            )
        )

    def student(self, student_id: str = None) -> Student:
        n = next(self._seq)
        return self.add(
            Student(
                student_id=student_id or f"S-{n:05d}",
                first_name="Sam",
                last_name=f"Student{n}",
                email=f"student{n}@example.edu",
                academic_semester_id=self.current_semester.id,
                academic_department_id=self.department.id,
                academic_faculty_id=self.academic_faculty.id,
            )
        )

    def course(self, credits: int = 3, prerequisites=()) -> Course:
        n = next(self._seq)
        course = self.add(Course(title=f"Course {n}", code=f"CSE-{n:03d}", credits=credits))
        for prerequisite in prerequisites:
            self.add(CourseToPrerequisite(course_id=course.id, prerequisite_id=prerequisite.id))
        return course

    def registration(
        self,
        status: SemesterRegistrationStatus = SemesterRegistrationStatus.ONGOING,
        semester: AcademicSemester = None,
        min_credit: int = 3,
        max_credit: int = 12,
    ) -> SemesterRegistration:
        return self.add(
            SemesterRegistration(
                start_date=date(2026, 4, 1),
                end_date=date(2026, 4, 30),
                status=status,
                min_credit=min_credit,
                max_credit=max_credit,
                academic_semester_id=(semester or self.next_semester).id,
            )
        )

    def offered(self, course: Course, registration: SemesterRegistration) -> OfferedCourse:
        return self.add(
            OfferedCourse(
                course_id=course.id,
                academic_department_id=self.department.id,
                semester_registration_id=registration.id,
            )
        )

    def section(self, offered: OfferedCourse, max_capacity: int = 30, title: str = None) -> OfferedCourseSection:
        n = next(self._seq)
        return self.add(
            OfferedCourseSection(
                title=title or f"Section {n}",
                max_capacity=max_capacity,
                currently_enrolled_student=0,
                offered_course_id=offered.id,
                semester_registration_id=offered.semester_registration_id,
            )
        )

    def schedule(
        self,
        section: OfferedCourseSection,
        room: Room,
        faculty: Faculty,
        day: WeekDay = WeekDay.MONDAY,
        start: time = time(9, 0),
        end: time = time(10, 0),
    ) -> OfferedCourseClassSchedule:
        return self.add(
            OfferedCourseClassSchedule(
                day_of_week=day,
                start_time=start,
                end_time=end,
                offered_course_section_id=section.id,
                semester_registration_id=section.semester_registration_id,
                room_id=room.id,
                faculty_id=faculty.id,
            )
        )


@pytest.fixture
def factory() -> Factory:
    return Factory()
