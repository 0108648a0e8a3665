from types import SimpleNamespace
from uuid import uuid4

from registrar.features.semester_registration.utils import get_available_courses


def _course(code):
    return SimpleNamespace(id=uuid4(), title=f"Course {code}", code=code, credits=3, prerequisites=[])


def _offered(course, sections=1):
    return SimpleNamespace(
        id=uuid4(),
        course=course,
        sections=[
            SimpleNamespace(id=uuid4(), title=f"S{i}", max_capacity=30, currently_enrolled_student=0)
            for i in range(sections)
        ],
    )


def _requires(course, prerequisite):
    course.prerequisites.append(SimpleNamespace(prerequisite=prerequisite))


def test_completed_courses_are_dropped():
    done, fresh = _course("101"), _course("102")
    result = get_available_courses([_offered(done), _offered(fresh)], {done.id}, {})
    assert [c.course.code for c in result] == ["102"]
    assert result[0].is_enrollable


def test_missing_prerequisite_blocks_enrollment():
    intro, advanced = _course("101"), _course("201")
    _requires(advanced, intro)
    result = get_available_courses([_offered(advanced)], set(), {})
    assert not result[0].prerequisites_satisfied
    assert not result[0].is_enrollable
    assert [p.code for p in result[0].prerequisites] == ["101"]


def test_satisfied_prerequisite_allows_enrollment():
    intro, advanced = _course("101"), _course("201")
    _requires(advanced, intro)
    result = get_available_courses([_offered(advanced)], {intro.id}, {})
    assert result[0].prerequisites_satisfied
    assert result[0].is_enrollable


def test_taken_course_marks_its_section():
    course = _course("101")
    offered = _offered(course, sections=2)
    taken = offered.sections[1]
    result = get_available_courses([offered], set(), {offered.id: taken.id})
    assert result[0].is_taken
    assert not result[0].is_enrollable
    assert [s.is_taken for s in result[0].sections] == [False, True]
