from __future__ import annotations

from typing import Dict, Iterable, List, Set
from uuid import UUID

from registrar.features.courses.schemas import CourseSummary
from registrar.features.offered_courses.models import OfferedCourse
from .schemas import EnrollableCourse, EnrollableSection


def get_available_courses(
    offered_courses: Iterable[OfferedCourse],
    completed_course_ids: Set[UUID],
    enrolled_sections: Dict[UUID, UUID],
) -> List[EnrollableCourse]:
    """Annotate offered courses with what the student may still take.

    ``enrolled_sections`` maps offered course id to the section the student
    currently holds in the active registration. Completed courses are dropped.
    """
    available: List[EnrollableCourse] = []
    for offered in offered_courses:
        course = offered.course
        if course.id in completed_course_ids:
            continue

        prerequisites = [edge.prerequisite for edge in course.prerequisites]
        satisfied = all(p.id in completed_course_ids for p in prerequisites)
        taken_section = enrolled_sections.get(offered.id)
        is_taken = taken_section is not None

        available.append(
            EnrollableCourse(
                offered_course_id=offered.id,
                course=CourseSummary.model_validate(course),
                prerequisites=[CourseSummary.model_validate(p) for p in prerequisites],
                prerequisites_satisfied=satisfied,
                is_taken=is_taken,
                is_enrollable=satisfied and not is_taken,
                sections=[
                    EnrollableSection(
                        id=section.id,
                        title=section.title,
                        max_capacity=section.max_capacity,
                        currently_enrolled_student=section.currently_enrolled_student,
                        is_taken=section.id == taken_section,
                    )
                    for section in offered.sections
                ],
            )
        )
    return available
