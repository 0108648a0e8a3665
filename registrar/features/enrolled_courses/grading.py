"""
Grade banding and cumulative result arithmetic.

Banding (marks are percentages, bands are inclusive of their lower bound):
	- 80 and above: A+ / 4.0
	- 70 to 79: A / 3.75
	- 60 to 69: B / 3.5
	- 50 to 59: C / 3.0
	- 40 to 49: D / 2.5
	- below 40: F / 0.0

A course result blends the two exams: 40% midterm + 60% final. The blended
total is banded before it is rounded for storage, so 39.996 is still an F.
CGPA is the plain mean of course points; credits are summed separately.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

MIDTERM_WEIGHT = 0.4
FINAL_WEIGHT = 0.6
# applied before banding, so only float noise is dropped
BAND_PRECISION = 6

# (lower bound, grade, point), highest band first
GRADE_BANDS: Tuple[Tuple[float, str, float], ...] = (
    (80, "A+", 4.0),
    (70, "A", 3.75),
    (60, "B", 3.5),
    (50, "C", 3.0),
    (40, "D", 2.5),
    (0, "F", 0.0),
)


@dataclass
class GradeResult:
    grade: str
    point: float


@dataclass
class CourseOutcome:
    point: float
    credits: int


@dataclass
class AcademicResult:
    cgpa: float
    total_completed_credit: int


def calculate_grade(marks: float) -> GradeResult:
    if marks < 0 or marks > 100:
        raise ValueError(f"marks must be within 0..100, got {marks}")
    for lower, grade, point in GRADE_BANDS:
        if marks >= lower:
            return GradeResult(grade=grade, point=point)
    raise AssertionError("unreachable: bands cover 0..100")


def weighted_total(midterm: float, final: float) -> float:
    return round(midterm * MIDTERM_WEIGHT + final * FINAL_WEIGHT, BAND_PRECISION)


def calculate_final_result(outcomes: Iterable[CourseOutcome]) -> AcademicResult:
    outcomes = list(outcomes)
    if not outcomes:
        return AcademicResult(cgpa=0.0, total_completed_credit=0)
    cgpa = sum(o.point for o in outcomes) / len(outcomes)
    return AcademicResult(
        cgpa=round(cgpa, 2),
        total_completed_credit=sum(o.credits for o in outcomes),
    )
