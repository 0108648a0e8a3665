from __future__ import annotations

from datetime import date
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from registrar.features.courses.schemas import CourseSummary
from .models import SemesterRegistrationStatus


class SemesterRegistrationCreate(BaseModel):
    start_date: date
    end_date: date
    academic_semester_id: UUID
    min_credit: int = Field(ge=0)
    max_credit: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_bounds(self):
        if self.min_credit > self.max_credit:
            raise ValueError("min_credit cannot exceed max_credit")
        if self.start_date > self.end_date:
            raise ValueError("start_date cannot be after end_date")
        return self


class SemesterRegistrationUpdate(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[SemesterRegistrationStatus] = None
    min_credit: Optional[int] = Field(default=None, ge=0)
    max_credit: Optional[int] = Field(default=None, ge=0)


class SemesterRegistrationResponse(BaseModel):
    id: UUID
    start_date: date
    end_date: date
    status: SemesterRegistrationStatus
    min_credit: int
    max_credit: int
    academic_semester_id: UUID

    model_config = {"from_attributes": True}


class StudentSemesterRegistrationResponse(BaseModel):
    id: UUID
    student_id: UUID
    semester_registration_id: UUID
    is_confirmed: bool
    total_credits_taken: int

    model_config = {"from_attributes": True}


class StartRegistrationResponse(BaseModel):
    semester_registration: SemesterRegistrationResponse
    student_semester_registration: StudentSemesterRegistrationResponse


class EnrollCoursePayload(BaseModel):
    offered_course_id: UUID
    offered_course_section_id: UUID


class RegisteredCourse(BaseModel):
    offered_course_id: UUID
    offered_course_section_id: UUID
    section_title: str
    course: CourseSummary


class MyRegistrationResponse(BaseModel):
    semester_registration: SemesterRegistrationResponse
    student_semester_registration: Optional[StudentSemesterRegistrationResponse] = None
    courses: List[RegisteredCourse] = []


class EnrollableSection(BaseModel):
    id: UUID
    title: str
    max_capacity: int
    currently_enrolled_student: int
    is_taken: bool = False


class EnrollableCourse(BaseModel):
    offered_course_id: UUID
    course: CourseSummary
    prerequisites: List[CourseSummary] = []
    prerequisites_satisfied: bool
    is_taken: bool
    is_enrollable: bool
    sections: List[EnrollableSection] = []
