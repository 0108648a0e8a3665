from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from .models import ExamType, StudentEnrolledCourseStatus


class UpdateMarksRequest(BaseModel):
    student_id: str = Field(min_length=1)
    academic_semester_id: UUID
    course_id: UUID
    exam_type: ExamType
    marks: float = Field(ge=0, le=100)


class UpdateFinalMarksRequest(BaseModel):
    student_id: str = Field(min_length=1)
    academic_semester_id: UUID
    course_id: UUID


class MarkResponse(BaseModel):
    id: UUID
    student_id: UUID
    student_enrolled_course_id: UUID
    academic_semester_id: UUID
    exam_type: ExamType
    marks: Optional[float] = None
    grade: Optional[str] = None

    model_config = {"from_attributes": True}


class EnrolledCourseResponse(BaseModel):
    id: UUID
    student_id: UUID
    course_id: UUID
    academic_semester_id: UUID
    grade: Optional[str] = None
    point: Optional[float] = None
    total_marks: Optional[float] = None
    status: StudentEnrolledCourseStatus

    model_config = {"from_attributes": True}


class AcademicInfoResponse(BaseModel):
    student_id: UUID
    cgpa: float
    total_completed_credit: int

    model_config = {"from_attributes": True}


class FinalMarksResponse(BaseModel):
    enrolled_course: EnrolledCourseResponse
    academic_info: AcademicInfoResponse
