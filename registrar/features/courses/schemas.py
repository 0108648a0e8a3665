from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class PrerequisiteCourseRequest(BaseModel):
    course_id: UUID
    is_deleted: bool = False


class CourseCreate(BaseModel):
    title: str = Field(min_length=1)
    code: str = Field(min_length=1)
    credits: int = Field(ge=0)
    prerequisite_courses: List[PrerequisiteCourseRequest] = []


class CourseUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    code: Optional[str] = Field(default=None, min_length=1)
    credits: Optional[int] = Field(default=None, ge=0)
    prerequisite_courses: List[PrerequisiteCourseRequest] = []


class CourseSummary(BaseModel):
    id: UUID
    title: str
    code: str
    credits: int

    model_config = {"from_attributes": True}


class CourseResponse(CourseSummary):
    prerequisites: List[CourseSummary] = []
    prerequisite_for: List[CourseSummary] = []


class FacultyIds(BaseModel):
    faculties: List[UUID] = Field(min_length=1)


class FacultySummary(BaseModel):
    id: UUID
    faculty_id: str
    first_name: str
    last_name: str

    model_config = {"from_attributes": True}
