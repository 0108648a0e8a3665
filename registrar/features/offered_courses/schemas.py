from __future__ import annotations

from datetime import time
from typing import List
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from .models import WeekDay


class OfferedCourseCreate(BaseModel):
    academic_department_id: UUID
    semester_registration_id: UUID
    course_ids: List[UUID] = Field(min_length=1)


class OfferedCourseResponse(BaseModel):
    id: UUID
    course_id: UUID
    academic_department_id: UUID
    semester_registration_id: UUID

    model_config = {"from_attributes": True}


class ClassScheduleIn(BaseModel):
    day_of_week: WeekDay
    start_time: time
    end_time: time
    room_id: UUID
    faculty_id: UUID

    @model_validator(mode="after")
    def _start_before_end(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be earlier than end_time")
        return self


class ClassScheduleCreate(ClassScheduleIn):
    offered_course_section_id: UUID


class ClassScheduleResponse(BaseModel):
    id: UUID
    day_of_week: WeekDay
    start_time: time
    end_time: time
    room_id: UUID
    faculty_id: UUID
    offered_course_section_id: UUID
    semester_registration_id: UUID

    model_config = {"from_attributes": True}


class OfferedCourseSectionCreate(BaseModel):
    title: str = Field(min_length=1)
    max_capacity: int = Field(ge=1)
    offered_course_id: UUID
    class_schedules: List[ClassScheduleIn] = []


class OfferedCourseSectionResponse(BaseModel):
    id: UUID
    title: str
    max_capacity: int
    currently_enrolled_student: int
    offered_course_id: UUID
    semester_registration_id: UUID
    class_schedules: List[ClassScheduleResponse] = []

    model_config = {"from_attributes": True}
