"""Endpoints for offered courses, their sections and class schedules."""

from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from registrar.common.deps import CurrentUser, get_current_user, require_admin

from .schemas import (
    ClassScheduleCreate,
    ClassScheduleResponse,
    OfferedCourseCreate,
    OfferedCourseResponse,
    OfferedCourseSectionCreate,
    OfferedCourseSectionResponse,
)
from .service import ClassScheduleService, OfferedCourseSectionService, OfferedCourseService


router = APIRouter(prefix="/offered-courses", tags=["Offered Courses"])
sections_router = APIRouter(prefix="/offered-course-sections", tags=["Offered Course Sections"])
schedules_router = APIRouter(prefix="/offered-course-class-schedules", tags=["Offered Course Class Schedules"])


@router.post("/", response_model=List[OfferedCourseResponse], status_code=status.HTTP_201_CREATED)
def create_offered_courses(
    payload: OfferedCourseCreate,
    current_user: CurrentUser = Depends(require_admin()),
) -> List[OfferedCourseResponse]:
    return OfferedCourseService.create_offered_courses(payload)


@sections_router.post("/", response_model=OfferedCourseSectionResponse, status_code=status.HTTP_201_CREATED)
def create_section(
    payload: OfferedCourseSectionCreate,
    current_user: CurrentUser = Depends(require_admin()),
) -> OfferedCourseSectionResponse:
    return OfferedCourseSectionService.create_section(payload)


@sections_router.get("/{section_id}", response_model=OfferedCourseSectionResponse)
def get_section(
    section_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
) -> OfferedCourseSectionResponse:
    return OfferedCourseSectionService.get_section(section_id)


@schedules_router.post("/", response_model=ClassScheduleResponse, status_code=status.HTTP_201_CREATED)
def create_class_schedule(
    payload: ClassScheduleCreate,
    current_user: CurrentUser = Depends(require_admin()),
) -> ClassScheduleResponse:
    return ClassScheduleService.create_class_schedule(payload)
