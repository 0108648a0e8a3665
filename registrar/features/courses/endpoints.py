"""Endpoints for the course catalog."""

from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from registrar.common.deps import CurrentUser, get_current_user, require_admin

from .schemas import CourseCreate, CourseResponse, CourseUpdate, FacultyIds, FacultySummary
from .service import CourseService


router = APIRouter(prefix="/courses", tags=["Courses"])


@router.post("/", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
def create_course(
    payload: CourseCreate,
    current_user: CurrentUser = Depends(require_admin()),
) -> CourseResponse:
    return CourseService.create_course(payload)


@router.get("/{course_id}", response_model=CourseResponse)
def get_course(
    course_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
) -> CourseResponse:
    return CourseService.get_course(course_id)


@router.patch("/{course_id}", response_model=CourseResponse)
def update_course(
    course_id: UUID,
    payload: CourseUpdate,
    current_user: CurrentUser = Depends(require_admin()),
) -> CourseResponse:
    return CourseService.update_course(course_id, payload)


@router.delete("/{course_id}", response_model=CourseResponse)
def delete_course(
    course_id: UUID,
    current_user: CurrentUser = Depends(require_admin()),
) -> CourseResponse:
    return CourseService.delete_course(course_id)


@router.post("/{course_id}/faculties", response_model=List[FacultySummary])
def assign_faculties(
    course_id: UUID,
    payload: FacultyIds,
    current_user: CurrentUser = Depends(require_admin()),
) -> List[FacultySummary]:
    return CourseService.assign_faculties(course_id, payload)


@router.delete("/{course_id}/faculties", response_model=List[FacultySummary])
def remove_faculties(
    course_id: UUID,
    payload: FacultyIds,
    current_user: CurrentUser = Depends(require_admin()),
) -> List[FacultySummary]:
    return CourseService.remove_faculties(course_id, payload)
