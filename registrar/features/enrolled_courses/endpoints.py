"""Endpoints for exam marks and academic records."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from registrar.common.deps import CurrentUser, get_current_user, require_faculty

from .schemas import AcademicInfoResponse, FinalMarksResponse, MarkResponse, UpdateFinalMarksRequest, UpdateMarksRequest
from .service import EnrolledCourseMarkService


router = APIRouter(prefix="/student-enrolled-course-marks", tags=["Student Enrolled Course Marks"])


@router.patch("/update-marks", response_model=MarkResponse)
def update_marks(
    payload: UpdateMarksRequest,
    current_user: CurrentUser = Depends(require_faculty()),
) -> MarkResponse:
    return EnrolledCourseMarkService.update_marks(payload)


@router.patch("/update-final-marks", response_model=FinalMarksResponse)
def update_final_marks(
    payload: UpdateFinalMarksRequest,
    current_user: CurrentUser = Depends(require_faculty()),
) -> FinalMarksResponse:
    return EnrolledCourseMarkService.update_final_marks(payload)


@router.get("/", response_model=List[MarkResponse])
def list_marks(
    student_id: Optional[str] = Query(None),
    academic_semester_id: Optional[UUID] = Query(None),
    course_id: Optional[UUID] = Query(None),
    current_user: CurrentUser = Depends(require_faculty()),
) -> List[MarkResponse]:
    return EnrolledCourseMarkService.list_marks(student_id, academic_semester_id, course_id)


@router.get("/academic-info/{student_id}", response_model=AcademicInfoResponse)
def get_academic_info(
    student_id: str,
    current_user: CurrentUser = Depends(get_current_user),
) -> AcademicInfoResponse:
    return EnrolledCourseMarkService.get_academic_info(student_id)
