"""Endpoints for semester registrations and the student enrollment workflow."""

from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from registrar.common.deps import CurrentUser, get_current_user, require_admin, require_student
from registrar.common.schemas import MessageResponse

from .schemas import (
    EnrollableCourse,
    EnrollCoursePayload,
    MyRegistrationResponse,
    SemesterRegistrationCreate,
    SemesterRegistrationResponse,
    SemesterRegistrationUpdate,
    StartRegistrationResponse,
)
from .service import SemesterRegistrationService


router = APIRouter(prefix="/semester-registrations", tags=["Semester Registrations"])


# Student workflow (static paths are declared before /{registration_id})
@router.post("/start-registration", response_model=StartRegistrationResponse)
def start_registration(current_user: CurrentUser = Depends(require_student())) -> StartRegistrationResponse:
    return SemesterRegistrationService.start_registration(current_user.id)


@router.post("/enroll-into-course", response_model=MessageResponse)
def enroll_into_course(
    payload: EnrollCoursePayload,
    current_user: CurrentUser = Depends(require_student()),
) -> MessageResponse:
    return SemesterRegistrationService.enroll_into_course(current_user.id, payload)


@router.post("/withdraw-from-course", response_model=MessageResponse)
def withdraw_from_course(
    payload: EnrollCoursePayload,
    current_user: CurrentUser = Depends(require_student()),
) -> MessageResponse:
    return SemesterRegistrationService.withdraw_from_course(current_user.id, payload)


@router.post("/confirm-my-registration", response_model=MessageResponse)
def confirm_my_registration(current_user: CurrentUser = Depends(require_student())) -> MessageResponse:
    return SemesterRegistrationService.confirm_registration(current_user.id)


@router.get("/get-my-registration", response_model=MyRegistrationResponse)
def get_my_registration(current_user: CurrentUser = Depends(require_student())) -> MyRegistrationResponse:
    return SemesterRegistrationService.get_my_registration(current_user.id)


@router.get("/get-my-semester-courses", response_model=List[EnrollableCourse])
def get_my_semester_courses(current_user: CurrentUser = Depends(require_student())) -> List[EnrollableCourse]:
    return SemesterRegistrationService.get_enrollable_courses(current_user.id)


# Administration
@router.post("/", response_model=SemesterRegistrationResponse, status_code=status.HTTP_201_CREATED)
def create_registration(
    payload: SemesterRegistrationCreate,
    current_user: CurrentUser = Depends(require_admin()),
) -> SemesterRegistrationResponse:
    return SemesterRegistrationService.create_registration(payload)


@router.get("/", response_model=List[SemesterRegistrationResponse])
def list_registrations(current_user: CurrentUser = Depends(get_current_user)) -> List[SemesterRegistrationResponse]:
    return SemesterRegistrationService.list_registrations()


@router.get("/{registration_id}", response_model=SemesterRegistrationResponse)
def get_registration(
    registration_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
) -> SemesterRegistrationResponse:
    return SemesterRegistrationService.get_registration(registration_id)


@router.patch("/{registration_id}", response_model=SemesterRegistrationResponse)
def update_registration(
    registration_id: UUID,
    payload: SemesterRegistrationUpdate,
    current_user: CurrentUser = Depends(require_admin()),
) -> SemesterRegistrationResponse:
    return SemesterRegistrationService.update_registration(registration_id, payload)


@router.delete("/{registration_id}", response_model=SemesterRegistrationResponse)
def delete_registration(
    registration_id: UUID,
    current_user: CurrentUser = Depends(require_admin()),
) -> SemesterRegistrationResponse:
    return SemesterRegistrationService.delete_registration(registration_id)


@router.post("/{registration_id}/start-new-semester", response_model=MessageResponse)
def start_new_semester(
    registration_id: UUID,
    current_user: CurrentUser = Depends(require_admin()),
) -> MessageResponse:
    return SemesterRegistrationService.start_new_semester(registration_id)
