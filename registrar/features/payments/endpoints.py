from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from registrar.common.deps import CurrentUser, require_admin

from .schemas import StudentSemesterPaymentResponse
from .service import StudentSemesterPaymentService


router = APIRouter(prefix="/student-semester-payments", tags=["Student Semester Payments"])


@router.get("/", response_model=List[StudentSemesterPaymentResponse])
def list_payments(
    student_id: Optional[str] = Query(None),
    academic_semester_id: Optional[UUID] = Query(None),
    current_user: CurrentUser = Depends(require_admin()),
) -> List[StudentSemesterPaymentResponse]:
    return StudentSemesterPaymentService.list_payments(student_id, academic_semester_id)
