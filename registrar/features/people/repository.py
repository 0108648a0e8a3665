from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import Student


class StudentRepository:

    @staticmethod
    def get_by_student_id(db: Session, student_id: str) -> Optional[Student]:
        """Look up a student by the business identifier carried in the token."""
        return db.execute(select(Student).where(Student.student_id == student_id)).scalars().first()
