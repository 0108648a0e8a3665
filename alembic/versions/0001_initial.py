"""initial registrar schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_initial"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


registration_status = sa.Enum("UPCOMING", "ONGOING", "ENDED", name="semester_registration_status")
week_day = sa.Enum(
    "SATURDAY", "SUNDAY", "MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", name="week_day"
)
enrolled_course_status = sa.Enum("ONGOING", "COMPLETED", name="student_enrolled_course_status")
exam_type = sa.Enum("MIDTERM", "FINAL", name="exam_type")
payment_status = sa.Enum("PENDING", "PARTIAL_PAID", "FULL_PAID", name="payment_status")


def _timestamps():
    return (
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )


def upgrade() -> None:
    op.create_table(
        "academic_faculties",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_table(
        "academic_departments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False, unique=True),
        sa.Column("academic_faculty_id", sa.Uuid(), sa.ForeignKey("academic_faculties.id"), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "academic_semesters",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(50), nullable=False),
        sa.Column("code", sa.String(10), nullable=False),
        sa.Column("start_month", sa.String(20), nullable=False),
        sa.Column("end_month", sa.String(20), nullable=False),
        sa.Column("is_current", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index(
        "uq_academic_semesters_current",
        "academic_semesters",
        ["is_current"],
        unique=True,
        postgresql_where=sa.text("is_current"),
        sqlite_where=sa.text("is_current = 1"),
    )

    op.create_table(
        "buildings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_table(
        "rooms",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("room_number", sa.String(20), nullable=False),
        sa.Column("floor", sa.String(20), nullable=False),
        sa.Column("building_id", sa.Uuid(), sa.ForeignKey("buildings.id"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("building_id", "room_number", name="uq_rooms_building_number"),
    )

    op.create_table(
        "students",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("student_id", sa.String(50), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("academic_semester_id", sa.Uuid(), sa.ForeignKey("academic_semesters.id"), nullable=True),
        sa.Column("academic_department_id", sa.Uuid(), sa.ForeignKey("academic_departments.id"), nullable=False),
        sa.Column("academic_faculty_id", sa.Uuid(), sa.ForeignKey("academic_faculties.id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_students_student_id", "students", ["student_id"], unique=True)
    op.create_table(
        "faculties",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("faculty_id", sa.String(50), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("designation", sa.String(100), nullable=True),
        sa.Column("academic_department_id", sa.Uuid(), sa.ForeignKey("academic_departments.id"), nullable=False),
        sa.Column("academic_faculty_id", sa.Uuid(), sa.ForeignKey("academic_faculties.id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_faculties_faculty_id", "faculties", ["faculty_id"], unique=True)

    op.create_table(
        "courses",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("code", sa.String(20), nullable=False),
        sa.Column("credits", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_courses_code", "courses", ["code"], unique=True)
    op.create_table(
        "course_to_prerequisites",
        sa.Column("course_id", sa.Uuid(), sa.ForeignKey("courses.id"), primary_key=True),
        sa.Column("prerequisite_id", sa.Uuid(), sa.ForeignKey("courses.id"), primary_key=True),
    )
    op.create_table(
        "course_faculties",
        sa.Column("course_id", sa.Uuid(), sa.ForeignKey("courses.id"), primary_key=True),
        sa.Column("faculty_id", sa.Uuid(), sa.ForeignKey("faculties.id"), primary_key=True),
    )

    op.create_table(
        "semester_registrations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("status", registration_status, nullable=False),
        sa.Column("min_credit", sa.Integer(), nullable=False),
        sa.Column("max_credit", sa.Integer(), nullable=False),
        sa.Column("academic_semester_id", sa.Uuid(), sa.ForeignKey("academic_semesters.id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_semester_registrations_status", "semester_registrations", ["status"])
    op.create_table(
        "student_semester_registrations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("student_id", sa.Uuid(), sa.ForeignKey("students.id"), nullable=False),
        sa.Column("semester_registration_id", sa.Uuid(), sa.ForeignKey("semester_registrations.id"), nullable=False),
        sa.Column("is_confirmed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("total_credits_taken", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.UniqueConstraint("student_id", "semester_registration_id", name="uq_student_semester_registration"),
    )

    op.create_table(
        "offered_courses",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("course_id", sa.Uuid(), sa.ForeignKey("courses.id"), nullable=False),
        sa.Column("academic_department_id", sa.Uuid(), sa.ForeignKey("academic_departments.id"), nullable=False),
        sa.Column("semester_registration_id", sa.Uuid(), sa.ForeignKey("semester_registrations.id"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint(
            "academic_department_id",
            "semester_registration_id",
            "course_id",
            name="uq_offered_course_department_registration_course",
        ),
    )
    op.create_table(
        "offered_course_sections",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(50), nullable=False),
        sa.Column("max_capacity", sa.Integer(), nullable=False),
        sa.Column("currently_enrolled_student", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("offered_course_id", sa.Uuid(), sa.ForeignKey("offered_courses.id"), nullable=False),
        sa.Column("semester_registration_id", sa.Uuid(), sa.ForeignKey("semester_registrations.id"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("offered_course_id", "title", name="uq_offered_course_section_title"),
    )
    op.create_table(
        "offered_course_class_schedules",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("day_of_week", week_day, nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("offered_course_section_id", sa.Uuid(), sa.ForeignKey("offered_course_sections.id"), nullable=False),
        sa.Column("semester_registration_id", sa.Uuid(), sa.ForeignKey("semester_registrations.id"), nullable=False),
        sa.Column("room_id", sa.Uuid(), sa.ForeignKey("rooms.id"), nullable=False),
        sa.Column("faculty_id", sa.Uuid(), sa.ForeignKey("faculties.id"), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "student_semester_registration_courses",
        sa.Column("semester_registration_id", sa.Uuid(), sa.ForeignKey("semester_registrations.id"), primary_key=True),
        sa.Column("student_id", sa.Uuid(), sa.ForeignKey("students.id"), primary_key=True),
        sa.Column("offered_course_id", sa.Uuid(), sa.ForeignKey("offered_courses.id"), primary_key=True),
        sa.Column("offered_course_section_id", sa.Uuid(), sa.ForeignKey("offered_course_sections.id"), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "student_enrolled_courses",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("student_id", sa.Uuid(), sa.ForeignKey("students.id"), nullable=False),
        sa.Column("course_id", sa.Uuid(), sa.ForeignKey("courses.id"), nullable=False),
        sa.Column("academic_semester_id", sa.Uuid(), sa.ForeignKey("academic_semesters.id"), nullable=False),
        sa.Column("grade", sa.String(5), nullable=True),
        sa.Column("point", sa.Float(), nullable=True),
        sa.Column("total_marks", sa.Float(), nullable=True),
        sa.Column("status", enrolled_course_status, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("student_id", "course_id", "academic_semester_id", name="uq_student_enrolled_course"),
    )
    op.create_index("ix_student_enrolled_courses_student_id", "student_enrolled_courses", ["student_id"])
    op.create_table(
        "student_enrolled_course_marks",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("student_id", sa.Uuid(), sa.ForeignKey("students.id"), nullable=False),
        sa.Column("student_enrolled_course_id", sa.Uuid(), sa.ForeignKey("student_enrolled_courses.id"), nullable=False),
        sa.Column("academic_semester_id", sa.Uuid(), sa.ForeignKey("academic_semesters.id"), nullable=False),
        sa.Column("grade", sa.String(5), nullable=True),
        sa.Column("marks", sa.Float(), nullable=True),
        sa.Column("exam_type", exam_type, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("student_enrolled_course_id", "exam_type", name="uq_enrolled_course_exam_type"),
    )
    op.create_table(
        "student_academic_infos",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("student_id", sa.Uuid(), sa.ForeignKey("students.id"), nullable=False, unique=True),
        sa.Column("total_completed_credit", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("cgpa", sa.Float(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_table(
        "student_semester_payments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("student_id", sa.Uuid(), sa.ForeignKey("students.id"), nullable=False),
        sa.Column("academic_semester_id", sa.Uuid(), sa.ForeignKey("academic_semesters.id"), nullable=False),
        sa.Column("full_payment_amount", sa.Float(), nullable=False),
        sa.Column("partial_payment_amount", sa.Float(), nullable=False),
        sa.Column("total_due_amount", sa.Float(), nullable=False),
        sa.Column("total_paid_amount", sa.Float(), nullable=False),
        sa.Column("payment_status", payment_status, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("student_id", "academic_semester_id", name="uq_student_semester_payment"),
    )


def downgrade() -> None:
    for table in (
        "student_semester_payments",
        "student_academic_infos",
        "student_enrolled_course_marks",
        "student_enrolled_courses",
        "student_semester_registration_courses",
        "offered_course_class_schedules",
        "offered_course_sections",
        "offered_courses",
        "student_semester_registrations",
        "semester_registrations",
        "course_faculties",
        "course_to_prerequisites",
        "courses",
        "faculties",
        "students",
        "rooms",
        "buildings",
        "academic_semesters",
        "academic_departments",
        "academic_faculties",
    ):
        op.drop_table(table)
    bind = op.get_bind()
    for enum in (payment_status, exam_type, enrolled_course_status, week_day, registration_status):
        enum.drop(bind, checkfirst=True)
