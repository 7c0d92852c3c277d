"""Execute-result stand-in and ORM row builders (every column set, no session needed)"""
import uuid
from typing import Any, List, Optional
from unittest.mock import MagicMock

from standing_engine.models.academic_history import AcademicHistory
from standing_engine.models.course import Course
from standing_engine.models.enrollment import Enrollment
from standing_engine.models.enums import AcademicStanding
from standing_engine.models.program import Program
from standing_engine.models.semester import Semester
from standing_engine.models.semester_record import SemesterRecord
from standing_engine.models.student import Student


def make_result(scalar: Any = None, rows: Optional[List[Any]] = None) -> MagicMock:
    """Stand-in for an AsyncSession.execute() result"""
    result = MagicMock()
    result.scalar_one_or_none.return_value = scalar
    result.scalars.return_value.all.return_value = rows if rows is not None else []
    return result


def make_program(credit_hours: Optional[int] = 120) -> Program:
    return Program(id=uuid.uuid4(), code="BSC-CS", name="BSc Computer Science", credit_hours=credit_hours)


def make_student(student_id: uuid.UUID, program: Optional[Program] = None) -> Student:
    return Student(
        id=student_id,
        student_number="STU-0001",
        first_name="Ama",
        last_name="Mensah",
        email="ama.mensah@example.edu",
        level=100,
        program=program,
    )


def make_history(student_id: uuid.UUID, student: Optional[Student] = None, **overrides) -> AcademicHistory:
    fields = dict(
        id=uuid.uuid4(),
        student_id=student_id,
        admission_year="2023/2024",
        admission_semester=1,
        expected_graduation_year="2027",
        current_level=100,
        current_semester=1,
        cumulative_gpa=None,
        overall_credits_attempted=0,
        overall_credits_earned=0,
        total_semesters_completed=0,
        current_status=AcademicStanding.GOOD_STANDING.value,
        has_graduated=False,
        graduation_date=None,
    )
    fields.update(overrides)
    history = AcademicHistory(**fields)
    if student is not None:
        history.student = student
    return history


def make_record(student_id: uuid.UUID, semester_id: uuid.UUID, **overrides) -> SemesterRecord:
    fields = dict(
        id=uuid.uuid4(),
        student_id=student_id,
        semester_id=semester_id,
        courses_registered=0,
        courses_completed=0,
        courses_failed=0,
        courses_dropped=0,
        courses_in_progress=0,
        credits_attempted=0,
        credits_earned=0,
        semester_gpa=None,
        total_grade_points=0.0,
        academic_standing=AcademicStanding.GOOD_STANDING.value,
        is_on_probation=False,
        probation_count=0,
        is_finalized=False,
        finalized_at=None,
        finalized_by=None,
        remarks_from_advisor=None,
    )
    fields.update(overrides)
    return SemesterRecord(**fields)


def make_semester(academic_year: str = "2024/2025", semester_number: int = 1) -> Semester:
    return Semester(
        id=uuid.uuid4(),
        name=f"{academic_year} Semester {semester_number}",
        academic_year=academic_year,
        semester_number=semester_number,
    )


def make_enrollment(
    grade: Optional[str],
    credit_hours: int,
    code: str = "CS101",
    status: str = "completed",
    semester: Optional[Semester] = None,
) -> Enrollment:
    course = Course(id=uuid.uuid4(), code=code, name=f"Course {code}", credit_hours=credit_hours, level=100)
    enrollment = Enrollment(id=uuid.uuid4(), course_id=course.id, grade=grade, status=status)
    enrollment.course = course
    if semester is not None:
        enrollment.semester_id = semester.id
        enrollment.semester = semester
    return enrollment
