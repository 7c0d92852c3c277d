"""SQLAlchemy ORM Models for the academic progression schema"""
from standing_engine.models.enums import AcademicStanding, EnrollmentStatus
from standing_engine.models.program import Program
from standing_engine.models.student import Student
from standing_engine.models.semester import Semester
from standing_engine.models.course import Course
from standing_engine.models.enrollment import Enrollment
from standing_engine.models.semester_record import SemesterRecord
from standing_engine.models.academic_history import AcademicHistory

__all__ = [
    "AcademicStanding",
    "EnrollmentStatus",
    "Program",
    "Student",
    "Semester",
    "Course",
    "Enrollment",
    "SemesterRecord",
    "AcademicHistory",
]
