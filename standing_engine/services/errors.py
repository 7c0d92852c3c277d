"""
Academic Engine Errors

Every failure the engine reports is an AcademicEngineError carrying a stable
code plus the student/semester identifiers the caller needs to retry. The four
categories (not found, conflict, precondition failed, validation failed) map
one-to-one onto HTTP status codes in standing_engine/api/error_handlers.py.
"""
from typing import Any, Dict, Optional
from uuid import UUID


class AcademicEngineError(Exception):
    """Base exception for progression engine errors."""

    code = "ACADEMIC_ERROR"

    def __init__(
        self,
        message: str,
        *,
        student_id: Optional[UUID] = None,
        semester_id: Optional[UUID] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.student_id = student_id
        self.semester_id = semester_id

    @property
    def context(self) -> Dict[str, Any]:
        context = {}
        if self.student_id is not None:
            context["student_id"] = str(self.student_id)
        if self.semester_id is not None:
            context["semester_id"] = str(self.semester_id)
        return context


# NotFound


class NotFoundError(AcademicEngineError):
    code = "NOT_FOUND"


class StudentNotFoundError(NotFoundError):
    code = "STUDENT_NOT_FOUND"


class SemesterNotFoundError(NotFoundError):
    code = "SEMESTER_NOT_FOUND"


class AcademicHistoryNotFoundError(NotFoundError):
    code = "ACADEMIC_HISTORY_NOT_FOUND"


class SemesterRecordNotFoundError(NotFoundError):
    code = "SEMESTER_RECORD_NOT_FOUND"


class ProgramNotFoundError(NotFoundError):
    code = "PROGRAM_NOT_FOUND"


# Conflict


class ConflictError(AcademicEngineError):
    code = "CONFLICT"


class AcademicHistoryExistsError(ConflictError):
    code = "ACADEMIC_HISTORY_EXISTS"


class SemesterRecordExistsError(ConflictError):
    code = "SEMESTER_RECORD_EXISTS"


class SemesterRecordFinalizedError(ConflictError):
    """Raised on any attempt to change a finalized semester record."""

    code = "SEMESTER_RECORD_FINALIZED"


# PreconditionFailed


class PreconditionFailedError(AcademicEngineError):
    code = "PRECONDITION_FAILED"


class GPANotCalculatedError(PreconditionFailedError):
    code = "GPA_NOT_CALCULATED"


class GraduationRequirementsNotMetError(PreconditionFailedError):
    code = "GRADUATION_REQUIREMENTS_NOT_MET"


# ValidationFailure


class ValidationFailedError(AcademicEngineError):
    code = "VALIDATION_FAILED"
