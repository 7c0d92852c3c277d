"""
Semester Record Service

Tracks a student's performance per semester:
- Semester record creation and statistics updates
- Semester GPA calculation from graded enrollments
- Academic standing and the consecutive-probation counter
- Finalization, which locks the record and refreshes the academic history

Services take the request's AsyncSession and only flush; the caller owns the
transaction, so a failure anywhere in finalize rolls the whole pipeline back.
"""
import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Any, List, Optional, Union
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager, selectinload

from standing_engine.models.academic_history import AcademicHistory
from standing_engine.models.enrollment import Enrollment
from standing_engine.models.enums import AcademicStanding, EnrollmentStatus
from standing_engine.models.semester import Semester
from standing_engine.models.semester_record import SemesterRecord
from standing_engine.models.student import Student
from standing_engine.schemas.academic import (
    EnrollmentBreakdown,
    EnrollmentCourse,
    FinalizeResult,
    NoGradeData,
    SemesterGPAResult,
    SemesterRecordResponse,
    SemesterStatistics,
)
from standing_engine.services.academic_history_service import AcademicHistoryService
from standing_engine.services.errors import (
    AcademicHistoryNotFoundError,
    GPANotCalculatedError,
    SemesterNotFoundError,
    SemesterRecordExistsError,
    SemesterRecordFinalizedError,
    SemesterRecordNotFoundError,
    StudentNotFoundError,
    ValidationFailedError,
)
from standing_engine.services.gpa_calculator import calculate_semester_gpa
from standing_engine.services.standing_classifier import (
    determine_academic_standing,
    next_probation_count,
)

logger = logging.getLogger(__name__)

# Enrollment statuses whose grade counts toward the semester GPA
GRADED_ENROLLMENT_STATUSES = (EnrollmentStatus.ACTIVE.value, EnrollmentStatus.COMPLETED.value)

# Fields callers may set through update_semester_record
UPDATABLE_STATISTICS = frozenset(
    {
        "courses_registered",
        "courses_completed",
        "courses_failed",
        "courses_dropped",
        "courses_in_progress",
        "credits_attempted",
        "credits_earned",
        "remarks_from_advisor",
    }
)


class SemesterRecordService:
    """
    Service for per-(student, semester) records.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_semester_record(
        self,
        student_id: UUID,
        semester_id: UUID,
        remarks_from_advisor: Optional[str] = None,
    ) -> SemesterRecord:
        """
        Create an empty semester record in good standing.

        Raises:
            ValidationFailedError: If an identifier is missing.
            SemesterRecordExistsError: If the pair already has a record.
            StudentNotFoundError / SemesterNotFoundError: If either is absent.
            AcademicHistoryNotFoundError: If the student has no academic history.
        """
        self._require_ids(student_id, semester_id)

        existing = await self._find_record(student_id, semester_id)
        if existing is not None:
            raise SemesterRecordExistsError(
                "Semester record already exists for this student and semester",
                student_id=student_id,
                semester_id=semester_id,
            )

        result = await self.db.execute(select(Student.id).where(Student.id == student_id))
        if result.scalar_one_or_none() is None:
            raise StudentNotFoundError("Student not found", student_id=student_id)

        result = await self.db.execute(select(Semester.id).where(Semester.id == semester_id))
        if result.scalar_one_or_none() is None:
            raise SemesterNotFoundError("Semester not found", student_id=student_id, semester_id=semester_id)

        result = await self.db.execute(
            select(AcademicHistory.id).where(AcademicHistory.student_id == student_id)
        )
        if result.scalar_one_or_none() is None:
            raise AcademicHistoryNotFoundError(
                "Academic history must exist before semester records are created",
                student_id=student_id,
                semester_id=semester_id,
            )

        record = SemesterRecord(
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
            remarks_from_advisor=remarks_from_advisor,
        )
        self.db.add(record)
        await self.db.flush()

        logger.info(f"Created semester record: student={student_id}, semester={semester_id}")
        return record

    async def get_semester_record(self, student_id: UUID, semester_id: UUID) -> SemesterRecord:
        """
        Get a semester record.

        Raises:
            SemesterRecordNotFoundError: If no record exists for the pair.
        """
        self._require_ids(student_id, semester_id)
        return await self._load_record(student_id, semester_id)

    async def list_semester_records(self, student_id: UUID) -> List[SemesterRecord]:
        """All of a student's semester records, most recent semester first."""
        if student_id is None:
            raise ValidationFailedError("Student ID is required")
        result = await self.db.execute(
            select(SemesterRecord)
            .join(SemesterRecord.semester)
            .options(contains_eager(SemesterRecord.semester))
            .where(SemesterRecord.student_id == student_id)
            .order_by(Semester.academic_year.desc(), Semester.semester_number.desc())
        )
        return list(result.scalars().all())

    async def update_semester_record(self, student_id: UUID, semester_id: UUID, **changes: Any) -> SemesterRecord:
        """
        Update course counts, credit counts or advisor remarks.

        Only keys with a non-None value are applied.

        Raises:
            ValidationFailedError: For unknown fields or negative counts.
            SemesterRecordFinalizedError: If the record is finalized.
        """
        self._require_ids(student_id, semester_id)

        unknown = set(changes) - UPDATABLE_STATISTICS
        if unknown:
            raise ValidationFailedError(
                f"Cannot update semester record fields: {sorted(unknown)}",
                student_id=student_id,
                semester_id=semester_id,
            )

        updates = {field: value for field, value in changes.items() if value is not None}
        for field, value in updates.items():
            if field != "remarks_from_advisor" and value < 0:
                raise ValidationFailedError(
                    f"{field} must not be negative",
                    student_id=student_id,
                    semester_id=semester_id,
                )

        record = await self._load_record(student_id, semester_id, for_update=True)
        self._ensure_not_finalized(record)

        for field, value in updates.items():
            setattr(record, field, value)
        await self.db.flush()

        logger.info(f"Updated semester record {student_id}/{semester_id}: {sorted(updates)}")
        return record

    async def calculate_semester_gpa(
        self, student_id: UUID, semester_id: UUID
    ) -> Union[SemesterGPAResult, NoGradeData]:
        """
        Recalculate the semester GPA from the semester's graded enrollments.

        Idempotent; every run overwrites the stored values with what the
        current enrollments give, including the no-data case.

        Raises:
            SemesterRecordNotFoundError: If the record does not exist.
            SemesterRecordFinalizedError: If the record is finalized.
        """
        self._require_ids(student_id, semester_id)
        record = await self._load_record(student_id, semester_id, for_update=True)
        self._ensure_not_finalized(record)
        return await self._calculate_gpa(record)

    async def update_academic_standing(self, student_id: UUID, semester_id: UUID) -> SemesterRecord:
        """
        Classify the semester GPA and maintain the probation counter.

        The record row is locked (SELECT ... FOR UPDATE) for the rest of the
        transaction so concurrent calls cannot double-increment
        probation_count.

        Raises:
            GPANotCalculatedError: If the semester GPA has not been calculated.
            SemesterRecordFinalizedError: If the record is finalized.
        """
        self._require_ids(student_id, semester_id)
        record = await self._load_record(student_id, semester_id, for_update=True)
        self._ensure_not_finalized(record)
        await self._classify(record)
        return record

    async def finalize_semester_record(
        self, student_id: UUID, semester_id: UUID, finalized_by: UUID
    ) -> FinalizeResult:
        """
        Finalize a semester and refresh the student's academic history.

        Pipeline, in order, stopping at the first failure:
            1. calculate semester GPA
            2. update semester standing
            3. mark the record finalized
            4. recompute cumulative GPA
            5. resolve level progression
            6. update history standing

        Raises:
            SemesterRecordFinalizedError: If the record is already finalized.
            AcademicHistoryNotFoundError: If the student has no history.
            GPANotCalculatedError: If the semester has no graded courses.
        """
        self._require_ids(student_id, semester_id)
        if finalized_by is None:
            raise ValidationFailedError(
                "finalized_by is required",
                student_id=student_id,
                semester_id=semester_id,
            )

        record = await self._load_record(student_id, semester_id, for_update=True)
        if record.is_finalized:
            raise SemesterRecordFinalizedError(
                "Semester record is already finalized",
                student_id=student_id,
                semester_id=semester_id,
            )

        # Concurrent finalizes for one student queue here, so each recompute
        # sees every semester finalized before it.
        history_service = AcademicHistoryService(self.db)
        history = await history_service.get_academic_history(student_id, for_update=True)

        gpa_outcome = await self._calculate_gpa(record)
        await self._classify(record)

        record.is_finalized = True
        record.finalized_at = datetime.now(timezone.utc)
        record.finalized_by = finalized_by
        await self.db.flush()
        logger.info(f"Finalized semester record {student_id}/{semester_id} by {finalized_by}")

        cumulative = await history_service.recompute_cumulative(history)
        level_progression = await history_service.apply_level_progression(history)
        standing = await history_service.apply_standing(history)

        return FinalizeResult(
            record=SemesterRecordResponse.model_validate(record),
            semester_gpa=gpa_outcome,
            cumulative=cumulative,
            level_progression=level_progression,
            academic_standing=standing,
        )

    async def get_semester_statistics(self, student_id: UUID, semester_id: UUID) -> SemesterStatistics:
        """
        Semester record plus a breakdown of all its enrollments by status and grade.
        """
        self._require_ids(student_id, semester_id)
        record = await self._load_record(student_id, semester_id)

        result = await self.db.execute(
            select(Enrollment)
            .options(selectinload(Enrollment.course))
            .where(Enrollment.student_id == student_id, Enrollment.semester_id == semester_id)
        )
        enrollments = result.scalars().all()

        by_status = Counter(e.status for e in enrollments)
        by_grade = Counter(e.grade for e in enrollments if e.grade)

        return SemesterStatistics(
            record=SemesterRecordResponse.model_validate(record),
            enrollments=EnrollmentBreakdown(
                total=len(enrollments),
                by_status=dict(by_status),
                by_grade=dict(by_grade),
                courses=[
                    EnrollmentCourse(
                        course_id=e.course.id,
                        course_code=e.course.code,
                        course_name=e.course.name,
                        credits=e.course.credit_hours,
                        grade=e.grade,
                        status=e.status,
                    )
                    for e in enrollments
                ],
            ),
        )

    # Pipeline steps on an already loaded record

    async def _calculate_gpa(self, record: SemesterRecord) -> Union[SemesterGPAResult, NoGradeData]:
        result = await self.db.execute(
            select(Enrollment)
            .options(selectinload(Enrollment.course))
            .where(
                Enrollment.student_id == record.student_id,
                Enrollment.semester_id == record.semester_id,
                Enrollment.status.in_(GRADED_ENROLLMENT_STATUSES),
                Enrollment.grade.is_not(None),
            )
        )
        enrollments = result.scalars().all()

        outcome = calculate_semester_gpa((e.grade, e.course.credit_hours) for e in enrollments)

        record.semester_gpa = outcome.semester_gpa
        record.total_grade_points = outcome.total_grade_points
        record.credits_attempted = outcome.credits_attempted
        record.credits_earned = outcome.credits_earned
        record.courses_completed = outcome.courses_completed
        await self.db.flush()

        if isinstance(outcome, NoGradeData):
            logger.info(f"No graded courses for {record.student_id}/{record.semester_id}; semester GPA cleared")
        else:
            logger.info(
                f"Semester GPA for {record.student_id}/{record.semester_id}: {outcome.semester_gpa} "
                f"({outcome.credits_earned}/{outcome.credits_attempted} credits earned/attempted)"
            )
        return outcome

    async def _classify(self, record: SemesterRecord) -> AcademicStanding:
        if record.semester_gpa is None:
            raise GPANotCalculatedError(
                "Semester GPA not calculated yet",
                student_id=record.student_id,
                semester_id=record.semester_id,
            )

        standing = determine_academic_standing(record.semester_gpa)
        record.academic_standing = standing.value
        record.is_on_probation = standing == AcademicStanding.PROBATION
        record.probation_count = next_probation_count(standing, record.probation_count)
        await self.db.flush()

        if record.is_on_probation:
            logger.warning(
                f"Student {record.student_id} on probation for semester {record.semester_id} "
                f"(GPA {record.semester_gpa}, probation count {record.probation_count})"
            )
        else:
            logger.info(
                f"Standing for {record.student_id}/{record.semester_id}: {standing.value} "
                f"(GPA {record.semester_gpa})"
            )
        return standing

    def _ensure_not_finalized(self, record: SemesterRecord) -> None:
        if record.is_finalized:
            raise SemesterRecordFinalizedError(
                "Semester record is finalized and cannot be modified",
                student_id=record.student_id,
                semester_id=record.semester_id,
            )

    def _require_ids(self, student_id: Optional[UUID], semester_id: Optional[UUID]) -> None:
        if student_id is None or semester_id is None:
            raise ValidationFailedError(
                "Student ID and Semester ID are required",
                student_id=student_id,
                semester_id=semester_id,
            )

    async def _load_record(self, student_id: UUID, semester_id: UUID, for_update: bool = False) -> SemesterRecord:
        record = await self._find_record(student_id, semester_id, for_update=for_update)
        if record is None:
            raise SemesterRecordNotFoundError(
                "Semester record not found",
                student_id=student_id,
                semester_id=semester_id,
            )
        return record

    async def _find_record(
        self, student_id: UUID, semester_id: UUID, for_update: bool = False
    ) -> Optional[SemesterRecord]:
        query = select(SemesterRecord).where(
            SemesterRecord.student_id == student_id,
            SemesterRecord.semester_id == semester_id,
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()
