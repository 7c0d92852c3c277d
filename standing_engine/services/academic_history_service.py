"""
Academic History Service

Maintains a student's single lifetime academic history row:
- Cumulative GPA and credit totals rolled up from finalized semester records
- Level progression from credits earned (100 -> 200 -> 300 -> 400)
- History-level academic standing from cumulative GPA
- Graduation eligibility and the graduation transition
- Academic summary and transcript projections

Services take the request's AsyncSession and only flush; the caller owns the
transaction.
"""
import logging
from datetime import date
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager, selectinload

from standing_engine.models.academic_history import AcademicHistory
from standing_engine.models.course import Course
from standing_engine.models.enrollment import Enrollment
from standing_engine.models.enums import AcademicStanding, EnrollmentStatus
from standing_engine.models.semester import Semester
from standing_engine.models.semester_record import SemesterRecord
from standing_engine.models.student import Student
from standing_engine.schemas.academic import (
    AcademicHistoryResponse,
    AcademicInfo,
    AcademicSummary,
    CumulativeGPAResult,
    GraduationEligibility,
    LevelChanged,
    LevelUnchanged,
    NoFinalizedSemesters,
    SemesterRecordSummary,
    StudentInfo,
    SummaryBlock,
    Transcript,
)
from standing_engine.services.errors import (
    AcademicHistoryExistsError,
    AcademicHistoryNotFoundError,
    GPANotCalculatedError,
    GraduationRequirementsNotMetError,
    ProgramNotFoundError,
    StudentNotFoundError,
    ValidationFailedError,
)
from standing_engine.services.gpa_calculator import calculate_cumulative_gpa
from standing_engine.services.graduation_checker import (
    evaluate_graduation_eligibility,
    resolve_required_credits,
)
from standing_engine.services.level_progression import (
    STARTING_LEVEL,
    credits_to_next_level,
    resolve_level,
)
from standing_engine.services.standing_classifier import determine_academic_standing
from standing_engine.services.transcript_builder import build_transcript

logger = logging.getLogger(__name__)


class AcademicHistoryService:
    """
    Service for the per-student academic history aggregate.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_academic_history(
        self,
        student_id: UUID,
        admission_year: str,
        admission_semester: int = 1,
        expected_graduation_year: Optional[str] = None,
    ) -> AcademicHistory:
        """
        Create the academic history for a newly admitted student.

        Raises:
            ValidationFailedError: If student_id or admission_year is missing.
            AcademicHistoryExistsError: If the student already has a history.
            StudentNotFoundError: If the student does not exist.
        """
        if student_id is None or not admission_year:
            raise ValidationFailedError(
                "Student ID and admission year are required",
                student_id=student_id,
            )

        existing = await self._find_history(student_id)
        if existing is not None:
            raise AcademicHistoryExistsError(
                "Academic history already exists for this student",
                student_id=student_id,
            )

        result = await self.db.execute(select(Student.id).where(Student.id == student_id))
        if result.scalar_one_or_none() is None:
            raise StudentNotFoundError("Student not found", student_id=student_id)

        history = AcademicHistory(
            student_id=student_id,
            admission_year=admission_year,
            admission_semester=admission_semester or 1,
            expected_graduation_year=expected_graduation_year,
            current_level=STARTING_LEVEL,
            current_semester=1,
            overall_credits_attempted=0,
            overall_credits_earned=0,
            total_semesters_completed=0,
            current_status=AcademicStanding.GOOD_STANDING.value,
            has_graduated=False,
        )
        self.db.add(history)
        await self.db.flush()

        logger.info(f"Created academic history for student {student_id} (admitted {admission_year})")
        return history

    async def get_academic_history(
        self, student_id: UUID, with_student: bool = False, for_update: bool = False
    ) -> AcademicHistory:
        """
        Get a student's academic history.

        Args:
            student_id: Student identifier
            with_student: Also load the student and their program
            for_update: Lock the history row until the transaction ends

        Raises:
            AcademicHistoryNotFoundError: If no history exists.
        """
        history = await self._find_history(student_id, with_student=with_student, for_update=for_update)
        if history is None:
            raise AcademicHistoryNotFoundError("Academic history not found", student_id=student_id)
        return history

    async def update_cumulative_gpa(self, student_id: UUID) -> Union[CumulativeGPAResult, NoFinalizedSemesters]:
        """
        Recompute cumulative GPA and credit totals from every finalized semester.

        Always a full recomputation, so finalizing semesters out of order
        converges on the same values.

        Returns:
            CumulativeGPAResult, or NoFinalizedSemesters (history left untouched)
        """
        history = await self.get_academic_history(student_id, for_update=True)
        return await self.recompute_cumulative(history)

    async def check_level_progression(self, student_id: UUID) -> Union[LevelChanged, LevelUnchanged]:
        """
        Move the student to the level their credits earned qualify for.

        Must run after update_cumulative_gpa so the credit totals are current.
        """
        history = await self.get_academic_history(student_id)
        return await self.apply_level_progression(history)

    async def update_academic_standing(self, student_id: UUID) -> AcademicHistory:
        """
        Classify the cumulative GPA into the history's current status.

        Raises:
            GPANotCalculatedError: If no cumulative GPA exists yet.
        """
        history = await self.get_academic_history(student_id)
        await self.apply_standing(history)
        return history

    async def update_current_semester(self, student_id: UUID, semester_number: int) -> AcademicHistory:
        """
        Point the history at the student's current semester number.

        Raises:
            ValidationFailedError: If semester_number is below 1.
        """
        if semester_number is None or semester_number < 1:
            raise ValidationFailedError(
                f"Semester number must be at least 1, got {semester_number}",
                student_id=student_id,
            )

        history = await self.get_academic_history(student_id)
        history.current_semester = semester_number
        await self.db.flush()

        logger.info(f"Student {student_id} current semester set to {semester_number}")
        return history

    async def check_graduation_eligibility(self, student_id: UUID) -> GraduationEligibility:
        """
        Check graduation requirements against the student's program.

        Raises:
            StudentNotFoundError: If the history's student is missing.
            ProgramNotFoundError: If the student has no program.
        """
        history = await self.get_academic_history(student_id, with_student=True)
        return self._evaluate_eligibility(history)

    async def mark_as_graduated(self, student_id: UUID, graduation_date: date) -> AcademicHistory:
        """
        Record graduation. Terminal: a graduated student stays graduated.

        Repeated calls return the stored history (and its original date)
        without re-checking eligibility.

        Raises:
            GraduationRequirementsNotMetError: If the student is not eligible.
        """
        if graduation_date is None:
            raise ValidationFailedError("Graduation date is required", student_id=student_id)

        history = await self.get_academic_history(student_id, with_student=True)

        if history.has_graduated:
            logger.info(
                f"Student {student_id} already graduated on {history.graduation_date}; ignoring repeat request"
            )
            return history

        eligibility = self._evaluate_eligibility(history)
        if not eligibility.is_eligible:
            raise GraduationRequirementsNotMetError(
                "Student does not meet graduation requirements: "
                + ", ".join(eligibility.unmet_requirements),
                student_id=student_id,
            )

        history.has_graduated = True
        history.graduation_date = graduation_date
        await self.db.flush()

        logger.info(f"Student {student_id} graduated on {graduation_date}")
        return history

    async def get_academic_summary(self, student_id: UUID) -> AcademicSummary:
        """
        Build the academic summary: history, every semester record, level
        progression and graduation eligibility.
        """
        history = await self.get_academic_history(student_id, with_student=True)
        return await self._build_summary(history)

    async def get_transcript(self, student_id: UUID) -> Transcript:
        """
        Build the transcript: completed, graded courses grouped by semester
        alongside the student's identity and current academic snapshot.

        Read-only: the level is reported as stored, and a student without a
        program gets a transcript with no program name.
        """
        history = await self.get_academic_history(student_id, with_student=True)
        records = await self._load_semester_records(history)

        result = await self.db.execute(
            select(Enrollment)
            .join(Enrollment.semester)
            .join(Enrollment.course)
            .options(contains_eager(Enrollment.semester), contains_eager(Enrollment.course))
            .where(
                Enrollment.student_id == student_id,
                Enrollment.status == EnrollmentStatus.COMPLETED.value,
                Enrollment.grade.is_not(None),
            )
            .order_by(Semester.academic_year, Semester.semester_number, Course.code)
        )
        enrollments = result.scalars().all()

        student = history.student
        program = student.program if student is not None else None

        return Transcript(
            student_info=StudentInfo(
                id=student_id,
                name=student.full_name if student is not None else "",
                email=student.email if student is not None else None,
                student_number=student.student_number if student is not None else None,
                program=program.name if program is not None else None,
            ),
            academic_info=AcademicInfo(
                admission_year=history.admission_year,
                current_level=history.current_level,
                cumulative_gpa=history.cumulative_gpa,
                total_credits=history.overall_credits_earned,
                academic_standing=history.current_status,
                has_graduated=history.has_graduated,
                graduation_date=history.graduation_date,
            ),
            transcript=build_transcript(enrollments),
            summary=self._summary_block(history, records),
        )

    # Pipeline steps on an already loaded history; also used by
    # SemesterRecordService.finalize_semester_record.

    async def recompute_cumulative(
        self, history: AcademicHistory
    ) -> Union[CumulativeGPAResult, NoFinalizedSemesters]:
        result = await self.db.execute(
            select(SemesterRecord)
            .where(
                SemesterRecord.student_id == history.student_id,
                SemesterRecord.is_finalized.is_(True),
                SemesterRecord.semester_gpa.is_not(None),
            )
            .order_by(SemesterRecord.created_at, SemesterRecord.id)
        )
        records = result.scalars().all()

        outcome = calculate_cumulative_gpa(records)
        if isinstance(outcome, NoFinalizedSemesters):
            logger.info(f"No finalized semesters for student {history.student_id}; cumulative GPA not updated")
            return outcome

        history.cumulative_gpa = outcome.cumulative_gpa
        history.overall_credits_attempted = outcome.total_credits_attempted
        history.overall_credits_earned = outcome.total_credits_earned
        history.total_semesters_completed = outcome.total_semesters_completed
        await self.db.flush()

        logger.info(
            f"Cumulative GPA for student {history.student_id}: {outcome.cumulative_gpa} "
            f"over {outcome.total_semesters_completed} semesters, "
            f"{outcome.total_credits_earned}/{outcome.total_credits_attempted} credits earned/attempted"
        )
        return outcome

    async def apply_level_progression(self, history: AcademicHistory) -> Union[LevelChanged, LevelUnchanged]:
        credits_earned = history.overall_credits_earned or 0
        current_level = history.current_level
        new_level = resolve_level(credits_earned)

        if new_level > current_level:
            history.current_level = new_level
            await self.db.execute(
                update(Student).where(Student.id == history.student_id).values(level=new_level)
            )
            await self.db.flush()

            logger.info(
                f"Student {history.student_id} advanced from level {current_level} to {new_level} "
                f"({credits_earned} credits earned)"
            )
            return LevelChanged(
                previous_level=current_level,
                new_level=new_level,
                credits_earned=credits_earned,
            )

        if new_level < current_level:
            logger.warning(
                f"Student {history.student_id} has {credits_earned} credits earned, which resolves to "
                f"level {new_level} below stored level {current_level}; keeping level {current_level}"
            )

        return LevelUnchanged(
            current_level=current_level,
            credits_earned=credits_earned,
            credits_to_next_level=credits_to_next_level(current_level, credits_earned),
        )

    async def apply_standing(self, history: AcademicHistory) -> AcademicStanding:
        if history.cumulative_gpa is None:
            raise GPANotCalculatedError("Cumulative GPA not calculated yet", student_id=history.student_id)

        standing = determine_academic_standing(history.cumulative_gpa)
        if history.current_status != standing.value:
            logger.info(
                f"Student {history.student_id} status {history.current_status} -> {standing.value} "
                f"(cumulative GPA {history.cumulative_gpa})"
            )
        history.current_status = standing.value
        await self.db.flush()
        return standing

    def _evaluate_eligibility(self, history: AcademicHistory) -> GraduationEligibility:
        student = history.student
        if student is None:
            raise StudentNotFoundError("Student not found", student_id=history.student_id)
        if student.program is None:
            raise ProgramNotFoundError("Student program information not found", student_id=history.student_id)

        return evaluate_graduation_eligibility(
            credits_earned=history.overall_credits_earned or 0,
            cumulative_gpa=history.cumulative_gpa,
            current_level=history.current_level,
            academic_standing=history.current_status,
            required_credits=resolve_required_credits(student.program.credit_hours),
        )

    async def _load_semester_records(self, history: AcademicHistory) -> List[SemesterRecord]:
        result = await self.db.execute(
            select(SemesterRecord)
            .join(SemesterRecord.semester)
            .options(contains_eager(SemesterRecord.semester))
            .where(SemesterRecord.student_id == history.student_id)
            .order_by(Semester.academic_year, Semester.semester_number)
        )
        return list(result.scalars().all())

    def _summary_block(self, history: AcademicHistory, records: List[SemesterRecord]) -> SummaryBlock:
        return SummaryBlock(
            total_semesters=len(records),
            completed_semesters=sum(1 for r in records if r.is_finalized),
            cumulative_gpa=history.cumulative_gpa,
            total_credits=history.overall_credits_earned,
            current_level=history.current_level,
            academic_status=history.current_status,
            has_graduated=history.has_graduated,
        )

    async def _build_summary(self, history: AcademicHistory) -> AcademicSummary:
        records = await self._load_semester_records(history)

        level_progression = await self.apply_level_progression(history)
        eligibility = self._evaluate_eligibility(history)

        semester_records: List[SemesterRecordSummary] = [
            SemesterRecordSummary(
                semester_id=record.semester_id,
                semester_name=record.semester.name,
                academic_year=record.semester.academic_year,
                semester_number=record.semester.semester_number,
                semester_gpa=record.semester_gpa,
                credits_earned=record.credits_earned,
                credits_attempted=record.credits_attempted,
                academic_standing=record.academic_standing,
                is_finalized=record.is_finalized,
            )
            for record in records
        ]

        return AcademicSummary(
            history=AcademicHistoryResponse.model_validate(history),
            semester_records=semester_records,
            level_progression=level_progression,
            graduation_eligibility=eligibility,
            summary=self._summary_block(history, records),
        )

    async def _find_history(
        self, student_id: UUID, with_student: bool = False, for_update: bool = False
    ) -> Optional[AcademicHistory]:
        query = select(AcademicHistory).where(AcademicHistory.student_id == student_id)
        if with_student:
            query = query.options(selectinload(AcademicHistory.student).selectinload(Student.program))
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()
