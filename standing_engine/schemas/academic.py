"""
Academic Result Models

Typed outcomes returned by the calculators and services. "No data yet" cases
are their own variants (NoGradeData, NoFinalizedSemesters) so callers can tell
them apart from a computed value without probing for None.
"""
from datetime import date, datetime
from typing import Annotated, Dict, List, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from standing_engine.models.enums import AcademicStanding


# Semester GPA outcomes


class SemesterGPAResult(BaseModel):
    """GPA computed from at least one credit-bearing graded course"""
    kind: Literal["calculated"] = "calculated"
    semester_gpa: float = Field(..., ge=0, le=4)
    total_grade_points: float = Field(..., ge=0)
    credits_attempted: int = Field(..., gt=0)
    credits_earned: int = Field(..., ge=0)
    courses_completed: int = Field(..., ge=0)


class NoGradeData(BaseModel):
    """No graded, credit-bearing course exists for the semester yet"""
    kind: Literal["no_grade_data"] = "no_grade_data"
    semester_gpa: None = None
    total_grade_points: float = 0.0
    credits_attempted: int = 0
    credits_earned: int = 0
    courses_completed: int = 0


SemesterGPAOutcome = Annotated[Union[SemesterGPAResult, NoGradeData], Field(discriminator="kind")]


# Cumulative GPA outcomes


class CumulativeGPAResult(BaseModel):
    """Lifetime totals over every finalized semester with a GPA"""
    kind: Literal["calculated"] = "calculated"
    cumulative_gpa: Optional[float] = Field(None, ge=0, le=4)
    total_credits_attempted: int = Field(..., ge=0)
    total_credits_earned: int = Field(..., ge=0)
    total_semesters_completed: int = Field(..., gt=0)


class NoFinalizedSemesters(BaseModel):
    """The student has no finalized semester with a GPA yet"""
    kind: Literal["no_finalized_semesters"] = "no_finalized_semesters"
    cumulative_gpa: None = None
    total_credits_attempted: int = 0
    total_credits_earned: int = 0
    total_semesters_completed: int = 0


CumulativeGPAOutcome = Annotated[
    Union[CumulativeGPAResult, NoFinalizedSemesters], Field(discriminator="kind")
]


# Level progression outcomes


class LevelChanged(BaseModel):
    kind: Literal["level_changed"] = "level_changed"
    level_changed: Literal[True] = True
    previous_level: int
    new_level: int
    credits_earned: int


class LevelUnchanged(BaseModel):
    kind: Literal["no_change"] = "no_change"
    level_changed: Literal[False] = False
    current_level: int
    credits_earned: int
    credits_to_next_level: int = Field(..., ge=0)


LevelProgressionOutcome = Annotated[Union[LevelChanged, LevelUnchanged], Field(discriminator="kind")]


# Graduation


class GraduationEligibility(BaseModel):
    """Eligibility verdict plus the gap to every requirement"""
    is_eligible: bool
    required_credits: int
    earned_credits: int
    remaining_credits: int = Field(..., ge=0)
    cumulative_gpa: Optional[float] = None
    current_level: int
    academic_standing: AcademicStanding
    unmet_requirements: List[str] = Field(default_factory=list)


# Persisted rows


class SemesterRecordResponse(BaseModel):
    """Semester record as stored"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    student_id: UUID
    semester_id: UUID
    courses_registered: int
    courses_completed: int
    courses_failed: int
    courses_dropped: int
    courses_in_progress: int
    credits_attempted: int
    credits_earned: int
    semester_gpa: Optional[float] = None
    total_grade_points: float
    academic_standing: AcademicStanding
    is_on_probation: bool
    probation_count: int
    is_finalized: bool
    finalized_at: Optional[datetime] = None
    finalized_by: Optional[UUID] = None
    remarks_from_advisor: Optional[str] = None


class AcademicHistoryResponse(BaseModel):
    """Academic history as stored"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    student_id: UUID
    admission_year: str
    admission_semester: int
    expected_graduation_year: Optional[str] = None
    current_level: int
    current_semester: int
    cumulative_gpa: Optional[float] = None
    overall_credits_attempted: int
    overall_credits_earned: int
    total_semesters_completed: int
    current_status: AcademicStanding
    has_graduated: bool
    graduation_date: Optional[date] = None


class FinalizeResult(BaseModel):
    """Everything the finalize pipeline changed, in pipeline order"""
    record: SemesterRecordResponse
    semester_gpa: SemesterGPAOutcome
    cumulative: CumulativeGPAOutcome
    level_progression: LevelProgressionOutcome
    academic_standing: AcademicStanding


# Statistics


class EnrollmentCourse(BaseModel):
    course_id: UUID
    course_code: str
    course_name: str
    credits: int
    grade: Optional[str] = None
    status: str


class EnrollmentBreakdown(BaseModel):
    total: int
    by_status: Dict[str, int]
    by_grade: Dict[str, int]
    courses: List[EnrollmentCourse]


class SemesterStatistics(BaseModel):
    record: SemesterRecordResponse
    enrollments: EnrollmentBreakdown


# Summary and transcript


class SemesterRecordSummary(BaseModel):
    semester_id: UUID
    semester_name: str
    academic_year: str
    semester_number: int
    semester_gpa: Optional[float] = None
    credits_earned: int
    credits_attempted: int
    academic_standing: AcademicStanding
    is_finalized: bool


class SummaryBlock(BaseModel):
    total_semesters: int
    completed_semesters: int
    cumulative_gpa: Optional[float] = None
    total_credits: int
    current_level: int
    academic_status: AcademicStanding
    has_graduated: bool


class AcademicSummary(BaseModel):
    history: AcademicHistoryResponse
    semester_records: List[SemesterRecordSummary]
    level_progression: LevelProgressionOutcome
    graduation_eligibility: GraduationEligibility
    summary: SummaryBlock


class TranscriptCourse(BaseModel):
    course_code: str
    course_name: str
    credits: int
    grade: str
    level: Optional[int] = None


class TranscriptSemester(BaseModel):
    semester_name: str
    academic_year: str
    semester_number: int
    courses: List[TranscriptCourse]


class StudentInfo(BaseModel):
    id: UUID
    name: str
    email: Optional[str] = None
    student_number: Optional[str] = None
    program: Optional[str] = None


class AcademicInfo(BaseModel):
    admission_year: str
    current_level: int
    cumulative_gpa: Optional[float] = None
    total_credits: int
    academic_standing: AcademicStanding
    has_graduated: bool
    graduation_date: Optional[date] = None


class Transcript(BaseModel):
    student_info: StudentInfo
    academic_info: AcademicInfo
    transcript: List[TranscriptSemester]
    summary: SummaryBlock
