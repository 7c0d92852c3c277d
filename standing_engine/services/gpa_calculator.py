"""
GPA Calculator

Grade point table plus the two GPA aggregations:
- Semester GPA from a semester's graded enrollments
- Cumulative GPA from a student's finalized semester records

Both are full recomputations over their inputs. Results are rounded half-up to
2 decimal places (2.525 -> 2.53), matching how registrars round GPAs.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, Optional, Protocol, Tuple, Union

from standing_engine.schemas.academic import (
    CumulativeGPAResult,
    NoFinalizedSemesters,
    NoGradeData,
    SemesterGPAResult,
)

# Letter grade -> grade point
GRADE_POINTS: Dict[str, float] = {
    "A": 4.0,
    "B+": 3.5,
    "B": 3.0,
    "C+": 2.5,
    "C": 2.0,
    "D+": 1.5,
    "D": 1.0,
    "F": 0.0,
    "I": 0.0,  # Incomplete
    "W": 0.0,  # Withdrawn
    "P": 0.0,  # Pass (no points for pass/fail courses)
}

# Minimum grade point for a course's credits to count as earned (D or better)
PASSING_GRADE_POINT = 1.0

GPA_DECIMAL_PLACES = 2


class FinalizedSemesterTotals(Protocol):
    """Anything carrying a semester's stored totals (e.g. a SemesterRecord row)"""
    total_grade_points: float
    credits_attempted: int
    credits_earned: int


def round_half_up(value: float, places: int = GPA_DECIMAL_PLACES) -> float:
    """
    Round to `places` decimals with ROUND_HALF_UP.

    Goes through the shortest decimal repr of the float so that values such
    as 2.525 (stored as 2.52499...) still round up.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def get_grade_point(grade: Optional[str]) -> Optional[float]:
    """
    Look up the grade point for a letter grade.

    Returns None for a missing or unknown grade; callers skip such courses.
    """
    if grade is None:
        return None
    return GRADE_POINTS.get(grade.strip().upper())


def calculate_semester_gpa(
    graded_courses: Iterable[Tuple[Optional[str], int]]
) -> Union[SemesterGPAResult, NoGradeData]:
    """
    Calculate a semester GPA from (letter grade, credit hours) pairs.

    Formula:
        semester_gpa = sum(grade_point * credits) / sum(credits)

    Courses with an unknown grade are excluded entirely. A course adds to
    credits_earned only when its grade point is >= PASSING_GRADE_POINT, so
    F/I/W/P grades are attempted but not earned.

    Args:
        graded_courses: Iterable of (grade, credit_hours)

    Returns:
        SemesterGPAResult, or NoGradeData when no credits were attempted
    """
    total_grade_points = 0.0
    credits_attempted = 0
    credits_earned = 0
    courses_completed = 0

    for grade, credit_hours in graded_courses:
        grade_point = get_grade_point(grade)
        if grade_point is None:
            continue

        credits = credit_hours or 0
        total_grade_points += grade_point * credits
        credits_attempted += credits
        courses_completed += 1

        if grade_point >= PASSING_GRADE_POINT:
            credits_earned += credits

    if credits_attempted == 0:
        return NoGradeData()

    return SemesterGPAResult(
        semester_gpa=round_half_up(total_grade_points / credits_attempted),
        total_grade_points=round_half_up(total_grade_points),
        credits_attempted=credits_attempted,
        credits_earned=credits_earned,
        courses_completed=courses_completed,
    )


def calculate_cumulative_gpa(
    semesters: Iterable[FinalizedSemesterTotals]
) -> Union[CumulativeGPAResult, NoFinalizedSemesters]:
    """
    Roll finalized semester totals up into a cumulative GPA.

    Formula:
        cumulative_gpa = sum(total_grade_points) / sum(credits_attempted)

    Args:
        semesters: Finalized semester records that have a semester GPA

    Returns:
        CumulativeGPAResult, or NoFinalizedSemesters for an empty input.
        cumulative_gpa is None if every semester carries zero attempted credits.
    """
    total_grade_points = 0.0
    total_credits_attempted = 0
    total_credits_earned = 0
    semester_count = 0

    for semester in semesters:
        total_grade_points += semester.total_grade_points or 0.0
        total_credits_attempted += semester.credits_attempted or 0
        total_credits_earned += semester.credits_earned or 0
        semester_count += 1

    if semester_count == 0:
        return NoFinalizedSemesters()

    cumulative_gpa = (
        round_half_up(total_grade_points / total_credits_attempted)
        if total_credits_attempted > 0
        else None
    )

    return CumulativeGPAResult(
        cumulative_gpa=cumulative_gpa,
        total_credits_attempted=total_credits_attempted,
        total_credits_earned=total_credits_earned,
        total_semesters_completed=semester_count,
    )
