"""
Graduation Eligibility Checker

A student may graduate once all three hold:
- credits earned >= program credit requirement (120 when the program sets none)
- cumulative GPA >= 2.0
- current level >= 400
"""
from typing import Optional

from standing_engine.models.enums import AcademicStanding
from standing_engine.schemas.academic import GraduationEligibility

DEFAULT_REQUIRED_CREDITS = 120
MINIMUM_GRADUATION_GPA = 2.0
GRADUATION_LEVEL = 400


def resolve_required_credits(program_credit_hours: Optional[int]) -> int:
    return program_credit_hours or DEFAULT_REQUIRED_CREDITS


def evaluate_graduation_eligibility(
    credits_earned: int,
    cumulative_gpa: Optional[float],
    current_level: int,
    academic_standing: AcademicStanding,
    required_credits: int = DEFAULT_REQUIRED_CREDITS,
) -> GraduationEligibility:
    """
    Evaluate graduation requirements and report the gap to each one.

    A missing cumulative GPA counts as 0.0.

    Returns:
        GraduationEligibility with is_eligible and unmet_requirements
    """
    unmet = []

    if credits_earned < required_credits:
        unmet.append("credits")
    if (cumulative_gpa or 0.0) < MINIMUM_GRADUATION_GPA:
        unmet.append("cumulative_gpa")
    if current_level < GRADUATION_LEVEL:
        unmet.append("level")

    return GraduationEligibility(
        is_eligible=not unmet,
        required_credits=required_credits,
        earned_credits=credits_earned,
        remaining_credits=max(0, required_credits - credits_earned),
        cumulative_gpa=cumulative_gpa,
        current_level=current_level,
        academic_standing=academic_standing,
        unmet_requirements=unmet,
    )
