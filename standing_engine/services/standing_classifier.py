"""
Academic Standing Classifier

Maps a GPA onto a standing tier:
- GOOD_STANDING     GPA >= 2.0
- ACADEMIC_WARNING  GPA >= 1.75
- PROBATION         GPA >= 1.5
- SUSPENDED         below 1.5
"""
from standing_engine.models.enums import AcademicStanding

GOOD_STANDING_MIN_GPA = 2.0
ACADEMIC_WARNING_MIN_GPA = 1.75
PROBATION_MIN_GPA = 1.5


def determine_academic_standing(gpa: float) -> AcademicStanding:
    """
    Determine academic standing for a GPA.

    Args:
        gpa: Semester or cumulative GPA (0.0 - 4.0)

    Returns:
        AcademicStanding tier
    """
    if gpa >= GOOD_STANDING_MIN_GPA:
        return AcademicStanding.GOOD_STANDING
    elif gpa >= ACADEMIC_WARNING_MIN_GPA:
        return AcademicStanding.ACADEMIC_WARNING
    elif gpa >= PROBATION_MIN_GPA:
        return AcademicStanding.PROBATION
    else:
        return AcademicStanding.SUSPENDED


def next_probation_count(standing: AcademicStanding, current_count: int) -> int:
    """Increment the probation counter on PROBATION, reset it on anything else."""
    if standing == AcademicStanding.PROBATION:
        return (current_count or 0) + 1
    return 0
