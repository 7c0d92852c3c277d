"""Groups completed, graded enrollments into per-semester transcript blocks"""
from typing import Dict, Iterable, List, Tuple

from standing_engine.models.enrollment import Enrollment
from standing_engine.schemas.academic import TranscriptCourse, TranscriptSemester


def build_transcript(enrollments: Iterable[Enrollment]) -> List[TranscriptSemester]:
    """
    Group enrollments by (academic year, semester number).

    Enrollments must have `semester` and `course` loaded. Blocks come out in
    chronological order, courses within a block ordered by course code.
    Enrollments without a grade are skipped.
    """
    blocks: Dict[Tuple[str, int], TranscriptSemester] = {}

    for enrollment in enrollments:
        if enrollment.grade is None:
            continue

        semester = enrollment.semester
        key = (semester.academic_year, semester.semester_number)
        if key not in blocks:
            blocks[key] = TranscriptSemester(
                semester_name=semester.name,
                academic_year=semester.academic_year,
                semester_number=semester.semester_number,
                courses=[],
            )

        course = enrollment.course
        blocks[key].courses.append(
            TranscriptCourse(
                course_code=course.code,
                course_name=course.name,
                credits=course.credit_hours,
                grade=enrollment.grade,
                level=course.level,
            )
        )

    transcript = [blocks[key] for key in sorted(blocks)]
    for block in transcript:
        block.courses.sort(key=lambda c: c.course_code)
    return transcript
