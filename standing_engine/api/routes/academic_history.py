"""
Academic History API Endpoints

POST /api/v1/academic-history                                  - Create history for a newly admitted student
GET  /api/v1/academic-history/{student_id}                     - Get history
POST /api/v1/academic-history/{student_id}/update-gpa          - Recompute cumulative GPA
GET  /api/v1/academic-history/{student_id}/level-progression   - Resolve level from credits earned
POST /api/v1/academic-history/{student_id}/update-standing     - Classify cumulative GPA
PUT  /api/v1/academic-history/{student_id}/current-semester    - Set current semester number
GET  /api/v1/academic-history/{student_id}/graduation-eligibility
POST /api/v1/academic-history/{student_id}/graduate            - Mark as graduated
GET  /api/v1/academic-history/{student_id}/summary
GET  /api/v1/academic-history/{student_id}/transcript

Domain errors propagate to the handlers registered in main.py.
"""
from datetime import date, datetime
from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from standing_engine.database import get_db
from standing_engine.schemas.academic import AcademicHistoryResponse
from standing_engine.services.academic_history_service import AcademicHistoryService

router = APIRouter(prefix="/api/v1/academic-history", tags=["academic-history"])


class CreateAcademicHistoryRequest(BaseModel):
    """Request body for creating an academic history"""
    student_id: UUID
    admission_year: str = Field(..., min_length=1, max_length=20)
    admission_semester: int = Field(1, ge=1)
    expected_graduation_year: Optional[str] = Field(None, max_length=20)


class CurrentSemesterRequest(BaseModel):
    semester_number: int


class GraduateRequest(BaseModel):
    graduation_date: date


def _envelope(data: Any) -> Dict[str, Any]:
    return {
        "data": data,
        "metadata": {"timestamp": datetime.utcnow().isoformat()},
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_academic_history(
    request: CreateAcademicHistoryRequest,
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    """
    Create the academic history for a student.

    Raises:
        404: Student not found
        409: History already exists
    """
    history = await AcademicHistoryService(db).create_academic_history(
        student_id=request.student_id,
        admission_year=request.admission_year,
        admission_semester=request.admission_semester,
        expected_graduation_year=request.expected_graduation_year,
    )
    return _envelope(AcademicHistoryResponse.model_validate(history))


@router.get("/{student_id}")
async def get_academic_history(
    student_id: UUID = Path(..., description="Student UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    history = await AcademicHistoryService(db).get_academic_history(student_id)
    return _envelope(AcademicHistoryResponse.model_validate(history))


@router.post("/{student_id}/update-gpa")
async def update_cumulative_gpa(
    student_id: UUID = Path(..., description="Student UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    """Recompute cumulative GPA from all finalized semesters."""
    outcome = await AcademicHistoryService(db).update_cumulative_gpa(student_id)
    return _envelope(outcome)


@router.get("/{student_id}/level-progression")
async def check_level_progression(
    student_id: UUID = Path(..., description="Student UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    outcome = await AcademicHistoryService(db).check_level_progression(student_id)
    return _envelope(outcome)


@router.post("/{student_id}/update-standing")
async def update_academic_standing(
    student_id: UUID = Path(..., description="Student UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    """
    Classify the cumulative GPA into the student's current status.

    Raises:
        412: Cumulative GPA not calculated yet
    """
    history = await AcademicHistoryService(db).update_academic_standing(student_id)
    return _envelope(AcademicHistoryResponse.model_validate(history))


@router.put("/{student_id}/current-semester")
async def update_current_semester(
    request: CurrentSemesterRequest,
    student_id: UUID = Path(..., description="Student UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    history = await AcademicHistoryService(db).update_current_semester(student_id, request.semester_number)
    return _envelope(AcademicHistoryResponse.model_validate(history))


@router.get("/{student_id}/graduation-eligibility")
async def check_graduation_eligibility(
    student_id: UUID = Path(..., description="Student UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    eligibility = await AcademicHistoryService(db).check_graduation_eligibility(student_id)
    return _envelope(eligibility)


@router.post("/{student_id}/graduate")
async def mark_as_graduated(
    request: GraduateRequest,
    student_id: UUID = Path(..., description="Student UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    """
    Mark the student as graduated.

    Raises:
        412: Graduation requirements not met
    """
    history = await AcademicHistoryService(db).mark_as_graduated(student_id, request.graduation_date)
    return _envelope(AcademicHistoryResponse.model_validate(history))


@router.get("/{student_id}/summary")
async def get_academic_summary(
    student_id: UUID = Path(..., description="Student UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    summary = await AcademicHistoryService(db).get_academic_summary(student_id)
    return _envelope(summary)


@router.get("/{student_id}/transcript")
async def get_transcript(
    student_id: UUID = Path(..., description="Student UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    transcript = await AcademicHistoryService(db).get_transcript(student_id)
    return _envelope(transcript)
