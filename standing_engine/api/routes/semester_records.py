"""
Semester Record API Endpoints

POST /api/v1/semester-records                                           - Create record
GET  /api/v1/semester-records/student/{student_id}                      - List a student's records
GET  /api/v1/semester-records/{student_id}/{semester_id}                - Get record
PUT  /api/v1/semester-records/{student_id}/{semester_id}                - Update statistics
POST /api/v1/semester-records/{student_id}/{semester_id}/calculate-gpa  - Recalculate semester GPA
POST /api/v1/semester-records/{student_id}/{semester_id}/update-standing
POST /api/v1/semester-records/{student_id}/{semester_id}/finalize       - Finalize and refresh history
GET  /api/v1/semester-records/{student_id}/{semester_id}/statistics
"""
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from standing_engine.database import get_db
from standing_engine.schemas.academic import SemesterRecordResponse
from standing_engine.services.semester_record_service import SemesterRecordService

router = APIRouter(prefix="/api/v1/semester-records", tags=["semester-records"])


class CreateSemesterRecordRequest(BaseModel):
    student_id: UUID
    semester_id: UUID
    remarks_from_advisor: Optional[str] = None


class UpdateSemesterRecordRequest(BaseModel):
    """Statistics update; omitted fields are left unchanged"""
    courses_registered: Optional[int] = Field(None, ge=0)
    courses_completed: Optional[int] = Field(None, ge=0)
    courses_failed: Optional[int] = Field(None, ge=0)
    courses_dropped: Optional[int] = Field(None, ge=0)
    courses_in_progress: Optional[int] = Field(None, ge=0)
    credits_attempted: Optional[int] = Field(None, ge=0)
    credits_earned: Optional[int] = Field(None, ge=0)
    remarks_from_advisor: Optional[str] = None


class FinalizeRequest(BaseModel):
    finalized_by: UUID


def _envelope(data: Any) -> Dict[str, Any]:
    return {
        "data": data,
        "metadata": {"timestamp": datetime.utcnow().isoformat()},
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_semester_record(
    request: CreateSemesterRecordRequest,
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    """
    Create an empty semester record.

    Raises:
        404: Student, semester or academic history not found
        409: Record already exists
    """
    record = await SemesterRecordService(db).create_semester_record(
        student_id=request.student_id,
        semester_id=request.semester_id,
        remarks_from_advisor=request.remarks_from_advisor,
    )
    return _envelope(SemesterRecordResponse.model_validate(record))


@router.get("/student/{student_id}")
async def list_semester_records(
    student_id: UUID = Path(..., description="Student UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    records = await SemesterRecordService(db).list_semester_records(student_id)
    return _envelope([SemesterRecordResponse.model_validate(r) for r in records])


@router.get("/{student_id}/{semester_id}")
async def get_semester_record(
    student_id: UUID = Path(..., description="Student UUID"),
    semester_id: UUID = Path(..., description="Semester UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    record = await SemesterRecordService(db).get_semester_record(student_id, semester_id)
    return _envelope(SemesterRecordResponse.model_validate(record))


@router.put("/{student_id}/{semester_id}")
async def update_semester_record(
    request: UpdateSemesterRecordRequest,
    student_id: UUID = Path(..., description="Student UUID"),
    semester_id: UUID = Path(..., description="Semester UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    """
    Update record statistics.

    Raises:
        409: Record is finalized
    """
    record = await SemesterRecordService(db).update_semester_record(
        student_id, semester_id, **request.model_dump(exclude_none=True)
    )
    return _envelope(SemesterRecordResponse.model_validate(record))


@router.post("/{student_id}/{semester_id}/calculate-gpa")
async def calculate_semester_gpa(
    student_id: UUID = Path(..., description="Student UUID"),
    semester_id: UUID = Path(..., description="Semester UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    outcome = await SemesterRecordService(db).calculate_semester_gpa(student_id, semester_id)
    return _envelope(outcome)


@router.post("/{student_id}/{semester_id}/update-standing")
async def update_academic_standing(
    student_id: UUID = Path(..., description="Student UUID"),
    semester_id: UUID = Path(..., description="Semester UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    """
    Classify the semester GPA.

    Raises:
        412: Semester GPA not calculated yet
    """
    record = await SemesterRecordService(db).update_academic_standing(student_id, semester_id)
    return _envelope(SemesterRecordResponse.model_validate(record))


@router.post("/{student_id}/{semester_id}/finalize")
async def finalize_semester_record(
    request: FinalizeRequest,
    student_id: UUID = Path(..., description="Student UUID"),
    semester_id: UUID = Path(..., description="Semester UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    """
    Finalize the semester and refresh cumulative GPA, level and standing.

    Raises:
        409: Already finalized
        412: No graded courses to compute a GPA from
    """
    result = await SemesterRecordService(db).finalize_semester_record(
        student_id, semester_id, request.finalized_by
    )
    return _envelope(result)


@router.get("/{student_id}/{semester_id}/statistics")
async def get_semester_statistics(
    student_id: UUID = Path(..., description="Student UUID"),
    semester_id: UUID = Path(..., description="Semester UUID"),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    statistics = await SemesterRecordService(db).get_semester_statistics(student_id, semester_id)
    return _envelope(statistics)
