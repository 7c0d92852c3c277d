"""Semester model - A term within an academic year"""
from sqlalchemy import Column, String, Integer, DateTime, Index, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
import uuid

from standing_engine.database import Base


class Semester(Base):
    """Semester within an academic year, e.g. 2024/2025 semester 1"""

    __tablename__ = "semesters"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    academic_year = Column(String(20), nullable=False)  # year code, e.g. "2024/2025"
    semester_number = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("academic_year", "semester_number", name="uq_semesters_year_number"),
        Index("idx_semesters_year_number", "academic_year", "semester_number"),
    )

    def __repr__(self):
        return f"<Semester(id={self.id}, year={self.academic_year}, number={self.semester_number})>"
