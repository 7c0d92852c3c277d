"""AcademicHistory model - A student's lifetime academic record (1:1 with student)"""
from sqlalchemy import (
    Column,
    String,
    Integer,
    Float,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    CheckConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from standing_engine.database import Base
from standing_engine.models.enums import AcademicStanding


class AcademicHistory(Base):
    """Cumulative GPA, credit totals, level and graduation state for one student"""

    __tablename__ = "academic_histories"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(
        UUID(as_uuid=True),
        ForeignKey("students.id", ondelete="RESTRICT"),
        unique=True,
        nullable=False,
    )

    # Admission
    admission_year = Column(String(20), nullable=False)
    admission_semester = Column(Integer, nullable=False, default=1)
    expected_graduation_year = Column(String(20), nullable=True)

    # Progress
    current_level = Column(Integer, nullable=False, default=100)
    current_semester = Column(Integer, nullable=False, default=1)

    # Cumulative statistics (recomputed from finalized semester records)
    cumulative_gpa = Column(
        Float,
        CheckConstraint("cumulative_gpa >= 0 AND cumulative_gpa <= 4"),
        nullable=True,
    )
    overall_credits_attempted = Column(Integer, nullable=False, default=0)
    overall_credits_earned = Column(Integer, nullable=False, default=0)
    total_semesters_completed = Column(Integer, nullable=False, default=0)

    current_status = Column(
        String(30),
        nullable=False,
        default=AcademicStanding.GOOD_STANDING.value,
    )

    # Graduation
    has_graduated = Column(Boolean, nullable=False, default=False)
    graduation_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    student = relationship("Student")

    def __repr__(self):
        return (
            f"<AcademicHistory(student={self.student_id}, level={self.current_level}, "
            f"cgpa={self.cumulative_gpa}, graduated={self.has_graduated})>"
        )
