"""SemesterRecord model - One student's performance in one semester"""
from sqlalchemy import (
    Column,
    String,
    Integer,
    Float,
    Boolean,
    DateTime,
    Text,
    ForeignKey,
    CheckConstraint,
    Index,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from standing_engine.database import Base
from standing_engine.models.enums import AcademicStanding


class SemesterRecord(Base):
    """
    Per-semester statistics, GPA and standing for a student.

    At most one row per (student, semester). Once is_finalized is set the
    row is frozen.
    """

    __tablename__ = "semester_records"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(
        UUID(as_uuid=True),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
    )
    semester_id = Column(
        UUID(as_uuid=True),
        ForeignKey("semesters.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Course counts
    courses_registered = Column(Integer, nullable=False, default=0)
    courses_completed = Column(Integer, nullable=False, default=0)
    courses_failed = Column(Integer, nullable=False, default=0)
    courses_dropped = Column(Integer, nullable=False, default=0)
    courses_in_progress = Column(Integer, nullable=False, default=0)

    # Credits and GPA
    credits_attempted = Column(Integer, nullable=False, default=0)
    credits_earned = Column(Integer, nullable=False, default=0)
    semester_gpa = Column(
        Float,
        CheckConstraint("semester_gpa >= 0 AND semester_gpa <= 4"),
        nullable=True,
    )
    total_grade_points = Column(Float, nullable=False, default=0.0)

    # Standing
    academic_standing = Column(
        String(30),
        nullable=False,
        default=AcademicStanding.GOOD_STANDING.value,
    )
    is_on_probation = Column(Boolean, nullable=False, default=False)
    probation_count = Column(Integer, nullable=False, default=0)

    # Finalization
    is_finalized = Column(Boolean, nullable=False, default=False)
    finalized_at = Column(DateTime(timezone=True), nullable=True)
    finalized_by = Column(UUID(as_uuid=True), nullable=True)

    remarks_from_advisor = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    semester = relationship("Semester")

    __table_args__ = (
        UniqueConstraint("student_id", "semester_id", name="uq_semester_records_student_semester"),
        Index("idx_semester_records_student_finalized", "student_id", "is_finalized"),
    )

    def __repr__(self):
        return (
            f"<SemesterRecord(id={self.id}, student={self.student_id}, semester={self.semester_id}, "
            f"gpa={self.semester_gpa}, finalized={self.is_finalized})>"
        )
