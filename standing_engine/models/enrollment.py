"""Enrollment model - Tracks a student's registration in a course for one semester"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from standing_engine.database import Base


class Enrollment(Base):
    """Student enrollment in a course with its final letter grade"""

    __tablename__ = "enrollments"

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
    course_id = Column(
        UUID(as_uuid=True),
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
    )
    grade = Column(String(5), nullable=True)  # letter grade, NULL until graded
    status = Column(String(20), nullable=False, default="active")  # active/completed/withdrawn/dropped
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    course = relationship("Course")
    semester = relationship("Semester")

    # Indexes for performance
    __table_args__ = (
        Index("idx_enrollments_student_semester", "student_id", "semester_id"),
        Index("idx_enrollments_student_status", "student_id", "status"),
    )

    def __repr__(self):
        return f"<Enrollment(id={self.id}, student={self.student_id}, course={self.course_id}, grade={self.grade})>"
