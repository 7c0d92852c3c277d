"""Course model - Catalogue course with its credit weight"""
from sqlalchemy import Column, String, Integer, DateTime, CheckConstraint, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
import uuid

from standing_engine.database import Base


class Course(Base):
    """Catalogue course"""

    __tablename__ = "courses"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    code = Column(String(20), unique=True, nullable=False)
    name = Column(String(200), nullable=False)
    credit_hours = Column(
        Integer,
        CheckConstraint("credit_hours >= 0"),
        nullable=False,
    )
    level = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("idx_courses_code", "code"),
    )

    def __repr__(self):
        return f"<Course(id={self.id}, code={self.code}, credits={self.credit_hours})>"
