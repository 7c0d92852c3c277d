"""Program model - Degree program and its credit requirement"""
from sqlalchemy import Column, String, Integer, DateTime, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
import uuid

from standing_engine.database import Base


class Program(Base):
    """Degree program owned by the curriculum subsystem (read-only here)"""

    __tablename__ = "programs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    code = Column(String(20), unique=True, nullable=False)
    name = Column(String(200), nullable=False)
    # Total credit hours required to graduate; NULL means the default of 120
    credit_hours = Column(
        Integer,
        CheckConstraint("credit_hours > 0"),
        nullable=True,
    )
    duration_years = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self):
        return f"<Program(id={self.id}, code={self.code}, credit_hours={self.credit_hours})>"
