"""Enumerations shared by the academic models"""
from enum import Enum


class AcademicStanding(str, Enum):
    """Standing tier derived from a GPA"""

    GOOD_STANDING = "GOOD_STANDING"
    ACADEMIC_WARNING = "ACADEMIC_WARNING"
    PROBATION = "PROBATION"
    SUSPENDED = "SUSPENDED"


class EnrollmentStatus(str, Enum):
    """Registration status of a course enrollment"""

    ACTIVE = "active"
    COMPLETED = "completed"
    WITHDRAWN = "withdrawn"
    DROPPED = "dropped"
