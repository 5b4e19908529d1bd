# eduassist_analytics/models/__init__.py
"""Import all models here, if needed for Alembic migration."""
from .base import Base

from .school import School
from .class_model import ClassModel
from .student import Student
from .grade import Grade
from .attendance import Attendance, AttendanceStatus
from .fee import Fee, FeeStatus
from .class_analytics import ClassAnalytics

__all__ = [
    "Base",
    "School",
    "ClassModel",
    "Student",
    "Grade",
    "Attendance",
    "AttendanceStatus",
    "Fee",
    "FeeStatus",
    "ClassAnalytics",
]
