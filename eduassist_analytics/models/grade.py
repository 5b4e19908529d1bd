# eduassist_analytics/models/grade.py
from sqlalchemy import Column, String, Integer, Float, DateTime, ForeignKey, Uuid, func
from .base import Base

class Grade(Base):
    __tablename__ = "grades"

    # Foreign Keys
    school_id = Column(Uuid(as_uuid=True), ForeignKey("schools.id"), nullable=False, index=True)
    class_id = Column(Uuid(as_uuid=True), ForeignKey("classes.id"), nullable=False, index=True)
    student_id = Column(Uuid(as_uuid=True), ForeignKey("students.id"), nullable=False, index=True)
    subject_id = Column(Uuid(as_uuid=True), nullable=True, index=True)

    # Grade Details
    score = Column(Float, nullable=True)
    max_score = Column(Float, nullable=True)
    term = Column(String(20), nullable=True)  # "Term 1", "Term 2", ...
    year = Column(Integer, nullable=True)
    recorded_at = Column(DateTime(timezone=True), server_default=func.now())
