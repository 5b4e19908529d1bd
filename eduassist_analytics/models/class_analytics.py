# eduassist_analytics/models/class_analytics.py
"""Denormalized per-class, per-period snapshot read by the dashboards."""
from sqlalchemy import Column, String, Integer, Float, Numeric, JSON, ForeignKey, Uuid, UniqueConstraint
from .base import Base


class ClassAnalytics(Base):
    __tablename__ = "class_analytics"

    class_id = Column(Uuid(as_uuid=True), ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    school_id = Column(Uuid(as_uuid=True), ForeignKey("schools.id"), nullable=False, index=True)
    reporting_period = Column(String(50), nullable=False)

    term = Column(String(20))
    year = Column(String(10))

    # Grades
    avg_grade = Column(Float)
    prev_avg_grade = Column(Float)
    performance_trend = Column(String(10), nullable=False, default="stable")
    improvement = Column(Float)
    top_students = Column(JSON, nullable=False, default=list)      # [{student_id, avg_grade}], <= 5
    best_subjects = Column(JSON, nullable=False, default=list)     # [{subject_id, avg_score}], <= 2
    weakest_subjects = Column(JSON, nullable=False, default=list)  # [{subject_id, avg_score}], <= 2

    # Attendance
    attendance_rate = Column(Float)
    low_attendance_count = Column(Integer, nullable=False, default=0)

    # Finance
    fee_collection = Column(Numeric(14, 2), nullable=False, default=0)
    outstanding_fees = Column(Numeric(14, 2), nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("class_id", "reporting_period", name="uq_class_analytics_period"),
    )
