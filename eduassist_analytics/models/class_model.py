# eduassist_analytics/models/class_model.py
from sqlalchemy import Column, String, Integer, ForeignKey, Boolean, Uuid
from .base import Base


class ClassModel(Base):
    __tablename__ = "classes"

    school_id = Column(Uuid(as_uuid=True), ForeignKey("schools.id"), nullable=False, index=True)

    class_name = Column(String(50), nullable=False)
    grade_level = Column(Integer)
    section = Column(String(10))
    academic_year = Column(String(10))
    is_active = Column(Boolean, default=True)
