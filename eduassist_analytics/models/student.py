# eduassist_analytics/models/student.py
from sqlalchemy import Column, String, Boolean, ForeignKey, Uuid
from .base import Base

class Student(Base):
    __tablename__ = "students"

    school_id = Column(Uuid(as_uuid=True), ForeignKey("schools.id"), nullable=False, index=True)
    class_id = Column(Uuid(as_uuid=True), ForeignKey("classes.id"), nullable=True, index=True)

    admission_number = Column(String(20))
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
