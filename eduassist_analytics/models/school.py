# eduassist_analytics/models/school.py
"""School (tenant) model definition. Owned by the school management service."""
from sqlalchemy import Column, String, Boolean
from .base import Base

class School(Base):
    __tablename__ = "schools"

    school_code = Column(String(10), unique=True, nullable=True, index=True)
    school_name = Column(String(200), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
