# eduassist_analytics/models/fee.py
from sqlalchemy import Column, String, Numeric, ForeignKey, Uuid
from .base import Base
import enum

class FeeStatus(enum.Enum):
    PAID = "paid"
    PARTIAL = "partial"
    UNPAID = "unpaid"

class Fee(Base):
    __tablename__ = "fees"

    school_id = Column(Uuid(as_uuid=True), ForeignKey("schools.id"), nullable=False, index=True)
    class_id = Column(Uuid(as_uuid=True), ForeignKey("classes.id"), nullable=False, index=True)
    student_id = Column(Uuid(as_uuid=True), ForeignKey("students.id"), nullable=True, index=True)

    amount = Column(Numeric(12, 2), nullable=True)
    paid_amount = Column(Numeric(12, 2), nullable=True)
    status = Column(String(20), nullable=False, default=FeeStatus.UNPAID.value)
