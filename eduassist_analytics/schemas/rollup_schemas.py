# eduassist_analytics/schemas/rollup_schemas.py
"""Pydantic schemas for the class analytics rollup endpoint."""
from typing import Any, Dict, List, Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RollupRequest(BaseModel):
    """Body of the rollup invocation. Every field is optional; an empty body means all scope."""
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    period: Optional[str] = Field(default=None, max_length=50, description="Explicit reporting period label")
    term: Optional[str] = Field(default=None, max_length=20, description="Term recorded on the snapshot")
    year: Optional[int] = Field(default=None, description="Year recorded on the snapshot")
    school_id: Optional[UUID] = Field(default=None, alias="schoolId", description="Restrict to one school")
    class_id: Optional[UUID] = Field(default=None, alias="classId", description="Restrict to one class")
    debug: bool = Field(default=False, description="Include per-class detail in the response")

    @field_validator('period', 'term', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('year', mode='before')
    @classmethod
    def coerce_year(cls, v):
        if v == "" or v is None:
            return None
        return v


class ClassRollupDetail(BaseModel):
    class_id: UUID
    school_id: UUID
    status: str
    reporting_period: Optional[str] = None
    avg_grade: Optional[float] = None
    attendance: Optional[float] = None
    error: Optional[str] = None


class RollupResponse(BaseModel):
    status: str = "ok"
    processed: int
    detail: Optional[List[ClassRollupDetail]] = None


class ClassAnalyticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    class_id: UUID
    school_id: UUID
    reporting_period: str
    term: Optional[str] = None
    year: Optional[str] = None
    avg_grade: Optional[float] = None
    prev_avg_grade: Optional[float] = None
    performance_trend: str
    improvement: Optional[float] = None
    top_students: List[Dict[str, Any]] = []
    best_subjects: List[Dict[str, Any]] = []
    weakest_subjects: List[Dict[str, Any]] = []
    attendance_rate: Optional[float] = None
    low_attendance_count: int = 0
    fee_collection: Decimal
    outstanding_fees: Decimal
    updated_at: Optional[datetime] = None
