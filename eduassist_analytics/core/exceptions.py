# eduassist_analytics/core/exceptions.py
"""Custom exceptions for the class analytics rollup."""
from typing import Optional
from uuid import UUID


class RollupException(Exception):
    """Base exception for the rollup job."""
    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ScopeResolutionError(RollupException):
    """Schools or classes could not be enumerated; aborts the whole run."""
    def __init__(self, message: str):
        super().__init__(f"Scope resolution failed: {message}", 500)


class InvalidRollupRequest(RollupException):
    """Request fields have the wrong shape."""
    def __init__(self, message: str):
        super().__init__(message, 422)


class SnapshotNotFound(RollupException):
    def __init__(self, class_id: UUID, reporting_period: Optional[str] = None):
        message = f"No analytics snapshot for class {class_id}"
        if reporting_period:
            message += f" and period {reporting_period}"
        super().__init__(message, 404)


class ClassRollupError(RollupException):
    """One class failed to aggregate or persist. Recorded, never propagated past the run."""
    def __init__(self, class_id: UUID, message: str):
        self.class_id = class_id
        super().__init__(f"Class {class_id}: {message}", 500)


class RollupTimeoutError(ClassRollupError):
    def __init__(self, class_id: UUID, seconds: float):
        super().__init__(class_id, f"timed out after {seconds:g}s")


class ClassLockTimeout(ClassRollupError):
    """Another rollup held the class lock for the whole acquire wait."""
    def __init__(self, class_id: UUID, seconds: float):
        super().__init__(class_id, f"could not acquire class lock within {seconds:g}s")
