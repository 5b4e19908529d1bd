# eduassist_analytics/routers/class_analytics.py
import json
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.database import AsyncSessionLocal, get_db
from ..core.exceptions import InvalidRollupRequest, RollupException, SnapshotNotFound
from ..core.locks import lock_manager
from ..schemas.rollup_schemas import ClassAnalyticsResponse, RollupRequest, RollupResponse
from ..services.rollup_service import RollupService
from ..services.snapshot_service import SnapshotService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/class-analytics", tags=["Class Analytics"])


def get_rollup_service() -> RollupService:
    return RollupService(AsyncSessionLocal, settings, lock_manager)


async def _read_rollup_request(request: Request) -> RollupRequest:
    """Parse the optional JSON body. Missing, empty or unparsable bodies mean all scope."""
    raw = await request.body()
    payload = {}
    if raw.strip():
        try:
            payload = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unparsable rollup request body")
    if not isinstance(payload, dict):
        payload = {}

    try:
        return RollupRequest.model_validate(payload)
    except ValidationError as e:
        messages = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise InvalidRollupRequest("; ".join(messages))


@router.post("/rollup", response_model=RollupResponse, response_model_exclude_unset=True)
async def run_class_analytics_rollup(
    request: Request,
    service: RollupService = Depends(get_rollup_service),
):
    """Aggregate raw grades, attendance and fees into per-class snapshots.

    The body is optional; a missing or unparseable body means every school
    and class. Responds 200 with ``{status, processed, detail?}``, 422 with
    ``{error}`` when ``schoolId`` or ``classId`` is not a UUID or ``year`` is
    not an integer, and 500 with ``{error}`` when schools or classes cannot be
    listed. Per-class failures never change the status; pass ``debug`` to see
    them in ``detail``.
    """
    rollup_request = await _read_rollup_request(request)

    try:
        summary = await service.run(rollup_request)
    except RollupException:
        raise
    except Exception as e:
        logger.exception("Class analytics rollup crashed")
        raise RollupException(str(e) or type(e).__name__) from e

    return summary.as_response(debug=rollup_request.debug)


@router.get("/{class_id}", response_model=List[ClassAnalyticsResponse])
async def get_class_analytics(
    class_id: UUID,
    reporting_period: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Stored snapshots for a class, most recently refreshed first"""
    snapshots = await SnapshotService(db).get_for_class(class_id, reporting_period)
    if reporting_period and not snapshots:
        raise SnapshotNotFound(class_id, reporting_period)
    return snapshots
