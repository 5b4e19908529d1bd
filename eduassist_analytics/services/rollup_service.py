# eduassist_analytics/services/rollup_service.py
"""
Class analytics rollup orchestrator.

A run moves through three stages:

1. Scope resolution: pick the schools, then the classes within them. Any
   failure here aborts the run with ``ScopeResolutionError``.
2. Per-class processing: each class is loaded, aggregated and upserted on
   its own session inside a bounded worker pool. A failure or timeout is
   recorded on that class's ``ClassOutcome`` and the run carries on.
3. Run summary: outcomes in scope order, ``processed`` = classes written.
"""
import asyncio
import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .aggregation import RollupParameters, build_class_snapshot
from .snapshot_service import SnapshotService
from .source_service import ClassSourceService, ClassTarget, ScopeService
from ..core.config import Settings, settings as default_settings
from ..core.exceptions import ClassRollupError, RollupTimeoutError, ScopeResolutionError
from ..core.locks import ClassLockManager
from ..schemas.rollup_schemas import RollupRequest

logger = logging.getLogger(__name__)


class OutcomeStatus(str, enum.Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    NOT_ATTEMPTED = "not_attempted"


@dataclass(frozen=True)
class ClassOutcome:
    target: ClassTarget
    status: OutcomeStatus
    reporting_period: Optional[str] = None
    avg_grade: Optional[float] = None
    attendance_rate: Optional[float] = None
    error: Optional[str] = None

    @property
    def attempted(self) -> bool:
        return self.status != OutcomeStatus.NOT_ATTEMPTED

    def as_detail(self) -> Dict[str, Any]:
        return {
            "class_id": str(self.target.class_id),
            "school_id": str(self.target.school_id),
            "status": self.status.value,
            "reporting_period": self.reporting_period,
            "avg_grade": self.avg_grade,
            "attendance": self.attendance_rate,
            "error": self.error,
        }


@dataclass
class RollupSummary:
    outcomes: List[ClassOutcome] = field(default_factory=list)

    def _count(self, *statuses: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status in statuses)

    @property
    def processed(self) -> int:
        return self._count(OutcomeStatus.SUCCEEDED)

    @property
    def failed(self) -> int:
        return self._count(OutcomeStatus.FAILED, OutcomeStatus.TIMED_OUT)

    @property
    def not_attempted(self) -> int:
        return self._count(OutcomeStatus.NOT_ATTEMPTED)

    def as_response(self, debug: bool = False) -> Dict[str, Any]:
        response: Dict[str, Any] = {"status": "ok", "processed": self.processed}
        if debug:
            response["detail"] = [outcome.as_detail() for outcome in self.outcomes]
        return response


class RollupService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        config: Settings = default_settings,
        lock_manager: Optional[ClassLockManager] = None,
    ):
        self.session_factory = session_factory
        self.config = config
        self.lock_manager = lock_manager or ClassLockManager.from_settings(config)

    async def resolve_scope(self, request: RollupRequest) -> List[ClassTarget]:
        try:
            async with self.session_factory() as session:
                return await ScopeService(session).list_class_targets(
                    school_id=request.school_id,
                    class_id=request.class_id,
                )
        except Exception as e:
            logger.error(f"Could not resolve rollup scope: {e}")
            raise ScopeResolutionError(str(e)) from e

    async def run(
        self,
        request: RollupRequest,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> RollupSummary:
        targets = await self.resolve_scope(request)
        params = RollupParameters(period=request.period, term=request.term, year=request.year)
        logger.info(
            f"Class analytics rollup started: {len(targets)} classes "
            f"(school={request.school_id}, class={request.class_id}, period={request.period})"
        )

        workers = asyncio.Semaphore(max(1, self.config.rollup_concurrency))
        tasks: List[asyncio.Task] = []
        try:
            for target in targets:
                await workers.acquire()
                if cancel_event is not None and cancel_event.is_set():
                    workers.release()
                    logger.warning("Rollup cancelled; no further classes will be scheduled")
                    break
                tasks.append(asyncio.create_task(self._run_in_worker(workers, target, params)))
        except asyncio.CancelledError:
            # The run itself was cancelled mid-scheduling: stop the classes already started
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        outcomes = list(await asyncio.gather(*tasks))
        outcomes.extend(
            ClassOutcome(target=target, status=OutcomeStatus.NOT_ATTEMPTED)
            for target in targets[len(tasks):]
        )

        summary = RollupSummary(outcomes=outcomes)
        logger.info(
            f"Class analytics rollup finished: processed={summary.processed} "
            f"failed={summary.failed} not_attempted={summary.not_attempted}"
        )
        return summary

    async def _run_in_worker(
        self,
        workers: asyncio.Semaphore,
        target: ClassTarget,
        params: RollupParameters,
    ) -> ClassOutcome:
        try:
            return await self.process_class(target, params)
        finally:
            workers.release()

    async def process_class(self, target: ClassTarget, params: RollupParameters) -> ClassOutcome:
        """Roll up one class, converting any failure into a recorded outcome."""
        timeout = self.config.rollup_class_timeout_seconds
        try:
            return await asyncio.wait_for(self._rollup_class(target, params), timeout=timeout)
        except asyncio.TimeoutError:
            error = RollupTimeoutError(target.class_id, timeout)
            logger.warning(error.message)
            return ClassOutcome(target=target, status=OutcomeStatus.TIMED_OUT, error=error.message)
        except ClassRollupError as e:
            logger.warning(f"Rollup skipped {e.message}")
            return ClassOutcome(target=target, status=OutcomeStatus.FAILED, error=e.message)
        except Exception as e:
            error = ClassRollupError(target.class_id, f"{type(e).__name__}: {e}")
            logger.warning(f"Rollup skipped {error.message}")
            return ClassOutcome(target=target, status=OutcomeStatus.FAILED, error=error.message)

    async def _rollup_class(self, target: ClassTarget, params: RollupParameters) -> ClassOutcome:
        async with self.lock_manager.hold(target.class_id):
            async with self.session_factory() as session:
                source = await ClassSourceService(session).load(target)
                snapshot = build_class_snapshot(source, params)
                await SnapshotService(session).upsert(snapshot)

        return ClassOutcome(
            target=target,
            status=OutcomeStatus.SUCCEEDED,
            reporting_period=snapshot.reporting_period,
            avg_grade=snapshot.avg_grade,
            attendance_rate=snapshot.attendance_rate,
        )
