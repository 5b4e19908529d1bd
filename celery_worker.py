import asyncio
import logging

from celery import Celery

from eduassist_analytics.core.config import settings
from eduassist_analytics.jobs import run_standalone_rollup
from eduassist_analytics.schemas.rollup_schemas import RollupRequest

logger = logging.getLogger(__name__)

broker_url = settings.redis_url or "redis://localhost:6379"

# Celery configuration
celery_app = Celery(
    "eduassist_class_analytics",
    broker=broker_url,
    backend=broker_url,
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    beat_schedule={
        "class-analytics-rollup": {
            "task": "class_analytics.rollup",
            "schedule": settings.rollup_schedule_minutes * 60.0,
        },
    },
)


@celery_app.task(name="class_analytics.rollup")
def run_class_analytics_rollup(payload: dict = None) -> dict:
    """Scheduled or queued rollup; payload takes the same fields as the HTTP body."""
    request = RollupRequest.model_validate(payload or {})
    summary = asyncio.run(run_standalone_rollup(request, config=settings))
    logger.info(f"Scheduled rollup processed {summary.processed} classes")
    return summary.as_response(debug=request.debug)
