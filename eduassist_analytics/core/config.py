# eduassist_analytics/core/config.py
"""Application configuration using Pydantic."""
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    database_url: str
    redis_url: Optional[str] = None

    app_version: str = '1.0.0'
    environment: str = 'development'
    log_level: str = 'info'
    allowed_origins: List[str] = ['*']

    # Rollup worker pool and deadlines
    rollup_concurrency: int = 8
    rollup_class_timeout_seconds: float = 60.0
    rollup_lock_timeout_seconds: float = 120.0
    rollup_schedule_minutes: int = 60

    # Data store deadlines
    db_command_timeout_seconds: float = 30.0
    db_pool_timeout_seconds: float = 30.0

    model_config = {
        'env_file': '.env',
        'extra': 'ignore'
    }

settings = Settings()
