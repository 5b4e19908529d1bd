from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import time

from .core.config import settings
from .core.database import close_db_connections
from .core.error_handlers import register_error_handlers
from .core.locks import lock_manager
from .core.logging import setup_logging

from .routers import health, class_analytics

setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting EduAssist Class Analytics")

    await lock_manager.connect()

    yield

    logger.info("Shutting down EduAssist Class Analytics")
    await lock_manager.disconnect()
    await close_db_connections()
    logger.info("Shutdown complete")

app = FastAPI(
    title="EduAssist Class Analytics",
    description="Per-class analytics rollup: grades, attendance and fees into dashboard snapshots",
    version=settings.app_version,
    lifespan=lifespan
)

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    logger.info(f"{request.method} {request.url.path} - {process_time:.3f}s")
    return response

# Called from the browser-hosted dashboards
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(class_analytics.router)

@app.get("/")
async def root():
    return {
        "message": "EduAssist Class Analytics",
        "version": settings.app_version,
        "status": "active"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
