"""
redtask HTTP API - the same task/project operations as the CLI.

Usage:
    uvicorn redtask.main:app
"""

from fastapi import FastAPI
from contextlib import asynccontextmanager

from redtask import __version__
from redtask.config import get_settings
from redtask.routes import tasks, projects
from redtask.exceptions import register_exception_handlers
from redtask.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logger.info(f"Starting redtask API (store={get_settings().redis_url})")
    yield
    logger.info("Shutting down redtask API...")


app = FastAPI(
    title="redtask",
    description="Personal task tracker backed by a Redis keyspace",
    version=__version__,
    lifespan=lifespan,
)

# Register custom exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(projects.router, prefix="/projects", tags=["Projects"])
app.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
