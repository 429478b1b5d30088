"""FastAPI application setup for the Meteoride ride-safety service."""

from fastapi import FastAPI

from . import __version__
from .api import health_router, router as api_router
from .config import settings
from utils.logging_utils import setup_logging

setup_logging(level=settings.log_level, job_name="meteoride-api")

app = FastAPI(title="Meteoride", version=__version__)

# API routes
app.include_router(api_router, prefix="/v1")
app.include_router(health_router)
