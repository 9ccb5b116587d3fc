"""Trade Journal Analytics: FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import journal
from app.config import settings

logger = logging.getLogger(__name__)

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown logging. Shutdown drops the month calendar cache."""
    logger.info("Journal analytics starting (env=%s)", settings.app_env)
    yield
    journal._calendar.invalidate()
    logger.info("Journal analytics stopped")


app = FastAPI(
    title="Trade Journal Analytics",
    description="Performance statistics and calendar views for trading journals",
    version=APP_VERSION,
    lifespan=lifespan,
)

# CORS: restrict in production, allow localhost in development
_allowed_origins = (
    ["http://localhost:8000", "http://localhost:3000"]
    if settings.app_env == "development"
    else settings.allowed_hosts.split(",")
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Content-Type", "X-API-Key"],
)

app.include_router(journal.router)


@app.get("/api")
async def api_root():
    return {
        "name": "Trade Journal Analytics",
        "version": APP_VERSION,
        "status": "running",
    }
