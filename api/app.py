"""
FastAPI control surface for the candidate scraper.

Health and status reads plus two authenticated triggers (manual and cron).
Triggers answer immediately and run the scrape as a background task.
"""
from __future__ import annotations

import logging
import platform
import sys
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

import psutil
from fastapi import BackgroundTasks, FastAPI, Header, Query, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import Settings, get_settings
from models.scrape_summary import ScrapeSummary
from services.run_tracker import RunTracker

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = ["GET /", "POST /scrape", "GET /status", "GET /cron-trigger"]

RunnerFactory = Callable[[Settings], Callable[[], ScrapeSummary]]


def format_uptime(seconds: float) -> str:
    """Compact uptime like '1d 2h 3m 4s'; zero-valued units are omitted."""
    seconds = int(seconds)
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)
    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _megabytes(value: int) -> str:
    return f"{round(value / 1024 / 1024)}MB"


def _default_runner_factory(settings: Settings) -> Callable[[], ScrapeSummary]:
    from pipelines.scrape_candidates import run_scrape

    return lambda: run_scrape(settings)


def create_app(
    settings: Optional[Settings] = None,
    runner_factory: RunnerFactory = _default_runner_factory,
    tracker: Optional[RunTracker] = None,
) -> FastAPI:
    settings = settings or get_settings()
    tracker = tracker or RunTracker()
    started = time.monotonic()

    app = FastAPI(
        title=settings.service_name,
        version=settings.service_version,
        docs_url=None,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.tracker = tracker

    def uptime() -> float:
        return time.monotonic() - started

    def start_run(trigger: str, background_tasks: BackgroundTasks, message: str) -> Dict[str, Any]:
        if not tracker.try_start(trigger):
            logger.info(f"Scrape already running, ignoring {trigger} trigger")
            return {
                "status": "already_running",
                "message": "A scraper job is already in progress.",
                "timestamp": _now_iso(),
            }
        background_tasks.add_task(tracker.execute, trigger, runner_factory(settings))
        return {"status": "started", "message": message, "timestamp": _now_iso()}

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)

    @app.get("/")
    async def health() -> Dict[str, Any]:
        return {
            "status": "online",
            "service": settings.service_name,
            "version": settings.service_version,
            "uptime": uptime(),
            "timestamp": _now_iso(),
            "endpoints": {
                "health": "GET /",
                "trigger": "POST /scrape (requires x-auth-token header)",
                "cronTrigger": "GET /cron-trigger?secret=XXX",
                "status": "GET /status",
            },
        }

    @app.get("/status")
    async def status() -> Dict[str, Any]:
        memory = psutil.Process().memory_info()
        seconds = uptime()
        return {
            "status": "healthy",
            "uptime": int(seconds),
            "uptimeFormatted": format_uptime(seconds),
            "memory": {"rss": _megabytes(memory.rss), "vms": _megabytes(memory.vms)},
            "environment": {
                "pythonVersion": sys.version.split()[0],
                "platform": platform.system().lower(),
                "storeBackend": settings.store_backend,
                "hasGoogleCredentials": settings.has_google_credentials,
                "hasAirtableCredentials": settings.has_airtable_credentials,
            },
            "run": tracker.snapshot(),
            "timestamp": _now_iso(),
        }

    @app.post("/scrape")
    async def scrape(
        background_tasks: BackgroundTasks,
        x_auth_token: Optional[str] = Header(default=None),
    ):
        if settings.auth_token and x_auth_token != settings.auth_token:
            logger.warning("Unauthorized scrape attempt")
            return JSONResponse(
                status_code=401,
                content={"error": "Unauthorized", "message": "Invalid or missing x-auth-token header"},
            )
        logger.info("Manual scrape triggered via API")
        return start_run("manual", background_tasks, "Scraper job initiated. Check logs for progress.")

    @app.get("/cron-trigger")
    async def cron_trigger(
        background_tasks: BackgroundTasks,
        secret: Optional[str] = Query(default=None),
    ):
        if settings.cron_secret and secret != settings.cron_secret:
            logger.warning("Invalid cron secret attempt")
            return JSONResponse(
                status_code=401,
                content={"error": "Invalid cron secret", "message": "The secret parameter is missing or incorrect"},
            )
        logger.info("Scheduled scrape triggered via cron")
        return start_run("scheduled", background_tasks, "Scheduled scraper job initiated")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code in (404, 405):
            return JSONResponse(
                status_code=404,
                content={
                    "error": "Not found",
                    "message": f"Endpoint {request.method} {request.url.path} not found",
                    "availableEndpoints": AVAILABLE_ENDPOINTS,
                },
            )
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error: {exc} | path={request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(exc), "timestamp": _now_iso()},
        )

    return app
