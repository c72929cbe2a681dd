"""
Form Relay API

Receives Google Forms submissions and files them as Asana tasks.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from api.config import get_settings
from api.logging_setup import setup_logging
from api.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from api.routers import webhook
from api.services.http_client import close_shared_client

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown."""
    setup_logging(get_settings().log_level)
    yield
    await close_shared_client()


app = FastAPI(
    title="Form Relay API",
    description="Relays form submissions into Asana tasks",
    version="0.1.0",
    lifespan=lifespan,
)

# Request IDs and security headers
app.add_middleware(RequestIDMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
)

# Routers
app.include_router(webhook.router)


def _check_config() -> str:
    """Verify Asana credentials are configured. Returns 'ok' or 'fail'."""
    s = get_settings()
    if s.asana_access_token and s.asana_project_id:
        return "ok"
    return "fail"


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "Google Forms → Asana Integration Server is running! 🚀"


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check reporting whether the service can reach Asana."""
    checks = {"config": _check_config()}
    failed = [k for k, v in checks.items() if v != "ok"]

    if failed:
        overall = "degraded"
        logger.warning("Health check degraded — failed: %s", ", ".join(failed))
    else:
        overall = "ok"

    result: dict[str, Any] = {
        "status": overall,
        "service": "form-relay-api",
        "version": "0.1.0",
        "checks": checks,
    }
    return JSONResponse(content=result, status_code=200)
