"""
TimeSafe Assistant — FastAPI entry point.
"""

import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from loguru import logger

from timesafe.config import settings
from timesafe.middleware.error_handler import global_exception_handler
from timesafe.middleware.logging_middleware import logging_middleware
from timesafe.middleware.rate_limit import limiter
from timesafe.services.session_service import store
from timesafe.services.taxonomy import INTENTS, validate_taxonomy

# ── Routes ───────────────────────────────────────────────
from timesafe.routes.chat import router as chat_router
from timesafe.routes.widget import router as widget_router
from timesafe.integrations.twilio_handler import router as twilio_router


# ── Logging ──────────────────────────────────────────────
def configure_logging() -> None:
    logger.remove()
    logger.configure(extra={"request_id": "-"})
    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
            "{extra[request_id]} | <cyan>{name}</cyan> - <level>{message}</level>"
        ),
    )


configure_logging()


# ── Lifespan ─────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    validate_taxonomy()
    logger.info(f"Intent taxonomy loaded: {len(INTENTS)} categories")
    yield
    await app.state.sessions.close_all()
    logger.info("Shutting down, open chat sessions closed")


# ── App ──────────────────────────────────────────────────
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Keyword-driven customer support assistant for TimeSafe delivery",
    lifespan=lifespan,
)

# ── Chat Sessions ────────────────────────────────────────
app.state.sessions = store

# ── Rate Limiter ─────────────────────────────────────────
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# ── CORS ─────────────────────────────────────────────────
origins = settings.CORS_ORIGINS.split(",") if settings.CORS_ORIGINS != "*" else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Custom Middleware ────────────────────────────────────
app.middleware("http")(global_exception_handler)
app.middleware("http")(logging_middleware)

# ── Register Routers ────────────────────────────────────
app.include_router(chat_router)
app.include_router(widget_router)
app.include_router(twilio_router)


# ── Health Check ─────────────────────────────────────────
@app.get("/api/health", tags=["health"])
async def health(request: Request):
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "open_sessions": len(request.app.state.sessions),
    }


# ── Run ──────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "timesafe.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info",
    )
