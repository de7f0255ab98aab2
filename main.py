import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dayflow.core.config import Base, engine, settings
from dayflow.core.exceptions import register_exception_handlers
from dayflow.api.routers import (
    activities,
    auth,
    calendar,
    insights,
    logs,
    notifications,
    planning,
    report,
)
import dayflow.models  # noqa: F401  registers every table on Base.metadata

# =====================================================================
# LOGGING
# =====================================================================

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("dayflow")

# =====================================================================
# CREATE APP
# =====================================================================

app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    description="Activity, mood and reminder tracking API",
    version="1.0.0",
)

# =====================================================================
# CORS MIDDLEWARE - MUST BE FIRST!
# =====================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=["*"],
)

logger.info(f"CORS allowed origins: {settings.CORS_ORIGINS}")

register_exception_handlers(app)

# =====================================================================
# DATABASE INITIALIZATION
# =====================================================================

Base.metadata.create_all(bind=engine)

# =====================================================================
# HEALTH CHECK (before routers)
# =====================================================================


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# =====================================================================
# ROUTES
# =====================================================================

app.include_router(auth.router)
app.include_router(activities.router)
app.include_router(logs.router)
app.include_router(insights.router)
app.include_router(planning.router)
app.include_router(report.router)
app.include_router(notifications.router)
app.include_router(calendar.router)

logger.info("All routers included")

# =====================================================================
# ROOT ENDPOINT
# =====================================================================


@app.get("/")
def root():
    """API root endpoint."""
    return {
        "message": "Welcome to DayFlow API",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "auth": "/auth",
            "activities": "/activities",
            "logs": "/logs",
            "insights": "/insights",
            "planning": "/planning",
            "report": "/report",
            "notifications": "/settings/notifications",
            "calendar": "/calendar/google",
        },
    }
