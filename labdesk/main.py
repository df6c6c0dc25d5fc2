# labdesk/main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from loguru import logger
import sys
import time
import psutil

from labdesk.core.database import test_connection, init_db, AsyncSessionLocal
from labdesk.core.config import settings
from labdesk.core.rate_limiter import limiter
from labdesk.services.auth_service import get_user_by_email, create_user
from labdesk.models.enums import AppRole

# Routers
from labdesk.api.endpoints import (
    auth as auth_router,
    account as account_router,
    profile as profile_router,
    users as users_router,
    computers as computers_router,
    bookings as bookings_router,
    sessions as sessions_router,
    issues as issues_router,
    software as software_router,
    maintenance as maintenance_router,
    notices as notices_router,
    notifications as notifications_router,
    reminders as reminders_router,
    dashboard as dashboard_router,
    data as data_router,
    jobs as jobs_router,
)

# ------------------------------------------------------------
# LOGURU CONFIGURATION
# ------------------------------------------------------------
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
           "<level>{level}</level> | "
           "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
           "<level>{message}</level>",
    colorize=True,
    backtrace=True,
    diagnose=settings.ENV != "prod",
)

# ------------------------------------------------------------
# FASTAPI APP INIT
# ------------------------------------------------------------
app = FastAPI(
    title="LabDesk Backend",
    version="1.0.0",
    description="Computer lab management: bookings, sessions, issues, maintenance and software tracking.",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

START_TIME = time.time()
DB_STATUS = "Connecting..."


# ------------------------------------------------------------
# METRICS API
# ------------------------------------------------------------
@app.get("/api/metrics", tags=["System"])
async def metrics():
    # 1. System Stats
    uptime_seconds = int(time.time() - START_TIME)
    cpu_usage = psutil.cpu_percent(interval=None)
    ram_usage = psutil.virtual_memory().percent
    try:
        disk_usage = psutil.disk_usage('/').percent
    except OSError:
        disk_usage = 0

    # 2. Database Health & Latency
    db_start = time.time()
    db_latency = 0
    try:
        await test_connection()
        current_db_status = "Connected"
        db_latency = round((time.time() - db_start) * 1000, 2)
    except Exception:
        logger.exception("Metrics DB ping failed")
        current_db_status = "Error"

    return {
        "status": "Online",
        "version": app.version,
        "cpu": cpu_usage,
        "ram": ram_usage,
        "disk": disk_usage,
        "uptime": uptime_seconds,
        "database": current_db_status,
        "db_latency": db_latency,
    }


# ------------------------------------------------------------
# CORS CONFIGURATION
# ------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "*"],
)

# ------------------------------------------------------------
# REGISTER ROUTERS
# ------------------------------------------------------------
app.include_router(auth_router.router)
app.include_router(account_router.router)
app.include_router(profile_router.router)
app.include_router(users_router.router)
app.include_router(computers_router.router)
app.include_router(bookings_router.router)
app.include_router(sessions_router.router)
app.include_router(issues_router.router)
app.include_router(software_router.router)
app.include_router(maintenance_router.router)
app.include_router(notices_router.router)
app.include_router(notifications_router.router)
app.include_router(reminders_router.router)
app.include_router(dashboard_router.router)
app.include_router(data_router.router)
app.include_router(jobs_router.router)


# ------------------------------------------------------------
# APPLICATION STARTUP EVENTS
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    global DB_STATUS
    logger.info("Starting LabDesk Backend...")

    # 1) Database connection test
    try:
        await test_connection()
        DB_STATUS = "Connected"
        logger.success("Database connection established.")
    except Exception:
        DB_STATUS = "Error"
        logger.exception("Startup aborted: Database connection failed.")
        return

    # 2) Initialize database tables
    try:
        await init_db()
        logger.success("Database tables ready.")
    except Exception as e:
        logger.warning(f"Table initialization encountered an issue: {e}")

    # 3) Seed the lab administrator
    if not settings.SUPER_ADMIN_EMAIL or not settings.SUPER_ADMIN_PASSWORD:
        logger.warning("Missing Super Admin credentials in settings.")
    else:
        try:
            async with AsyncSessionLocal() as session:
                existing = await get_user_by_email(session, settings.SUPER_ADMIN_EMAIL)
                if not existing:
                    logger.info(f"Seeding Super Admin: {settings.SUPER_ADMIN_EMAIL}")
                    await create_user(
                        session=session,
                        full_name=settings.SUPER_ADMIN_NAME or "Lab Administrator",
                        email=settings.SUPER_ADMIN_EMAIL,
                        password=settings.SUPER_ADMIN_PASSWORD,
                        role=AppRole.admin,
                    )
                    logger.success("Super Admin created successfully.")
                else:
                    logger.info("Super Admin already exists. Skipping.")
        except Exception:
            logger.exception("Super Admin seeding failed.")

    logger.success("Backend startup completed successfully.")


# ------------------------------------------------------------
# ROOT HEALTH CHECK
# ------------------------------------------------------------
@app.get("/", tags=["System"])
async def root():
    return {
        "status": "ok",
        "service": "LabDesk Backend",
        "version": app.version,
        "database": DB_STATUS,
        "message": "Backend running successfully",
    }
