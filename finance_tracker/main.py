# finance_tracker/main.py
import uvicorn
import os
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from finance_tracker.core.config import settings
from finance_tracker.core.database import engine, Base
from finance_tracker.core.errors import register_exception_handlers
from finance_tracker.core.security import TokenService
from finance_tracker.api.api import api_router
# Register every table on Base.metadata
from finance_tracker.models import user, category, transaction  # noqa: F401

logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)

# Create all tables on startup (development convenience; Alembic owns production schemas)
async def create_db_and_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    openapi_tags=[
        {"name": "Authentication", "description": "Signup, login, logout and profile"},
        {"name": "categories", "description": "User-owned, colour-coded categories"},
        {"name": "transactions", "description": "Income and expense records"},
        {"name": "summary", "description": "Income / expense totals and balance"},
    ],
)

# The signing key is read once; routes receive this instance through a dependency
app.state.token_service = TokenService.from_settings(settings)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# ------------------------------------------------------------
# ROOT ENDPOINT
# ------------------------------------------------------------
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": f"{settings.APP_NAME} is running!",
        "version": settings.VERSION,
    }

# ------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ------------------------------------------------------------
@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "token_signing_configured": app.state.token_service.is_configured,
    }

# ------------------------------------------------------------
# BUSINESS LOGIC ROUTES
# ------------------------------------------------------------
app.include_router(api_router, prefix=settings.API_PREFIX)

# ------------------------------------------------------------
# STARTUP EVENT
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    if not app.state.token_service.is_configured:
        logger.error("SECRET_KEY is not set: signup and login will answer 500 SERVER_CONFIGURATION_ERROR")

    if settings.CREATE_TABLES_ON_STARTUP:
        await create_db_and_tables()
        logger.info("✅ Database tables created successfully")

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("finance_tracker.main:app", host="0.0.0.0", port=port, reload=False)
