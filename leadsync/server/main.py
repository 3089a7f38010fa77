"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers exception handlers and includes all API routers.
It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leadsync.core.database import init_db
from leadsync.core.logging_config import get_logger, setup_logging
from leadsync.core.monitoring import initialize_logfire

from .api.v1 import discovery, health, leads, payments, webhooks
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates the tables on SQLite start-up; other databases are migrated with
    Alembic beforehand.
    """
    try:
        logger.info("Starting up Leadsync Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down Leadsync Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Leadsync Server API

    Lead scoring and discovery for a web agency, plus reconciliation of Stripe
    invoice payments and Square donations through provider webhooks.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(leads.router, prefix=f"{constant.API_V1_STR}/leads")
app.include_router(discovery.router, prefix=f"{constant.API_V1_STR}/discovery")
app.include_router(webhooks.router, prefix=f"{constant.API_V1_STR}/webhooks")
app.include_router(payments.router, prefix=f"{constant.API_V1_STR}/payments")
