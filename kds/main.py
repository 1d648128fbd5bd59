"""
FastAPI Application Entry Point - Kitchen Display Service
"""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from prometheus_fastapi_instrumentator import Instrumentator

from kds.config import settings, setup_logging
from kds.database import init_db
from kds.api import health, items, orders, realtime
from kds.api.errors import register_exception_handlers
from kds.publishers import get_event_publisher, reset_event_publisher

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup"""
    logger.info(f"Starting {settings.SERVICE_NAME}...")
    init_db()
    logger.info(f"✓ Database: {settings.DATABASE_URL}")
    logger.info(f"✓ Event bus: {get_event_publisher().provider_name}")
    logger.info(f"✓ {settings.SERVICE_NAME} is running on port {settings.SERVICE_PORT}")

    yield

    logger.info(f"Shutting down {settings.SERVICE_NAME}...")
    get_event_publisher().close()
    reset_event_publisher()


def create_app() -> FastAPI:
    """Build the application with routers, middleware and error handlers"""
    app = FastAPI(
        title="Kitchen Display Service",
        description="Menu items, table orders and a realtime kitchen feed",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(items.router)
    app.include_router(orders.router)
    app.include_router(realtime.router)

    # Prometheus metrics
    Instrumentator().instrument(app).expose(app)

    # Kitchen display client, mounted last so API routes take precedence
    if os.path.isdir(settings.STATIC_DIR):
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")

    return app


app = create_app()
