"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hololearn.config import get_settings
from hololearn.routers import tutor

logging.basicConfig(
    format="%(message)s",
    level=getattr(logging, get_settings().log_level.upper(), logging.INFO),
)

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Load the default lesson when the application starts."""
    settings = get_settings()
    services = tutor.get_services(settings)
    logger.info(
        "application_started",
        version="1.0.0",
        cors_origins=settings.cors_origins,
        topics=[topic.id for topic in services.registry.list()],
        local_mode=settings.local_mode,
    )
    if settings.default_topic:
        await services.session.load_topic(settings.default_topic)
    yield
    logger.info("application_shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="HoloLearn Tutor API",
        description=(
            "Interactive 3D lessons: pick a topic or ask a question and the tutor "
            "narrates an explanation, drives the 3D scene and quizzes you."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(tutor.router)

    return app


# Create app instance
app = create_app()


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "HoloLearn Tutor API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
        "topics": "/api/v1/topics",
    }
