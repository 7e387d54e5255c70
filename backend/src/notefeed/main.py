# Main application entry point
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from . import __version__
from .api import auth_router, feed_router, health_router, ws_router
from .config import get_settings
from .core.exception_handlers import register_exception_handlers
from .core.images import IMAGE_URL_PREFIX
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.redis_client import get_redis_client
from .database import create_tables
from .middleware import RateLimitMiddleware

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(
        "Starting NoteFeed application",
        extra={"version": __version__, "environment": settings.environment, "debug": settings.debug},
    )

    redis_client = get_redis_client()
    try:
        await redis_client.connect()
        logger.info("Redis connection established")
    except Exception as e:
        logger.warning(f"Redis connection failed: {e}. Continuing without cache and rate limiting...")

    # Tests create their own schema on an in-memory engine
    if os.getenv("NOTEFEED_SKIP_LIFESPAN_DB") == "1":
        logger.info("Skipping DB table creation due to NOTEFEED_SKIP_LIFESPAN_DB=1")
    else:
        try:
            await create_tables()
            logger.info("Database tables created/verified")
        except Exception as e:
            logger.error("Failed to create database tables", exc_info=e)
            raise

    yield

    # Shutdown
    logger.info("Shutting down NoteFeed application")
    try:
        await redis_client.disconnect()
        logger.info("Redis connection closed")
    except Exception as e:
        logger.warning(f"Redis disconnect failed: {e}")


app = FastAPI(
    title=settings.app_name,
    description="Multi-user note feed with revision history and live updates",
    version=__version__,
    lifespan=lifespan,
)

register_exception_handlers(app)

app.add_middleware(RateLimitMiddleware)
app.add_middleware(LoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router, prefix="/api")
app.include_router(feed_router, prefix="/api")
app.include_router(ws_router, prefix="/api")
app.include_router(health_router, prefix="/api")

# Uploaded note images
image_dir = Path(settings.image_dir)
image_dir.mkdir(parents=True, exist_ok=True)
app.mount(f"/{IMAGE_URL_PREFIX}", StaticFiles(directory=image_dir), name="images")


# Root endpoint
@app.get("/")
async def root():
    return {"message": "NoteFeed API"}


@app.get("/api/")
async def api_root():
    return {
        "message": "NoteFeed API",
        "version": __version__,
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json",
        },
        "endpoints": {
            "authentication": "/api/auth/",
            "feed": "/api/feed/",
            "live_updates": "/api/ws/notes",
            "health": "/api/health/",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("notefeed.main:app", host=settings.host, port=settings.port, reload=settings.reload)
