"""API routers for NoteFeed."""

from .auth import router as auth_router
from .feed import router as feed_router
from .health import router as health_router
from .ws import router as ws_router

__all__ = ["auth_router", "feed_router", "health_router", "ws_router"]
