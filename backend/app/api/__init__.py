"""Road Trip API routers."""

from .routes import router

__all__ = ["router"]
