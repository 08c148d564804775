# routers/__init__.py

from .access import router as access_router
from .user_roles import router as user_roles_router
from .health import router as health_router

__all__ = ["access_router", "user_roles_router", "health_router"]
