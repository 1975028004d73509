"""REST API routers."""

from .auth import router as auth_router
from .errors import register_error_handlers
from .mealplan import router as mealplan_router

__all__ = ["auth_router", "mealplan_router", "register_error_handlers"]
