"""Kitchen Harmony meal plan service - FastAPI application."""

from __future__ import annotations

import os
import logging as _logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from api import auth_router, mealplan_router, register_error_handlers
from application.mealplan.handlers import MealPlanEventLogger
from application.mealplan.service import MealPlanUpsertService
from domain.mealplan.core.ports.identity_resolver import IIdentityResolver
from domain.mealplan.core.ports.meal_plan_repository import IMealPlanRepository
from domain.user.auth.ports.auth_provider import IAuthProvider
from domain.user.core.ports.user_repository import IUserRepository
from infrastructure.config import (
    get_bool_env,
    get_cors_origins,
    get_identity_scheme,
    get_session_secret,
)
from infrastructure.events.in_memory_bus import InMemoryEventBus
from infrastructure.identity.factory import create_identity_resolver
from infrastructure.persistence.factory import get_meal_plan_repository
from infrastructure.user.auth_middleware import AuthMiddleware
from infrastructure.user.repository_factory import get_user_repository

# --- Basic logging configuration (minimal) ---
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_logging.basicConfig(
    level=getattr(_logging, _LOG_LEVEL, _logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

# Version from env (Docker build ARG -> ENV APP_VERSION)
APP_VERSION = os.getenv("APP_VERSION", "0.0.0-dev")

logger = _logging.getLogger("startup")


async def _ensure_indexes(*repositories: Any) -> None:
    for repository in repositories:
        ensure = getattr(repository, "ensure_indexes", None)
        if ensure is not None:
            await ensure()
            logger.info(
                "lifespan.indexes_ready", extra={"repository": type(repository).__name__}
            )


def create_app(
    auth_provider: Optional[IAuthProvider] = None,
    meal_plan_repository: Optional[IMealPlanRepository] = None,
    user_repository: Optional[IUserRepository] = None,
    identity_resolver: Optional[IIdentityResolver] = None,
) -> FastAPI:
    """Build the application.

    Adapters default to the env-selected singletons; tests pass their own.
    """
    meal_plan_repository = meal_plan_repository or get_meal_plan_repository()
    user_repository = user_repository or get_user_repository()
    identity_resolver = identity_resolver or create_identity_resolver(
        user_repository=user_repository
    )

    event_bus = InMemoryEventBus()
    MealPlanEventLogger().register(event_bus)

    service = MealPlanUpsertService(
        repository=meal_plan_repository,
        identity_resolver=identity_resolver,
        event_bus=event_bus,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> Any:
        logger.info(
            "lifespan.startup",
            extra={
                "version": APP_VERSION,
                "repository": type(meal_plan_repository).__name__,
                "identity_resolver": type(identity_resolver).__name__,
            },
        )
        await _ensure_indexes(meal_plan_repository, user_repository)

        logger.info("lifespan.ready", extra={"status": "serving"})
        yield
        logger.info("lifespan.shutdown", extra={"status": "cleanup"})

    app = FastAPI(
        title="Kitchen Harmony Meal Plan API",
        version=APP_VERSION,
        lifespan=lifespan,
    )
    app.state.meal_plan_service = service
    app.state.user_repository = user_repository
    app.state.event_bus = event_bus

    register_error_handlers(app)
    app.include_router(mealplan_router)
    app.include_router(auth_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/version")
    async def version() -> dict[str, str]:
        return {"version": APP_VERSION}

    if get_bool_env("AUTH_ENABLED", True):
        app.add_middleware(AuthMiddleware, auth_provider=auth_provider)

    session_secret = get_session_secret()
    if session_secret:
        app.add_middleware(SessionMiddleware, secret_key=session_secret)
    elif get_identity_scheme() == "session":
        logger.warning("startup.session_disabled", extra={"reason": "SESSION_SECRET not set"})

    cors_origins = get_cors_origins()
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    return app


app = create_app()
