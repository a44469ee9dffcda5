from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from notesweb.app import App
from notesweb.config import Config
from notesweb.errors import UserError
from notesweb.web.actions import Redirect
from notesweb.web.error_handlers import general_exception_handler, redirect_handler, user_error_handler
from notesweb.web.hooks import session_hook
from notesweb.web.openapi import set_custom_openapi
from notesweb.web.routers import auth_router, notes_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        app.state.app = app_instance
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="Notes Web",
        lifespan=lifespan,
        openapi_tags=[],  # Tags will be added by custom OpenAPI function
    )

    app.middleware("http")(session_hook)

    # Health check endpoint
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    # Auth routes first: the notes router ends with a catch-all /{note_id}
    app.include_router(auth_router)
    app.include_router(notes_router)

    # Register error handlers
    app.add_exception_handler(Redirect, redirect_handler)
    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
