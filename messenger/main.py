"""API entrypoint and composition."""

from pathlib import Path

from fastapi import FastAPI
from starlette.staticfiles import StaticFiles

from messenger.config import get_settings
from messenger.errors import register_exception_handlers
from messenger.logging import configure_logging
from messenger.middleware import install_middlewares
from messenger.routes import health, home
from messenger.routes import infra as infra_routes

configure_logging()


def create_app(*, force_debug: bool | None = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    force_debug:
        - None: use settings.debug.
        - True: enable debug mode.
        - False: force non-debug mode (for 500.html testing).
    """
    # Fresh settings on every app so tests can monkeypatch the environment
    get_settings.cache_clear()
    settings = get_settings()

    debug = settings.debug if force_debug is None else bool(force_debug)
    app = FastAPI(title=settings.app_name, debug=debug)

    static_dir = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    install_middlewares(app)

    app.include_router(health.router)
    app.include_router(home.router)
    app.include_router(infra_routes.router)

    register_exception_handlers(app)

    return app


app = create_app()
